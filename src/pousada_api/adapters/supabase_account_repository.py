"""Supabase-backed credential store."""

from dataclasses import dataclass
from uuid import UUID

from supabase import AsyncClient

from pousada_api.adapters.supabase_errors import UNIQUE_VIOLATION, run_query
from pousada_api.domain.models import AccountRecord, Role
from pousada_api.errors import DuplicateAccount, StorageFailure
from pousada_api.services.accounts import AccountRepository

_COLUMNS = "id, email, password_hash, role, phone_number"


@dataclass
class SupabaseAccountRepository(AccountRepository):
    """Supabase implementation for account persistence."""

    client: AsyncClient

    async def get_by_email(self, email: str) -> AccountRecord | None:
        """Return the account for an email, if present."""
        response = await run_query(
            "get_account",
            self.client.table("profiles")
            .select(_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute(),
        )
        if not response.data:
            return None
        return _to_account(response.data[0])

    async def create_account(self, account: AccountRecord) -> AccountRecord:
        """Insert an account row; the email column is unique."""
        response = await run_query(
            "create_account",
            self.client.table("profiles")
            .insert(
                {
                    "id": str(account.id),
                    "email": account.email,
                    "password_hash": account.password_hash,
                    "role": account.role.value,
                    "phone_number": account.phone_number,
                }
            )
            .execute(),
            constraint_errors={UNIQUE_VIOLATION: DuplicateAccount()},
        )
        if not response.data:
            raise StorageFailure("Failed to create account")
        return _to_account(response.data[0])

    async def list_accounts(self) -> list[AccountRecord]:
        """Return all accounts ordered by email."""
        response = await run_query(
            "list_accounts",
            self.client.table("profiles").select(_COLUMNS).order("email").execute(),
        )
        return [_to_account(row) for row in response.data or []]

    async def update_phone_number(
        self, account_id: UUID, phone_number: str
    ) -> AccountRecord | None:
        """Update the contact phone for an account."""
        response = await run_query(
            "update_phone_number",
            self.client.table("profiles")
            .update({"phone_number": phone_number})
            .eq("id", str(account_id))
            .execute(),
        )
        if not response.data:
            return None
        return _to_account(response.data[0])


def _to_account(row: dict[str, object]) -> AccountRecord:
    return AccountRecord(
        id=UUID(str(row["id"])),
        email=str(row["email"]),
        password_hash=str(row["password_hash"]),
        role=Role(row["role"]),
        phone_number=row.get("phone_number"),
    )
