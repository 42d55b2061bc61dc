"""Account signup, login and profile management."""

import logging
import re
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID, uuid4

from pousada_api.domain.models import AccountRecord, Identity, Role
from pousada_api.errors import (
    DuplicateAccount,
    NotFound,
    Unauthenticated,
    ValidationError,
)
from pousada_api.services.passwords import PasswordHasher
from pousada_api.services.tokens import TokenService

logger = logging.getLogger(__name__)

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_PHONE_PATTERN = re.compile(r"^\(\d{2}\)\s\d{5}-\d{4}$")
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72


class AccountRepository(Protocol):
    """Persistence interface for the credential store."""

    async def get_by_email(self, email: str) -> AccountRecord | None:
        """Return the account for an email, if present."""

    async def create_account(self, account: AccountRecord) -> AccountRecord:
        """Insert an account, raising ``DuplicateAccount`` if the email exists."""

    async def list_accounts(self) -> list[AccountRecord]:
        """Return all accounts."""

    async def update_phone_number(
        self, account_id: UUID, phone_number: str
    ) -> AccountRecord | None:
        """Update an account's contact phone and return it, if present."""


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful signup or login."""

    token: str
    account: AccountRecord


@dataclass
class AccountService:
    """Application service for account lifecycle actions."""

    repository: AccountRepository
    password_hasher: PasswordHasher
    token_service: TokenService

    async def signup(self, email: str, password: str) -> AuthResult:
        """Create a guest account and return a token for it."""
        email = email.strip()
        _validate_credentials(email, password)
        if await self.repository.get_by_email(email) is not None:
            raise DuplicateAccount()

        account = await self.repository.create_account(
            AccountRecord(
                id=uuid4(),
                email=email,
                password_hash=await self.password_hasher.hash(password),
                role=Role.GUEST,
            )
        )
        logger.info("Account created", extra={"account_id": str(account.id)})
        return AuthResult(token=self._issue(account), account=account)

    async def login(self, email: str, password: str) -> AuthResult:
        """Check credentials and return a fresh token."""
        account = await self.repository.get_by_email(email.strip())
        if account is None or not await self.password_hasher.verify(
            password, account.password_hash
        ):
            raise Unauthenticated("Invalid email or password")
        return AuthResult(token=self._issue(account), account=account)

    async def list_accounts(self) -> list[AccountRecord]:
        """Return every account."""
        return await self.repository.list_accounts()

    async def update_profile(
        self, identity: Identity, phone_number: str
    ) -> AccountRecord:
        """Update the caller's own contact phone."""
        phone_number = phone_number.strip()
        if not _PHONE_PATTERN.match(phone_number):
            raise ValidationError("Phone number must match (xx) xxxxx-xxxx")
        account = await self.repository.update_phone_number(
            identity.account_id, phone_number
        )
        if account is None:
            raise NotFound("Account not found")
        return account

    def _issue(self, account: AccountRecord) -> str:
        return self.token_service.issue(account.email, account.role, account.id)


def _validate_credentials(email: str, password: str) -> None:
    if not _EMAIL_PATTERN.match(email):
        raise ValidationError("A valid email is required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes long"
        )
