"""Domain models for accounts and request identities."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


class Role(StrEnum):
    """Permission level of an account."""

    GUEST = "cliente"
    ADMIN = "admin"


@dataclass(frozen=True)
class AccountRecord:
    """Represents an account stored in the credential store."""

    id: UUID
    email: str
    password_hash: str
    role: Role
    phone_number: str | None = None


@dataclass(frozen=True)
class Identity:
    """Verified caller identity attached to a request."""

    account_id: UUID
    email: str
    role: Role

    @property
    def is_admin(self) -> bool:
        """Return True when the caller holds the admin role."""
        match self.role:
            case Role.ADMIN:
                return True
            case Role.GUEST:
                return False
