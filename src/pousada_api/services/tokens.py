"""Bearer token issuing and verification.

Tokens are HS256 JWTs carrying the account email (``sub``), account id
(``uid``), role and expiry. They are never stored server-side: the role claim
stays authoritative for the token's lifetime, so a role change only takes
effect once the caller's current token expires and a new one is issued.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

import jwt
from pydantic import SecretStr

from pousada_api.domain.models import Identity, Role

_ALGORITHM = "HS256"
_DECODE_OPTIONS = {
    "require": ["sub", "uid", "role", "exp"],
    "verify_exp": False,
    "verify_iat": False,
}


class InvalidToken(Exception):
    """Raised when a token is malformed, tampered with or expired."""


@dataclass(frozen=True)
class TokenClaims:
    """Verified token claims."""

    subject: str
    account_id: UUID
    role: Role
    expires_at: int

    def to_identity(self) -> Identity:
        """Return the request identity described by these claims."""
        return Identity(account_id=self.account_id, email=self.subject, role=self.role)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class TokenService:
    """Signs and verifies expiring bearer tokens with a process-wide secret."""

    secret: SecretStr
    ttl_seconds: int = 3600
    clock: Callable[[], datetime] = field(default=_utc_now)

    def issue(self, subject: str, role: Role, account_id: UUID) -> str:
        """Return a signed token expiring ``ttl_seconds`` from now."""
        issued_at = int(self.clock().timestamp())
        payload = {
            "sub": subject,
            "uid": str(account_id),
            "role": role.value,
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }
        return jwt.encode(payload, self.secret.get_secret_value(), algorithm=_ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        """Return the claims of a valid token or raise ``InvalidToken``.

        A token is expired from the second named by its ``exp`` claim onward.
        Expiry is checked against this service's clock rather than PyJWT's.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret.get_secret_value(),
                algorithms=[_ALGORITHM],
                options=_DECODE_OPTIONS,
            )
        except jwt.InvalidTokenError as exc:
            raise InvalidToken(str(exc)) from exc

        try:
            expires_at = int(payload["exp"])
            claims = TokenClaims(
                subject=str(payload["sub"]),
                account_id=UUID(str(payload["uid"])),
                role=Role(payload["role"]),
                expires_at=expires_at,
            )
        except (TypeError, ValueError) as exc:
            raise InvalidToken("Malformed token claims") from exc

        if int(self.clock().timestamp()) >= claims.expires_at:
            raise InvalidToken("Token has expired")
        return claims
