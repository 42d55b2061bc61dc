"""Password hashing helpers."""

import asyncio
from dataclasses import dataclass
from typing import Protocol

import bcrypt


class PasswordHasher(Protocol):
    """Interface for hashing and checking passwords."""

    async def hash(self, password: str) -> str:
        """Return a salted hash for a password."""

    async def verify(self, password: str, password_hash: str) -> bool:
        """Return True when the password matches the stored hash."""


@dataclass
class BcryptPasswordHasher(PasswordHasher):
    """bcrypt hasher; the CPU-bound work runs off the event loop."""

    rounds: int = 12

    async def hash(self, password: str) -> str:
        """Hash a password using bcrypt with a fresh salt."""
        hashed = await asyncio.to_thread(
            bcrypt.hashpw, password.encode("utf-8"), bcrypt.gensalt(self.rounds)
        )
        return hashed.decode("utf-8")

    async def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a bcrypt hash."""
        try:
            return await asyncio.to_thread(
                bcrypt.checkpw, password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except ValueError:
            return False
