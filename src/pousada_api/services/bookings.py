"""Booking engine: reservation CRUD and date-conflict detection.

The reservation store has no cross-key transactions, so the overlap check and
the insert that follows it are serialized through a single writer lock held by
this service. Every booking creation in the process goes through that lock;
deployments running several worker processes additionally need the store to
reject overlapping rows (see ``SupabaseBookingRepository``).
"""

import asyncio
import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Protocol
from uuid import UUID, uuid4

from pousada_api.domain.bookings import (
    BookingListing,
    BookingRecord,
    OccupiedRange,
    OwnerContact,
    first_colliding_date,
)
from pousada_api.domain.models import Identity
from pousada_api.errors import DateConflict, InvalidRange, NotFound
from pousada_api.services.accounts import AccountRepository

logger = logging.getLogger(__name__)


class BookingRepository(Protocol):
    """Persistence interface for the reservation store."""

    async def list_bookings(self) -> list[BookingRecord]:
        """Return every booking."""

    async def list_bookings_for_owner(
        self, owner_account_id: UUID
    ) -> list[BookingRecord]:
        """Return the bookings owned by an account."""

    async def get_booking(self, booking_id: UUID) -> BookingRecord | None:
        """Return a booking by id, if present."""

    async def insert_booking(self, booking: BookingRecord) -> BookingRecord:
        """Insert a new booking; fails if the id is already taken."""

    async def update_booking(self, booking: BookingRecord) -> BookingRecord:
        """Overwrite an existing booking and return it."""

    async def delete_booking(self, booking_id: UUID) -> None:
        """Remove a booking."""


@dataclass(frozen=True)
class BookingPatch:
    """Mutable booking fields supplied by an admin edit."""

    start_date: date | None = None
    end_date: date | None = None
    description: str | None = None
    option_selections: dict[str, bool] | None = None


@dataclass
class BookingService:
    """Application service for reservations."""

    repository: BookingRepository
    account_repository: AccountRepository
    _write_lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    async def list_bookings(self, identity: Identity) -> list[BookingListing]:
        """Return all bookings for admins, or the caller's own otherwise."""
        if not identity.is_admin:
            own = await self.repository.list_bookings_for_owner(identity.account_id)
            return [BookingListing(booking=booking) for booking in _ordered(own)]

        bookings = await self.repository.list_bookings()
        contacts = {
            account.id: OwnerContact(
                email=account.email, phone_number=account.phone_number
            )
            for account in await self.account_repository.list_accounts()
        }
        return [
            BookingListing(
                booking=booking, owner=contacts.get(booking.owner_account_id)
            )
            for booking in _ordered(bookings)
        ]

    async def list_occupied_ranges(self) -> list[OccupiedRange]:
        """Return every held date range, without ids or owner details."""
        bookings = await self.repository.list_bookings()
        return [
            OccupiedRange(start_date=booking.start_date, end_date=booking.end_date)
            for booking in _ordered(bookings)
        ]

    async def create_booking(
        self,
        identity: Identity,
        start_date: date,
        end_date: date,
        description: str,
        option_selections: dict[str, bool],
    ) -> BookingRecord:
        """Store a new booking unless it overlaps an existing one."""
        if start_date >= end_date:
            raise InvalidRange()

        candidate = BookingRecord(
            id=uuid4(),
            owner_account_id=identity.account_id,
            start_date=start_date,
            end_date=end_date,
            description=description,
            option_selections=dict(option_selections),
        )
        async with self._write_lock:
            existing = await self.repository.list_bookings()
            colliding = first_colliding_date(start_date, end_date, existing)
            if colliding is not None:
                logger.warning(
                    "Booking rejected due to date conflict",
                    extra={
                        "account_id": str(identity.account_id),
                        "colliding_date": colliding.isoformat(),
                    },
                )
                raise DateConflict(colliding)
            stored = await self.repository.insert_booking(candidate)

        logger.info(
            "Booking created",
            extra={
                "booking_id": str(stored.id),
                "account_id": str(identity.account_id),
            },
        )
        return stored

    async def update_booking(
        self, booking_id: UUID, patch: BookingPatch
    ) -> BookingRecord:
        """Merge an admin edit into a booking.

        Overlap with other bookings is not re-checked here: admins may
        deliberately double-book. The merged range must still be valid.
        """
        current = await self.repository.get_booking(booking_id)
        if current is None:
            raise NotFound("Booking not found")

        updated = replace(
            current,
            start_date=patch.start_date or current.start_date,
            end_date=patch.end_date or current.end_date,
            description=(
                patch.description
                if patch.description is not None
                else current.description
            ),
            option_selections=(
                dict(patch.option_selections)
                if patch.option_selections is not None
                else current.option_selections
            ),
        )
        if updated.start_date >= updated.end_date:
            raise InvalidRange()
        return await self.repository.update_booking(updated)

    async def delete_booking(self, booking_id: UUID) -> None:
        """Remove a booking by id."""
        if await self.repository.get_booking(booking_id) is None:
            raise NotFound("Booking not found")
        await self.repository.delete_booking(booking_id)
        logger.info("Booking deleted", extra={"booking_id": str(booking_id)})


def _ordered(bookings: list[BookingRecord]) -> list[BookingRecord]:
    return sorted(bookings, key=lambda booking: (booking.start_date, str(booking.id)))
