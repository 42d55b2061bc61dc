"""Supabase-backed reservation store.

If the ``bookings`` table carries an exclusion constraint over
``daterange(start_date, end_date)``, overlapping inserts from other processes
are rejected by Postgres and surface here as ``DateConflict``.
"""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import AsyncClient

from pousada_api.adapters.supabase_errors import (
    EXCLUSION_VIOLATION,
    UNIQUE_VIOLATION,
    run_query,
)
from pousada_api.domain.bookings import BookingRecord
from pousada_api.errors import Conflict, DateConflict, NotFound, StorageFailure
from pousada_api.services.bookings import BookingRepository

_COLUMNS = (
    "id, owner_account_id, start_date, end_date, description, option_selections"
)


@dataclass
class SupabaseBookingRepository(BookingRepository):
    """Supabase implementation for booking persistence."""

    client: AsyncClient

    async def list_bookings(self) -> list[BookingRecord]:
        """Return every booking ordered by start date."""
        response = await run_query(
            "list_bookings",
            self.client.table("bookings")
            .select(_COLUMNS)
            .order("start_date")
            .execute(),
        )
        return [_to_booking(row) for row in response.data or []]

    async def list_bookings_for_owner(
        self, owner_account_id: UUID
    ) -> list[BookingRecord]:
        """Return the bookings owned by an account."""
        response = await run_query(
            "list_owner_bookings",
            self.client.table("bookings")
            .select(_COLUMNS)
            .eq("owner_account_id", str(owner_account_id))
            .order("start_date")
            .execute(),
        )
        return [_to_booking(row) for row in response.data or []]

    async def get_booking(self, booking_id: UUID) -> BookingRecord | None:
        """Return a booking by id, if present."""
        response = await run_query(
            "get_booking",
            self.client.table("bookings")
            .select(_COLUMNS)
            .eq("id", str(booking_id))
            .limit(1)
            .execute(),
        )
        if not response.data:
            return None
        return _to_booking(response.data[0])

    async def insert_booking(self, booking: BookingRecord) -> BookingRecord:
        """Insert a booking; a taken id or an overlapping range is rejected."""
        response = await run_query(
            "insert_booking",
            self.client.table("bookings").insert(_to_row(booking)).execute(),
            constraint_errors={
                UNIQUE_VIOLATION: Conflict("Booking id already exists"),
                EXCLUSION_VIOLATION: DateConflict(),
            },
        )
        if not response.data:
            raise StorageFailure("Failed to create booking")
        return _to_booking(response.data[0])

    async def update_booking(self, booking: BookingRecord) -> BookingRecord:
        """Overwrite the mutable fields of a booking.

        The service lets admins move a booking onto occupied dates, but an
        exclusion constraint on the table still wins: its violation surfaces
        as ``DateConflict`` rather than a storage failure.
        """
        row = _to_row(booking)
        row.pop("id")
        row.pop("owner_account_id")
        response = await run_query(
            "update_booking",
            self.client.table("bookings")
            .update(row)
            .eq("id", str(booking.id))
            .execute(),
            constraint_errors={EXCLUSION_VIOLATION: DateConflict()},
        )
        if not response.data:
            raise NotFound("Booking not found")
        return _to_booking(response.data[0])

    async def delete_booking(self, booking_id: UUID) -> None:
        """Delete a booking row."""
        await run_query(
            "delete_booking",
            self.client.table("bookings").delete().eq("id", str(booking_id)).execute(),
        )


def _to_row(booking: BookingRecord) -> dict[str, object]:
    return {
        "id": str(booking.id),
        "owner_account_id": str(booking.owner_account_id),
        "start_date": booking.start_date.isoformat(),
        "end_date": booking.end_date.isoformat(),
        "description": booking.description,
        "option_selections": booking.option_selections,
    }


def _to_booking(row: dict[str, object]) -> BookingRecord:
    selections = row.get("option_selections") or {}
    return BookingRecord(
        id=UUID(str(row["id"])),
        owner_account_id=UUID(str(row["owner_account_id"])),
        start_date=date.fromisoformat(str(row["start_date"])),
        end_date=date.fromisoformat(str(row["end_date"])),
        description=str(row.get("description") or ""),
        option_selections={str(key): bool(value) for key, value in selections.items()},
    )
