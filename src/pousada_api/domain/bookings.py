"""Domain models and date-range rules for bookings."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class BookingRecord:
    """A reservation occupying the half-open range [start_date, end_date)."""

    id: UUID
    owner_account_id: UUID
    start_date: date
    end_date: date
    description: str
    option_selections: dict[str, bool] = field(default_factory=dict)


@dataclass(frozen=True)
class OwnerContact:
    """Contact details of a booking owner."""

    email: str
    phone_number: str | None


@dataclass(frozen=True)
class BookingListing:
    """A booking plus its owner's contact, when the caller may see it."""

    booking: BookingRecord
    owner: OwnerContact | None = None


@dataclass(frozen=True)
class OccupiedRange:
    """A held half-open date range, stripped of ownership details."""

    start_date: date
    end_date: date


def ranges_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """Return True when two half-open date ranges intersect."""
    return start_a < end_b and start_b < end_a


def first_colliding_date(
    start: date, end: date, existing: list[BookingRecord]
) -> date | None:
    """Return the earliest date in [start, end) already held by a booking."""
    collisions = [
        max(start, booking.start_date)
        for booking in existing
        if ranges_overlap(start, end, booking.start_date, booking.end_date)
    ]
    return min(collisions) if collisions else None
