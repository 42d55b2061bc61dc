"""Booking endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status

from pousada_api.api.schemas import (
    BookingCreateIn,
    BookingOut,
    BookingPatchIn,
    OccupiedRangeOut,
)
from pousada_api.api.security import require_admin, require_identity
from pousada_api.domain.models import Identity
from pousada_api.errors import NotFound
from pousada_api.services.bookings import BookingPatch

if TYPE_CHECKING:
    from pousada_api.containers import AppContainer

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("")
async def list_bookings(
    request: Request, identity: Identity = Depends(require_identity)
) -> list[BookingOut]:
    """Return all bookings for admins, or the caller's own bookings."""
    container: AppContainer = request.app.state.container
    listings = await container.booking_service.list_bookings(identity)
    return [BookingOut.from_listing(listing) for listing in listings]


@router.get("/availability")
async def list_availability(request: Request) -> list[OccupiedRangeOut]:
    """Return the occupied date ranges for the public calendar."""
    container: AppContainer = request.app.state.container
    occupied = await container.booking_service.list_occupied_ranges()
    return [OccupiedRangeOut.from_domain(entry) for entry in occupied]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreateIn,
    request: Request,
    identity: Identity = Depends(require_identity),
) -> BookingOut:
    """Reserve a date range for the caller."""
    container: AppContainer = request.app.state.container
    booking = await container.booking_service.create_booking(
        identity,
        start_date=payload.start_date,
        end_date=payload.end_date,
        description=payload.description,
        option_selections=payload.option_selections,
    )
    return BookingOut.from_record(booking)


@router.put("/{booking_id}", dependencies=[Depends(require_admin)])
async def update_booking(
    booking_id: str, payload: BookingPatchIn, request: Request
) -> BookingOut:
    """Apply an admin edit to a booking."""
    container: AppContainer = request.app.state.container
    booking = await container.booking_service.update_booking(
        _parse_booking_id(booking_id),
        BookingPatch(
            start_date=payload.start_date,
            end_date=payload.end_date,
            description=payload.description,
            option_selections=payload.option_selections,
        ),
    )
    return BookingOut.from_record(booking)


@router.delete(
    "/{booking_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_booking(booking_id: str, request: Request) -> Response:
    """Remove a booking."""
    container: AppContainer = request.app.state.container
    await container.booking_service.delete_booking(_parse_booking_id(booking_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _parse_booking_id(booking_id: str) -> UUID:
    # Ids are opaque to clients; anything unparsable names no booking.
    try:
        return UUID(booking_id)
    except ValueError as exc:
        raise NotFound("Booking not found") from exc
