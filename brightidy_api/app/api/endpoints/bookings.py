"""
Booking endpoints.

These routes create bookings, list the bookings visible to the caller
and let cleaners claim bookings and advance their status.  They rely on
``BookingService`` for the lifecycle rules; role checks happen there so
a caller with the wrong role gets a 403 even when the body is
incomplete.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, status

from brightidy_api.app.core.db import JsonStore
from brightidy_api.app.core.security import get_current_user, get_store
from brightidy_api.app.schemas.booking import BookingCreate, BookingEnvelope, BookingList, BookingUpdate
from brightidy_api.app.services.booking_service import BookingService


router = APIRouter()


@router.post("/bookings", response_model=BookingEnvelope, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking: Optional[BookingCreate] = None,
    current_user: dict = Depends(get_current_user),
    store: JsonStore = Depends(get_store),
) -> BookingEnvelope:
    """Create a pending booking.  Clients only."""
    created = await BookingService.create_booking(store, current_user, booking or BookingCreate())
    return BookingEnvelope(booking=created)


@router.get("/bookings", response_model=BookingList)
async def list_bookings(
    current_user: dict = Depends(get_current_user),
    store: JsonStore = Depends(get_store),
) -> BookingList:
    """List own bookings (clients), assigned bookings (cleaners) or all (admins)."""
    return BookingList(bookings=await BookingService.list_bookings(store, current_user))


@router.put("/bookings", response_model=BookingEnvelope)
async def update_booking(
    request: Request,
    update: Optional[BookingUpdate] = None,
    current_user: dict = Depends(get_current_user),
    store: JsonStore = Depends(get_store),
) -> BookingEnvelope:
    """Claim a pending booking and/or change its status.  Cleaners only.

    Sending only ``bookingId`` claims an unassigned booking.  Sending
    ``status`` as well moves the booking to ``accepted``,
    ``in_progress`` or ``completed``.
    """
    permissive = request.app.state.settings.permissive_status_updates
    updated = await BookingService.update_booking(store, current_user, update or BookingUpdate(), permissive=permissive)
    return BookingEnvelope(booking=updated)
