"""
Business logic for bookings.

A booking moves along a single linear lifecycle::

    pending -> accepted -> in_progress -> completed

Clients create bookings in the ``pending`` state.  The first cleaner
to update a booking claims it: the booking's ``cleaner`` is set to that
cleaner and its status becomes ``accepted``.  From then on the
assignment never changes.  Cleaners advance the status by supplying a
new value; by default only the assigned cleaner may do so and only
forwards along the lifecycle.  ``Settings.permissive_status_updates``
lifts both restrictions.

Rating a completed booking is handled by ``RatingService``.
"""

import logging
from typing import List

from ..core.db import Document, JsonStore, next_id
from ..core.errors import ForbiddenError, NotFoundError, ValidationError
from ..schemas.booking import BOOKING_STATUSES, BookingCreate, BookingRead, BookingUpdate

# Statuses a cleaner may set explicitly.  ``pending`` is only ever the
# initial state.
SETTABLE_STATUSES = BOOKING_STATUSES[1:]

REQUIRED_FIELDS = ("property_address", "property_type", "date", "time", "duration")


def find_booking(db: Document, booking_id: int) -> dict:
    """Return the stored booking with ``booking_id`` or raise ``NotFoundError``."""
    booking = next((b for b in db["bookings"] if b["id"] == booking_id), None)
    if booking is None:
        raise NotFoundError("Booking not found")
    return booking


class BookingService:
    """Service for creating, listing and advancing bookings."""

    @classmethod
    async def create_booking(cls, store: JsonStore, current_user: dict, data: BookingCreate) -> BookingRead:
        """Create a pending booking owned by the calling client.

        Raises ``ForbiddenError`` for non-clients and ``ValidationError``
        if any booking field is missing or empty.
        """
        logger = logging.getLogger(__name__)
        if current_user["role"] != "client":
            raise ForbiddenError("Only clients can create bookings")
        if any(not getattr(data, field) for field in REQUIRED_FIELDS):
            raise ValidationError("Missing booking fields")
        db = store.load()
        booking = {
            "id": next_id(db["bookings"]),
            "client": current_user["username"],
            "cleaner": None,
            "propertyAddress": data.property_address,
            "propertyType": data.property_type,
            "date": data.date,
            "time": data.time,
            "duration": data.duration,
            "status": "pending",
            "rating": None,
            "tip": None,
        }
        db["bookings"].append(booking)
        store.save(db)
        logger.info("Client %s created booking %s", current_user["username"], booking["id"])
        return BookingRead.model_validate(booking)

    @classmethod
    async def list_bookings(cls, store: JsonStore, current_user: dict) -> List[BookingRead]:
        """List the bookings visible to the caller.

        Clients see the bookings they created, cleaners the bookings
        assigned to them and admins every booking.
        """
        db = store.load()
        role = current_user["role"]
        username = current_user["username"]
        if role == "client":
            bookings = [b for b in db["bookings"] if b["client"] == username]
        elif role == "cleaner":
            bookings = [b for b in db["bookings"] if b["cleaner"] == username]
        else:
            bookings = db["bookings"]
        return [BookingRead.model_validate(b) for b in bookings]

    @classmethod
    async def update_booking(
        cls,
        store: JsonStore,
        current_user: dict,
        data: BookingUpdate,
        permissive: bool = False,
    ) -> BookingRead:
        """Claim a booking and/or change its status.

        An unassigned booking is claimed by the caller and becomes
        ``accepted``.  A supplied status that is one of ``accepted``,
        ``in_progress`` or ``completed`` is then applied; any other value
        is ignored.  Unless ``permissive`` is set, only the assigned
        cleaner may change the status and the status may not move
        backwards.  The booking is saved and returned even when nothing
        changed.
        """
        logger = logging.getLogger(__name__)
        if current_user["role"] != "cleaner":
            raise ForbiddenError("Only cleaners can update bookings")
        if not data.booking_id:
            raise ValidationError("Missing bookingId")
        db = store.load()
        booking = find_booking(db, data.booking_id)
        username = current_user["username"]

        if not booking["cleaner"]:
            booking["cleaner"] = username
            booking["status"] = "accepted"
            logger.info("Cleaner %s accepted booking %s", username, booking["id"])

        if data.status:
            if data.status not in SETTABLE_STATUSES:
                logger.warning("Ignoring unknown status %r for booking %s", data.status, booking["id"])
            else:
                if not permissive:
                    cls._check_transition(booking, username, data.status)
                if booking["status"] != data.status:
                    logger.info(
                        "Booking %s moved from %s to %s by %s",
                        booking["id"], booking["status"], data.status, username,
                    )
                booking["status"] = data.status

        store.save(db)
        return BookingRead.model_validate(booking)

    @staticmethod
    def _check_transition(booking: dict, username: str, new_status: str) -> None:
        if booking["cleaner"] != username:
            raise ForbiddenError("Only the assigned cleaner can change the booking status")
        current = booking["status"]
        if BOOKING_STATUSES.index(new_status) < BOOKING_STATUSES.index(current):
            raise ValidationError(f"Cannot move booking from {current} back to {new_status}")
