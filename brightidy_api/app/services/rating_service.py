"""
Business logic for ratings and tips.

A client rates a booking once, after the cleaner has marked it
``completed``.  The rating and the optional tip are stored on the
booking itself.  A tip of zero is stored as ``0.0``; leaving the tip
out keeps it ``null``.
"""

import logging

from ..core.db import JsonStore
from ..core.errors import ForbiddenError, ValidationError
from ..schemas.booking import BookingRead
from ..schemas.rating import RatingCreate
from .booking_service import find_booking


class RatingService:
    """Service for rating completed bookings."""

    @classmethod
    async def rate_booking(cls, store: JsonStore, current_user: dict, data: RatingCreate) -> BookingRead:
        """Record a 1-5 rating and optional tip on a completed booking.

        Checks run in this order: caller is a client, required fields
        are present, the booking exists, the caller owns it, it is
        completed, it is not rated yet, and finally the rating value
        and tip are valid.
        """
        logger = logging.getLogger(__name__)
        if current_user["role"] != "client":
            raise ForbiddenError("Only clients can rate bookings")
        if not data.booking_id or not data.rating:
            raise ValidationError("Missing bookingId or rating")
        db = store.load()
        booking = find_booking(db, data.booking_id)
        if booking["client"] != current_user["username"]:
            raise ForbiddenError("Not your booking")
        if booking["status"] != "completed":
            raise ValidationError("Booking not completed yet")
        if booking["rating"] is not None:
            raise ValidationError("Booking already rated")
        if not float(data.rating).is_integer() or not 1 <= data.rating <= 5:
            raise ValidationError("Rating must be an integer between 1 and 5")
        if data.tip is not None and data.tip < 0:
            raise ValidationError("Tip must not be negative")

        booking["rating"] = int(data.rating)
        if data.tip is not None:
            booking["tip"] = float(data.tip)
        store.save(db)
        logger.info(
            "Client %s rated booking %s with %s (tip %s)",
            current_user["username"], booking["id"], booking["rating"], booking["tip"],
        )
        return BookingRead.model_validate(booking)
