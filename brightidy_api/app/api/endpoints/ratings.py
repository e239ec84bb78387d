"""
Rating endpoint.

Clients rate a completed booking, optionally adding a tip.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from brightidy_api.app.core.db import JsonStore
from brightidy_api.app.core.security import get_current_user, get_store
from brightidy_api.app.schemas.booking import BookingEnvelope
from brightidy_api.app.schemas.rating import RatingCreate
from brightidy_api.app.services.rating_service import RatingService


router = APIRouter()


@router.post("/rate", response_model=BookingEnvelope)
async def rate_booking(
    rating: Optional[RatingCreate] = None,
    current_user: dict = Depends(get_current_user),
    store: JsonStore = Depends(get_store),
) -> BookingEnvelope:
    """Rate a completed booking once and optionally leave a tip.

    Returns the updated booking.  A booking that is not completed yet,
    or that was already rated, answers 400.
    """
    updated = await RatingService.rate_booking(store, current_user, rating or RatingCreate())
    return BookingEnvelope(booking=updated)
