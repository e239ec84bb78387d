"""
Pydantic schema for rating a completed booking.

The rating arrives as a number and is checked by ``RatingService``:
only whole numbers from 1 to 5 are accepted, and only after the
booking's state has been validated.  Non-finite numbers (``1e999``
parses as infinity) are refused here, since the store cannot write them
as JSON.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RatingCreate(BaseModel):
    """Schema for submitting a rating and optional tip."""

    model_config = ConfigDict(populate_by_name=True)

    booking_id: Optional[int] = Field(None, alias="bookingId")
    rating: Optional[float] = Field(None, allow_inf_nan=False, description="Rating from 1 to 5", examples=[5])
    tip: Optional[float] = Field(None, allow_inf_nan=False, description="Optional tip amount", examples=[10])
