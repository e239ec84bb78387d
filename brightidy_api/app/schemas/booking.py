"""
Pydantic models for cleaning bookings.

Field names on the wire are camelCase (``propertyAddress``,
``bookingId``); the models expose snake_case attributes and map them
through aliases.  Responses are serialised by alias, so the JSON
returned to clients matches the persisted document.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

BOOKING_STATUSES = ("pending", "accepted", "in_progress", "completed")


class BookingCreate(BaseModel):
    """Schema for creating a booking.

    All fields are required by ``BookingService.create_booking``; they
    are optional here so that a caller without the client role gets a
    403 rather than a validation error.
    """

    model_config = ConfigDict(populate_by_name=True)

    property_address: Optional[str] = Field(None, alias="propertyAddress", examples=["1 Main St"])
    property_type: Optional[str] = Field(None, alias="propertyType", examples=["apartment"])
    date: Optional[str] = Field(None, examples=["2024-01-01"])
    time: Optional[str] = Field(None, examples=["09:00"])
    duration: Optional[float] = Field(None, allow_inf_nan=False, description="Length of the appointment in hours", examples=[2])


class BookingUpdate(BaseModel):
    """Schema for claiming a booking or changing its status."""

    model_config = ConfigDict(populate_by_name=True)

    booking_id: Optional[int] = Field(None, alias="bookingId")
    status: Optional[str] = Field(None, examples=["in_progress"])


class BookingRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    client: str
    cleaner: Optional[str] = None
    property_address: str = Field(..., alias="propertyAddress")
    property_type: str = Field(..., alias="propertyType")
    date: str
    time: str
    duration: float
    status: str
    rating: Optional[int] = None
    tip: Optional[float] = None


class BookingEnvelope(BaseModel):
    booking: BookingRead


class BookingList(BaseModel):
    bookings: List[BookingRead]
