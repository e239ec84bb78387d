"""
Pydantic models for messages exchanged inside a booking.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MessageCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    booking_id: Optional[int] = Field(None, alias="bookingId")
    content: Optional[str] = Field(None, examples=["The key is under the mat"])


class MessageRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    booking_id: int = Field(..., alias="bookingId")
    sender: str
    # ``None`` when the client writes before a cleaner has been assigned.
    recipient: Optional[str] = None
    content: str
    timestamp: str


class MessageEnvelope(BaseModel):
    message: MessageRead


class MessageList(BaseModel):
    messages: List[MessageRead]
