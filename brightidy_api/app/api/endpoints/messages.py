"""
Message endpoints.

Participants of a booking exchange messages through these routes.
Admins may read any booking's messages but cannot write.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from brightidy_api.app.core.db import JsonStore
from brightidy_api.app.core.security import get_current_user, get_store
from brightidy_api.app.schemas.message import MessageCreate, MessageEnvelope, MessageList
from brightidy_api.app.services.message_service import MessageService


router = APIRouter()


@router.post("/messages", response_model=MessageEnvelope, status_code=status.HTTP_201_CREATED)
async def create_message(
    message: Optional[MessageCreate] = None,
    current_user: dict = Depends(get_current_user),
    store: JsonStore = Depends(get_store),
) -> MessageEnvelope:
    """Send a message to the other participant of a booking."""
    created = await MessageService.create_message(store, current_user, message or MessageCreate())
    return MessageEnvelope(message=created)


@router.get("/messages", response_model=MessageList)
async def list_messages(
    booking_id: Optional[int] = Query(None, alias="bookingId", description="ID of the booking"),
    current_user: dict = Depends(get_current_user),
    store: JsonStore = Depends(get_store),
) -> MessageList:
    """List a booking's messages in chronological order."""
    return MessageList(messages=await MessageService.list_messages(store, current_user, booking_id))
