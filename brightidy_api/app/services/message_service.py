"""
Service layer for booking messages.

Messages are free-text notes exchanged between the two participants
of a booking: its client and its assigned cleaner.  The recipient is
never chosen by the sender; it is always "the other party".  A client
may write before any cleaner has claimed the booking, in which case
the message is stored with no recipient.  Messages are immutable.
"""

import logging
from datetime import datetime, timezone
from typing import List

from ..core.db import JsonStore, next_id
from ..core.errors import ForbiddenError, ValidationError
from ..schemas.message import MessageCreate, MessageRead
from .booking_service import find_booking


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _sort_key(message: dict):
    """Order by parsed timestamp; unreadable timestamps sort last."""
    try:
        parsed = datetime.fromisoformat(str(message.get("timestamp")).replace("Z", "+00:00"))
    except ValueError:
        logging.getLogger(__name__).warning(
            "Message %s has an unreadable timestamp %r", message.get("id"), message.get("timestamp")
        )
        return (1, datetime.min.replace(tzinfo=timezone.utc))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return (0, parsed)


class MessageService:
    """Service for sending and reading messages attached to bookings."""

    @classmethod
    async def create_message(cls, store: JsonStore, current_user: dict, data: MessageCreate) -> MessageRead:
        """Append a message from the caller to the other participant."""
        logger = logging.getLogger(__name__)
        if not data.booking_id or not data.content:
            raise ValidationError("Missing bookingId or content")
        db = store.load()
        booking = find_booking(db, data.booking_id)
        username = current_user["username"]
        if username == booking["client"]:
            recipient = booking["cleaner"]
        elif booking["cleaner"] and username == booking["cleaner"]:
            recipient = booking["client"]
        else:
            raise ForbiddenError("Not part of the booking")
        message = {
            "id": next_id(db["messages"]),
            "bookingId": booking["id"],
            "sender": username,
            "recipient": recipient,
            "content": data.content,
            "timestamp": utc_timestamp(),
        }
        db["messages"].append(message)
        store.save(db)
        logger.info("Message %s on booking %s from %s", message["id"], booking["id"], username)
        return MessageRead.model_validate(message)

    @classmethod
    async def list_messages(cls, store: JsonStore, current_user: dict, booking_id: int | None) -> List[MessageRead]:
        """Return the booking's messages, oldest first.

        Participants and admins may read a booking's messages.  The sort
        is stable, so messages with identical timestamps keep the order
        in which they were stored.
        """
        if not booking_id:
            raise ValidationError("Missing bookingId query parameter")
        db = store.load()
        booking = find_booking(db, booking_id)
        username = current_user["username"]
        if username != booking["client"] and username != booking["cleaner"] and current_user["role"] != "admin":
            raise ForbiddenError("Not authorised to view messages")
        messages = [m for m in db["messages"] if m["bookingId"] == booking_id]
        messages.sort(key=_sort_key)
        return [MessageRead.model_validate(m) for m in messages]
