"""Direct message model for rental domain."""

from dataclasses import dataclass
from datetime import datetime

from mhimmo.models.rental.enums import MessageType


@dataclass
class Message:
    """Direct message between two users."""

    id: str
    sender_id: str
    recipient_id: str
    content: str
    created_at: datetime
    type: MessageType = MessageType.TEXT
    read: bool = False
