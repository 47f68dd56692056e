"""Conversation threads, unread counts and role-based messaging visibility."""

import logging
from dataclasses import dataclass
from datetime import datetime

from mhimmo.models.rental import Message, MessageType, Role, User
from mhimmo.store.rental import RentalDataStore

logger = logging.getLogger(__name__)

# Who may appear as a messaging counterpart for each viewer role
VISIBILITY_MATRIX: dict[Role, frozenset[Role]] = {
    Role.TENANT: frozenset({Role.MANAGER}),
    Role.MANAGER: frozenset({Role.OWNER, Role.TENANT}),
    Role.OWNER: frozenset({Role.OWNER, Role.MANAGER, Role.TENANT}),
}


@dataclass
class Conversation:
    """Summary of the thread between a viewer and one counterpart."""

    user: User
    last_message: Message | None
    unread_count: int


def visible_roles(role: Role | str) -> frozenset[Role]:
    """Roles a user with ``role`` may message."""
    return VISIBILITY_MATRIX[Role(role)]


def can_message(sender: User, recipient: User) -> bool:
    """Whether ``sender`` may message ``recipient``."""
    return sender.id != recipient.id and recipient.role in visible_roles(sender.role)


class MessagingIndex:
    """Derives conversations from the flat message collection.

    Every call reads the live store; callers refresh their view by calling
    again after a mutation.
    """

    def __init__(self, store: RentalDataStore) -> None:
        self.store = store

    def thread(self, user_id: str, other_id: str) -> list[Message]:
        """Messages exchanged between two users, oldest first."""
        return self.store.get_messages_between(user_id, other_id)

    def counterparts(self, viewer: User) -> list[User]:
        """Users ``viewer`` may message, in store order."""
        allowed = visible_roles(viewer.role)
        return [u for u in self.store.users.values() if u.id != viewer.id and u.role in allowed]

    def conversations(self, viewer: User) -> list[Conversation]:
        """Conversation list for ``viewer``, most recent activity first.

        Counterparts without messages come last, in store order.
        """
        convs = []
        for other in self.counterparts(viewer):
            messages = self.thread(viewer.id, other.id)
            unread = sum(1 for m in messages if m.recipient_id == viewer.id and not m.read)
            convs.append(
                Conversation(
                    user=other,
                    last_message=messages[-1] if messages else None,
                    unread_count=unread,
                )
            )

        def recency(conv: Conversation) -> tuple[int, datetime]:
            if conv.last_message is None:
                return (0, datetime.min)
            return (1, conv.last_message.created_at)

        # sorted() is stable with reverse=True, so ties keep store order
        return sorted(convs, key=recency, reverse=True)

    def send(
        self,
        sender: User | None,
        recipient_id: str,
        content: str,
        type: MessageType | str = MessageType.TEXT,
    ) -> Message | None:
        """Send a message if the sender may reach the recipient.

        Returns ``None`` without writing anything when the sender is missing,
        the trimmed content is empty, or the recipient is not one of the
        sender's counterparts.
        """
        if sender is None:
            logger.info("Message rejected: no authenticated sender")
            return None

        text = (content or "").strip()
        if not text:
            logger.info("Message rejected: empty content from %s", sender.id)
            return None

        recipient = self.store.get_user(recipient_id)
        if recipient is None or not can_message(sender, recipient):
            logger.info("Message rejected: %s may not message %s", sender.id, recipient_id)
            return None

        return self.store.create_message(
            sender_id=sender.id,
            recipient_id=recipient.id,
            content=text,
            type=type,
        )

    def unread_total(self, user_id: str) -> int:
        """Number of unread messages addressed to ``user_id``."""
        return sum(1 for m in self.store.messages if m.recipient_id == user_id and not m.read)

    def mark_thread_read(self, viewer_id: str, other_id: str) -> int:
        """Mark every message ``other_id`` sent to ``viewer_id`` as read.

        Only the recipient's side of the thread changes. Returns the number
        of messages flipped.
        """
        flipped = 0
        for message in self.thread(viewer_id, other_id):
            if message.recipient_id == viewer_id and not message.read:
                message.read = True
                flipped += 1
        if flipped:
            self.store.notify("messages")
        return flipped
