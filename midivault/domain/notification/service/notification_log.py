"""NotificationLog - append-only like notifications, persisted in one slot."""

import logging
from datetime import UTC, datetime

from pydantic import ValidationError as PydanticValidationError

from midivault.domain.auth.model.value import UserId
from midivault.domain.notification.model.notification import Notification
from midivault.domain.shared.error import StorageError
from midivault.domain.shared.port.slot_store import NOTIFICATIONS_SLOT, SlotStore

logger = logging.getLogger(__name__)


class NotificationLog:
    """Holds notifications in insertion order.

    Notifications are never removed; mark_read() is the only mutation after append().
    """

    def __init__(self, slots: SlotStore) -> None:
        self._slots = slots
        self._items: list[Notification] = []

    async def load(self) -> list[Notification]:
        raw = await self._slots.read(NOTIFICATIONS_SLOT) or []
        items: list[Notification] = []
        for position, doc in enumerate(raw):
            try:
                items.append(Notification.model_validate(doc))
            except PydanticValidationError as e:
                logger.warning("Skipping malformed notification at position %d: %s", position, e)
        self._items = items
        return list(items)

    def next_id(self, now: datetime | None = None) -> str:
        """Epoch-millisecond id, suffixed when another notification already has it."""
        now = now or datetime.now(UTC)
        base = str(int(now.timestamp() * 1000))
        taken = {n.id for n in self._items}
        candidate, n = base, 1
        while candidate in taken:
            candidate = f"{base}-{n}"
            n += 1
        return candidate

    async def notify_like(self, recipient_id: UserId, actor_id: UserId, subject_title: str) -> Notification:
        now = datetime.now(UTC)
        notification = Notification(
            id=self.next_id(now),
            recipient_id=recipient_id,
            actor_id=actor_id,
            subject_title=subject_title,
            created_at=now,
        )
        await self.append(notification)
        return notification

    async def append(self, notification: Notification) -> None:
        self._items.append(notification)
        try:
            await self.persist()
        except StorageError:
            self._items.pop()
            raise

    def list_for(self, recipient_id: UserId) -> list[Notification]:
        """All notifications for ``recipient_id``, read or not, oldest first."""
        return [n for n in self._items if n.recipient_id == recipient_id]

    def unread_count(self, recipient_id: UserId) -> int:
        return sum(1 for n in self.list_for(recipient_id) if not n.read)

    async def mark_read(self, notification_id: str) -> bool:
        """Flag a notification as read. Unknown ids are ignored."""
        for notification in self._items:
            if notification.id == notification_id:
                if not notification.mark_read():
                    return False
                try:
                    await self.persist()
                except StorageError:
                    notification.read = False
                    raise
                return True
        return False

    async def persist(self) -> None:
        await self._slots.write(NOTIFICATIONS_SLOT, [n.to_document() for n in self._items])
