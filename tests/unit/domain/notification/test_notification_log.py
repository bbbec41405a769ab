"""Unit tests for NotificationLog and its handlers."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, patch

import pytest

from midivault.domain.auth.model.identity import Identity
from midivault.domain.auth.model.value import UserId
from midivault.domain.notification.command.mark_read import (
    MarkNotificationRead,
    MarkNotificationReadHandler,
)
from midivault.domain.notification.model.notification import Notification
from midivault.domain.notification.query.list_notifications import (
    ListNotifications,
    ListNotificationsHandler,
)
from midivault.domain.notification.service.notification_log import NotificationLog
from midivault.domain.shared.error import AuthorizationError, StorageError
from midivault.domain.shared.port.slot_store import NOTIFICATIONS_SLOT
from midivault.infrastructure.persistence.adapter.memory import InMemorySlotStore

ALICE = UserId("alice")
BOB = UserId("bob")


def _make_provider(username: str | None) -> AsyncMock:
    provider = AsyncMock()
    provider.current_identity.return_value = (
        Identity(user_id=UserId(username), email="") if username else None
    )
    return provider


class TestNotificationLog:
    @pytest.mark.asyncio
    async def test_notify_like_persists(self):
        slots = InMemorySlotStore()
        log = NotificationLog(slots)

        notification = await log.notify_like(ALICE, BOB, "Etude")

        [doc] = slots.slots[NOTIFICATIONS_SLOT]
        assert doc["id"] == notification.id
        assert doc["recipientId"] == "alice"
        assert doc["actorId"] == "bob"
        assert doc["subjectTitle"] == "Etude"
        assert doc["read"] is False

    @pytest.mark.asyncio
    async def test_list_for_returns_read_and_unread_in_order(self):
        log = NotificationLog(InMemorySlotStore())
        first = await log.notify_like(ALICE, BOB, "One")
        await log.notify_like(BOB, ALICE, "Other")
        second = await log.notify_like(ALICE, BOB, "Two")
        await log.mark_read(first.id)

        items = log.list_for(ALICE)

        assert [n.id for n in items] == [first.id, second.id]
        assert log.unread_count(ALICE) == 1

    def test_next_id_suffixes_collisions(self):
        log = NotificationLog(InMemorySlotStore())
        now = datetime(2024, 1, 1, tzinfo=UTC)
        base = str(int(now.timestamp() * 1000))
        log._items = [
            Notification(id=base, recipient_id=ALICE, actor_id=BOB, subject_title="x", created_at=now)
        ]
        assert log.next_id(now) == f"{base}-1"

    @pytest.mark.asyncio
    async def test_mark_read_unknown_id_is_noop(self):
        slots = InMemorySlotStore()
        log = NotificationLog(slots)

        assert await log.mark_read("missing") is False
        assert NOTIFICATIONS_SLOT not in slots.slots

    @pytest.mark.asyncio
    async def test_mark_read_twice_persists_once(self):
        slots = AsyncMock()
        slots.read.return_value = None
        log = NotificationLog(slots)
        notification = await log.notify_like(ALICE, BOB, "Etude")
        slots.write.reset_mock()

        assert await log.mark_read(notification.id) is True
        assert await log.mark_read(notification.id) is False

        slots.write.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_append_failure_reverts(self):
        slots = AsyncMock()
        slots.write.side_effect = StorageError("boom")
        log = NotificationLog(slots)

        with pytest.raises(StorageError):
            await log.notify_like(ALICE, BOB, "Etude")

        assert log.list_for(ALICE) == []

    @pytest.mark.asyncio
    async def test_load_round_trips(self):
        slots = InMemorySlotStore()
        await NotificationLog(slots).notify_like(ALICE, BOB, "Etude")

        log = NotificationLog(slots)
        [loaded] = await log.load()

        assert loaded.subject_title == "Etude"
        assert loaded.created_at.tzinfo is not None


class TestNotificationHandlers:
    @pytest.mark.asyncio
    async def test_list_requires_login(self):
        handler = ListNotificationsHandler(
            identity_provider=_make_provider(None), notification_log=NotificationLog(InMemorySlotStore())
        )
        with pytest.raises(AuthorizationError):
            await handler.run(ListNotifications())

    @pytest.mark.asyncio
    async def test_list_and_mark_read(self):
        log = NotificationLog(InMemorySlotStore())
        notification = await log.notify_like(ALICE, BOB, "Etude")
        alice = _make_provider("alice")

        marked = await MarkNotificationReadHandler(identity_provider=alice, notification_log=log).run(
            MarkNotificationRead(notification_id=notification.id)
        )
        listing = await ListNotificationsHandler(identity_provider=alice, notification_log=log).run(
            ListNotifications()
        )

        assert marked.changed is True
        assert [n.id for n in listing.items] == [notification.id]
        assert listing.unread == 0

    @pytest.mark.asyncio
    async def test_cannot_mark_someone_elses_notification(self):
        log = NotificationLog(InMemorySlotStore())
        notification = await log.notify_like(ALICE, BOB, "Etude")

        result = await MarkNotificationReadHandler(
            identity_provider=_make_provider("bob"), notification_log=log
        ).run(MarkNotificationRead(notification_id=notification.id))

        assert result.changed is False
        assert notification.read is False

    @pytest.mark.asyncio
    async def test_mark_read_runs_in_span(self):
        log = NotificationLog(InMemorySlotStore())
        notification = await log.notify_like(ALICE, BOB, "Etude")

        with patch("midivault.domain.notification.command.mark_read.logfire.span") as span:
            await MarkNotificationReadHandler(
                identity_provider=_make_provider("alice"), notification_log=log
            ).run(MarkNotificationRead(notification_id=notification.id))

        span.assert_called_once_with("MarkNotificationRead", notification_id=notification.id)
