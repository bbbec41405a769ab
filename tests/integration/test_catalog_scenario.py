"""End-to-end catalog flow through the DI container and real storage adapters."""

from typing import Any

import pytest
from dishka import AsyncContainer

from midivault.application.di import create_container
from midivault.config import Config
from midivault.domain.auth.command.login import Login, LoginHandler
from midivault.domain.catalog.command.delete import DeleteRecord, DeleteRecordHandler
from midivault.domain.catalog.command.like import ToggleLike, ToggleLikeHandler
from midivault.domain.catalog.command.publish import PublishRecord, PublishRecordHandler
from midivault.domain.catalog.model.value import UploadFile
from midivault.domain.catalog.port.blob_store import BlobStore
from midivault.domain.catalog.query.list_records import ListRecords, ListRecordsHandler
from midivault.domain.notification.query.list_notifications import (
    ListNotifications,
    ListNotificationsHandler,
)
from midivault.domain.shared.error import SelfLikeError
from midivault.domain.shared.port.confirmation import AlwaysConfirm


async def _run(container: AsyncContainer, handler_type: type, message: Any) -> Any:
    async with container() as uow:
        handler = await uow.get(handler_type)
        return await handler.run(message)


async def _login(container: AsyncContainer, username: str) -> None:
    result = await _run(container, LoginHandler, Login(username=username, password="pw"))
    assert result.success


class TestCatalogScenario:
    @pytest.mark.asyncio
    async def test_publish_like_notify_delete(self, container: AsyncContainer):
        await _login(container, "alice")
        published = await _run(
            container,
            PublishRecordHandler,
            PublishRecord(
                title="Etude",
                primary=UploadFile(filename="etude.mid", content=b"0123456789"),
            ),
        )

        listing = await _run(container, ListRecordsHandler, ListRecords())
        assert [e.record.id for e in listing.items] == [published.record_id]
        assert listing.items[0].primary.size == 10

        with pytest.raises(SelfLikeError):
            await _run(container, ToggleLikeHandler, ToggleLike(record_id=published.record_id))

        await _login(container, "bob")
        liked = await _run(container, ToggleLikeHandler, ToggleLike(record_id=published.record_id))
        assert liked.liked is True
        assert liked.like_count == 1

        await _login(container, "alice")
        inbox = await _run(container, ListNotificationsHandler, ListNotifications())
        assert len(inbox.items) == 1
        assert inbox.items[0].actor_id == "bob"
        assert inbox.items[0].read is False

        deleted = await _run(
            container, DeleteRecordHandler, DeleteRecord(record_id=published.record_id)
        )
        assert deleted.deleted is True

        listing = await _run(container, ListRecordsHandler, ListRecords())
        assert listing.items == []
        blobs = await container.get(BlobStore)
        assert not await blobs.exists(f"{published.record_id}_midi")

    @pytest.mark.asyncio
    async def test_state_survives_a_new_container(self, container: AsyncContainer):
        await _login(container, "alice")
        published = await _run(
            container,
            PublishRecordHandler,
            PublishRecord(title="Kept", primary=UploadFile(filename="k.mid", content=b"k")),
        )
        config = await container.get(Config)

        second = create_container(AlwaysConfirm(), config)
        try:
            listing = await _run(second, ListRecordsHandler, ListRecords())
        finally:
            await second.close()

        assert [e.record.id for e in listing.items] == [published.record_id]
