"""CatalogService - publish, delete, like, search and load over the two stores."""

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from midivault.domain.auth.model.identity import Identity
from midivault.domain.auth.model.value import UserId
from midivault.domain.auth.port.identity_provider import IdentityProvider
from midivault.domain.catalog.model.listing import CatalogEntry, Download
from midivault.domain.catalog.model.record import Record
from midivault.domain.catalog.model.value import (
    PRIMARY_SLOT,
    Blob,
    LikeOutcome,
    RecordId,
    UploadFile,
    file_extension,
    filename_from_title,
    new_record_id,
)
from midivault.domain.catalog.port.blob_store import BlobStore
from midivault.domain.catalog.service.metadata_index import MetadataIndex
from midivault.domain.catalog.service.upload_policy import UploadPolicy
from midivault.domain.notification.service.notification_log import NotificationLog
from midivault.domain.shared.error import (
    AuthorizationError,
    NotFoundError,
    SelfLikeError,
    StorageError,
)
from midivault.domain.shared.port.confirmation import ConfirmationPort
from midivault.domain.shared.service import Service

logger = logging.getLogger(__name__)

DELETE_PROMPT = "Delete '{title}'? Its files will be removed as well."
CLEAR_PROMPT = "Remove all {count} record(s) from the catalog? This cannot be undone."


class CatalogService(Service):
    """Orchestrates the Metadata Index, Blob Store and Notification Log.

    Holds no state of its own. Writes are two-phase: blobs first, then metadata
    on publish; blobs first, then metadata removal on delete. Completed steps are
    never rolled back, so a failure can leave orphaned blobs (publish) or a record
    whose payload is gone (delete); the read paths skip such records.
    """

    index: MetadataIndex
    blobs: BlobStore
    notifications: NotificationLog
    identities: IdentityProvider
    policy: UploadPolicy
    confirmation: ConfirmationPort
    admin_username: UserId | None = None

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def publish(
        self,
        owner_id: UserId | None,
        title: str | None,
        primary: UploadFile | None,
        secondary: Mapping[str, UploadFile] | None = None,
    ) -> Record:
        if owner_id is None:
            raise AuthorizationError("Login required to publish", code="missing_identity")
        self.policy.validate(title, primary, secondary)
        assert title is not None and primary is not None
        companions = dict(secondary or {})

        now = datetime.now(UTC)
        record = Record.publish(
            record_id=self._unused_id(now),
            title=title.strip(),
            owner_id=owner_id,
            secondary_slots=list(companions),
            created_at=now,
        )

        try:
            await self.blobs.put(Blob.from_upload(record.primary_blob_id, primary))
            for slot, upload in companions.items():
                await self.blobs.put(Blob.from_upload(record.secondary_blob_ids[slot], upload))
        except StorageError:
            logger.error("Publish of %s aborted: payload write failed", record.id)
            raise

        snapshot = self.index.snapshot()
        self.index.append(record)
        await self._persist_index(snapshot, f"publish {record.id}")

        logger.info("Published %s (%r) by %s", record.id, record.title, owner_id)
        return record

    async def delete(self, requester_id: UserId | None, record_id: RecordId) -> bool:
        """Delete an owned record and its payloads. Returns False if the user declines."""
        if requester_id is None:
            raise AuthorizationError("Login required to delete", code="missing_identity")
        record = self.index.get(record_id)
        if record is None:
            raise NotFoundError(f"Record not found: {record_id}")
        if record.owner_id != requester_id:
            raise AuthorizationError(
                f"Only the owner can delete record {record_id}", code="not_owner"
            )

        if not await self.confirmation.confirm(DELETE_PROMPT.format(title=record.title)):
            logger.debug("Delete of %s declined", record_id)
            return False

        for key in record.blob_ids():
            await self.blobs.delete(key)

        snapshot = self.index.snapshot()
        self.index.remove(record_id)
        await self._persist_index(snapshot, f"delete {record_id}")

        logger.info("Deleted %s by %s", record_id, requester_id)
        return True

    async def toggle_like(self, actor_id: UserId | None, record_id: RecordId) -> LikeOutcome:
        """Like or unlike a record. Only a new like notifies the owner."""
        if actor_id is None:
            raise AuthorizationError("Login required to like", code="missing_identity")
        record = self.index.get(record_id)
        if record is None:
            raise NotFoundError(f"Record not found: {record_id}")
        if record.owner_id == actor_id:
            raise SelfLikeError()

        liked = record.toggle_like(actor_id)
        try:
            await self.index.persist()
        except StorageError:
            record.toggle_like(actor_id)
            logger.error("Persisting like on %s failed; reverted in memory", record_id)
            raise

        if liked:
            await self.notifications.notify_like(record.owner_id, actor_id, record.title)

        return LikeOutcome(liked=liked, like_count=record.like_count)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def list_all(self) -> list[CatalogEntry]:
        return await self._resolve_all(self.index.list_visible())

    async def search(self, keyword: str | None) -> list[CatalogEntry]:
        return await self._resolve_all(self.index.search(keyword))

    async def find_by_id(self, record_id: RecordId) -> CatalogEntry | None:
        record = self.index.find_by_id(record_id)
        if record is None:
            return None
        return await self._resolve(record)

    async def download(self, record_id: RecordId, slot: str = PRIMARY_SLOT) -> Download:
        """Fetch one payload of a visible record with a filename built from its title."""
        record = self.index.find_by_id(record_id)
        if record is None:
            raise NotFoundError(f"Record not found: {record_id}")
        key = record.blob_id_for(slot)
        blob = await self.blobs.get(key) if key else None
        if blob is None:
            raise NotFoundError(f"No {slot} file for record {record_id}")

        extension = file_extension(blob.filename)
        if not extension and slot in self.policy.rules:
            extension = self.policy.rules[slot].default_extension
        return Download(
            filename=filename_from_title(record.title, extension),
            content_type=blob.content_type,
            content=blob.content,
        )

    # -------------------------------------------------------------------------
    # Maintenance
    # -------------------------------------------------------------------------

    async def compact(self) -> int:
        dropped = await self.index.compact()
        logger.info("Compacted catalog, %d duplicate(s) removed", dropped)
        return dropped

    async def export_raw(self) -> list[Any]:
        return await self.index.raw_documents()

    async def clear_all(self, requester_id: UserId | None) -> int:
        """Remove every record and payload. Administrator only; asks for confirmation."""
        if requester_id is None:
            raise AuthorizationError("Login required", code="missing_identity")
        if self.admin_username is None or requester_id != self.admin_username:
            raise AuthorizationError("Only the administrator can clear the catalog", code="not_admin")

        records = self.index.records()
        if not await self.confirmation.confirm(CLEAR_PROMPT.format(count=len(records))):
            return 0

        for record in records:
            for key in record.blob_ids():
                await self.blobs.delete(key)
        await self.index.clear()

        logger.warning("Catalog cleared by %s (%d records)", requester_id, len(records))
        return len(records)

    async def identity_changed(self, identity: Identity | None) -> None:
        """SessionListener hook: reload both collections for the new session."""
        await self.index.load()
        await self.notifications.load()
        logger.debug("Catalog reloaded for %s", identity.user_id if identity else "anonymous")

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _unused_id(self, now: datetime) -> RecordId:
        while True:
            record_id = new_record_id(now)
            if not self.index.contains(record_id):
                return record_id

    async def _persist_index(self, snapshot: list[Record], action: str) -> None:
        try:
            await self.index.persist()
        except StorageError:
            self.index.restore(snapshot)
            logger.error("Persisting metadata for %s failed; in-memory index restored", action)
            raise

    async def _resolve_all(self, records: list[Record]) -> list[CatalogEntry]:
        entries = []
        for record in records:
            entry = await self._resolve(record)
            if entry is not None:
                entries.append(entry)
        return entries

    async def _resolve(self, record: Record) -> CatalogEntry | None:
        """Attach payloads. A record whose primary payload cannot be read is skipped."""
        try:
            primary = await self.blobs.get(record.primary_blob_id)
        except StorageError as e:
            logger.warning("Skipping %s: primary payload unreadable (%s)", record.id, e)
            return None
        if primary is None:
            logger.debug("Skipping %s: primary payload %s missing", record.id, record.primary_blob_id)
            return None

        secondary: dict[str, Blob | None] = {}
        for slot, key in record.secondary_blob_ids.items():
            try:
                secondary[slot] = await self.blobs.get(key)
            except StorageError as e:
                logger.warning("Companion %s of %s unreadable (%s)", slot, record.id, e)
                secondary[slot] = None

        return CatalogEntry(
            record=record,
            primary=primary,
            secondary=secondary,
            owner_active=await self.identities.identity_exists(record.owner_id),
        )
