"""MetadataIndex - the ordered Record collection and its persisted form."""

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from midivault.domain.catalog.model.record import Record
from midivault.domain.catalog.model.value import RecordId
from midivault.domain.shared.error import ConflictError, NotFoundError
from midivault.domain.shared.port.slot_store import RECORDS_SLOT, SlotStore

logger = logging.getLogger(__name__)


def deduplicate(records: Iterable[Record]) -> list[Record]:
    """Collapse records sharing an id into the earliest-created one.

    Duplicates come from retried or concurrent publishes; the first successful
    publish is authoritative. On equal timestamps the first encountered record
    wins. Output keeps the position where each id first appeared, so running
    this on its own output changes nothing.
    """
    survivors: dict[RecordId, Record] = {}
    for record in records:
        existing = survivors.get(record.id)
        if existing is None or record.created_at < existing.created_at:
            survivors[record.id] = record
    return list(survivors.values())


def newest_first(records: Iterable[Record]) -> list[Record]:
    return sorted(records, key=lambda r: r.created_at, reverse=True)


class MetadataIndex:
    """Sole owner of the in-memory Record collection and sole writer of the records slot.

    append() and remove() only touch memory; callers persist() afterwards and
    restore() a snapshot() if persisting fails.
    """

    def __init__(self, slots: SlotStore) -> None:
        self._slots = slots
        self._records: list[Record] = []

    async def load(self) -> list[Record]:
        stored = await self._read()
        self._records = deduplicate(stored)
        dropped = len(stored) - len(self._records)
        if dropped:
            logger.info("Dropped %d duplicate record(s) on load", dropped)
        return list(self._records)

    async def persist(self) -> None:
        await self._slots.write(RECORDS_SLOT, [r.to_document() for r in self._records])

    async def raw_documents(self) -> list[Any]:
        """The records slot exactly as stored."""
        return list(await self._slots.read(RECORDS_SLOT) or [])

    # -------------------------------------------------------------------------
    # In-memory mutation
    # -------------------------------------------------------------------------

    def snapshot(self) -> list[Record]:
        return list(self._records)

    def restore(self, snapshot: list[Record]) -> None:
        self._records = list(snapshot)

    def append(self, record: Record) -> None:
        if self.contains(record.id):
            raise ConflictError(f"Record already exists: {record.id}")
        self._records.append(record)

    def remove(self, record_id: RecordId) -> Record:
        for i, record in enumerate(self._records):
            if record.id == record_id:
                return self._records.pop(i)
        raise NotFoundError(f"Record not found: {record_id}")

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def records(self) -> list[Record]:
        """Every stored record in creation order, visible or not."""
        return list(self._records)

    def get(self, record_id: RecordId) -> Record | None:
        return next((r for r in self._records if r.id == record_id), None)

    def contains(self, record_id: RecordId) -> bool:
        return self.get(record_id) is not None

    def list_visible(self) -> list[Record]:
        return newest_first(r for r in self._records if r.is_visible)

    def search(self, keyword: str | None) -> list[Record]:
        """Case-insensitive title match over visible records. Blank keyword lists everything."""
        if not keyword or not keyword.strip():
            return self.list_visible()
        needle = keyword.lower()
        return [r for r in self.list_visible() if needle in r.title.lower()]

    def find_by_id(self, record_id: RecordId) -> Record | None:
        record = self.get(record_id)
        if record is None or not record.is_visible:
            return None
        return record

    # -------------------------------------------------------------------------
    # Maintenance
    # -------------------------------------------------------------------------

    async def compact(self) -> int:
        """Write the deduplicated collection back. Returns how many stored entries went away."""
        stored = await self._read()
        self._records = deduplicate(self._records)
        await self.persist()
        return max(len(stored) - len(self._records), 0)

    async def clear(self) -> None:
        self._records = []
        await self.persist()

    async def _read(self) -> list[Record]:
        raw = await self._slots.read(RECORDS_SLOT) or []
        records: list[Record] = []
        for position, doc in enumerate(raw):
            try:
                records.append(Record.model_validate(doc))
            except PydanticValidationError as e:
                logger.warning("Skipping malformed record at position %d: %s", position, e)
        return records
