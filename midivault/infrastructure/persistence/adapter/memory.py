"""In-memory adapters for tests and throwaway sessions."""

import copy
from typing import Any

from midivault.domain.catalog.model.value import Blob
from midivault.domain.catalog.port.blob_store import BlobStore
from midivault.domain.shared.port.slot_store import SlotStore


class InMemorySlotStore(SlotStore):
    """Documents are deep-copied in and out so callers never share state with the store."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self.slots: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    async def read(self, name: str) -> Any | None:
        return copy.deepcopy(self.slots.get(name))

    async def write(self, name: str, document: Any) -> None:
        self.slots[name] = copy.deepcopy(document)

    async def clear(self, name: str) -> None:
        self.slots.pop(name, None)


class InMemoryBlobStore(BlobStore):
    def __init__(self) -> None:
        self.blobs: dict[str, Blob] = {}

    async def put(self, blob: Blob) -> None:
        self.blobs[blob.key] = blob

    async def get(self, key: str) -> Blob | None:
        return self.blobs.get(key)

    async def delete(self, key: str) -> None:
        self.blobs.pop(key, None)

    async def exists(self, key: str) -> bool:
        return key in self.blobs
