from abc import abstractmethod
from typing import Protocol

from midivault.domain.catalog.model.value import Blob
from midivault.domain.shared.port import Port


class BlobStore(Port, Protocol):
    """Binary payloads keyed by an opaque string id. Knows nothing about records.

    Every call commits on its own; nothing spans several keys.
    """

    @abstractmethod
    async def put(self, blob: Blob) -> None:
        """Store ``blob`` under ``blob.key``, silently replacing an existing payload."""
        ...

    @abstractmethod
    async def get(self, key: str) -> Blob | None:
        """Return the payload, or None when the key is absent."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove the payload. Deleting a missing key is a no-op."""
        ...

    @abstractmethod
    async def exists(self, key: str) -> bool: ...
