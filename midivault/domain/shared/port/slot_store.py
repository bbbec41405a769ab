"""Slot store port - named persistent JSON documents."""

from abc import abstractmethod
from typing import Any, Protocol

from midivault.domain.shared.port import Port

RECORDS_SLOT = "records"
NOTIFICATIONS_SLOT = "notifications"
USERS_SLOT = "users"
CURRENT_USER_SLOT = "current_user"


class SlotStore(Port, Protocol):
    """Each slot holds one JSON-compatible document (a list or an object) or nothing.

    A write replaces the whole document and commits before returning.
    Failures are raised as StorageError.
    """

    @abstractmethod
    async def read(self, name: str) -> Any | None: ...

    @abstractmethod
    async def write(self, name: str, document: Any) -> None: ...

    @abstractmethod
    async def clear(self, name: str) -> None: ...
