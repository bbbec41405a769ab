"""Identity collaborator ports."""

from abc import abstractmethod
from typing import Protocol

from midivault.domain.auth.model.identity import Identity
from midivault.domain.auth.model.value import UserId
from midivault.domain.shared.port import Port


class IdentityProvider(Port, Protocol):
    """Supplies the acting identity and answers user-existence lookups.

    The catalog uses identity_exists() to flag records whose owner account was removed.
    """

    @abstractmethod
    async def current_identity(self) -> Identity | None: ...

    @abstractmethod
    async def identity_exists(self, user_id: UserId) -> bool: ...


class SessionListener(Port, Protocol):
    """Optional capability notified when the session identity changes."""

    @abstractmethod
    async def identity_changed(self, identity: Identity | None) -> None: ...
