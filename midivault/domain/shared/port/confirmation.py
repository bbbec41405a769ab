from abc import abstractmethod
from typing import Protocol

from midivault.domain.shared.port import Port


class ConfirmationPort(Port, Protocol):
    """Asks the acting user to approve a destructive or irreversible action."""

    @abstractmethod
    async def confirm(self, prompt: str) -> bool: ...


class AlwaysConfirm(ConfirmationPort):
    """Approves every prompt. Used for non-interactive runs (``--yes``) and tests."""

    async def confirm(self, prompt: str) -> bool:
        return True


class NeverConfirm(ConfirmationPort):
    async def confirm(self, prompt: str) -> bool:
        return False
