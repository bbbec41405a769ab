from rich.console import Console
from rich.prompt import Confirm

from midivault.domain.shared.port.confirmation import ConfirmationPort


class RichConfirmation(ConfirmationPort):
    """Asks on the terminal. Defaults to "no" so an accidental Enter declines."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)

    async def confirm(self, prompt: str) -> bool:
        return Confirm.ask(prompt, console=self._console, default=False)
