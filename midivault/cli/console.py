"""Console output for the CLI.

Provides a Console class that wraps rich for consistent output.
All CLI output should go through this module.
"""

from datetime import UTC, datetime
from typing import Any

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.table import Table

from midivault.domain.catalog.model.listing import CatalogEntry
from midivault.domain.notification.model.notification import Notification


def relative_time(dt: datetime) -> str:
    """Convert a timestamp to a relative time string (e.g., '2 hours ago')."""
    delta = datetime.now(UTC) - dt
    seconds = delta.total_seconds()
    if seconds < 60:
        return "just now"
    elif seconds < 3600:
        mins = int(seconds // 60)
        return f"{mins} minute{'s' if mins != 1 else ''} ago"
    elif seconds < 86400:
        hours = int(seconds // 3600)
        return f"{hours} hour{'s' if hours != 1 else ''} ago"
    elif seconds < 604800:
        days = int(seconds // 86400)
        return f"{days} day{'s' if days != 1 else ''} ago"
    return dt.strftime("%Y-%m-%d %H:%M")


def human_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "KiB", "MiB"):
        if value < 1024 or unit == "MiB":
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{size} B"  # pragma: no cover


class Console:
    """CLI output manager wrapping rich."""

    def __init__(
        self,
        *,
        force_terminal: bool | None = None,
        quiet: bool = False,
    ) -> None:
        self._console = RichConsole(force_terminal=force_terminal, stderr=False)
        self._err_console = RichConsole(force_terminal=force_terminal, stderr=True)
        self._quiet = quiet

    # -------------------------------------------------------------------------
    # Status messages
    # -------------------------------------------------------------------------

    def success(self, message: str) -> None:
        self._console.print(f"[green]✓[/green] {message}")

    def error(self, message: str, *, hint: str | None = None) -> None:
        """Print an error message to stderr."""
        self._err_console.print(f"[red]✗[/red] {message}")
        if hint:
            self._err_console.print(f"  [dim]{hint}[/dim]")

    def warning(self, message: str) -> None:
        self._console.print(f"[yellow]⚠[/yellow] {message}")

    def info(self, message: str) -> None:
        """Print an info message (suppressed in quiet mode)."""
        if not self._quiet:
            self._console.print(f"[dim]{message}[/dim]")

    def print(self, *args: Any, **kwargs: Any) -> None:
        self._console.print(*args, **kwargs)

    def print_json(self, data: str) -> None:
        self._console.print_json(data)

    # -------------------------------------------------------------------------
    # Catalog output
    # -------------------------------------------------------------------------

    def record_list(self, entries: list[CatalogEntry], *, title: str | None = None) -> None:
        if not entries:
            self.warning("No records found")
            return

        table = Table(title=title, show_header=True, header_style="bold")
        table.add_column("ID", style="dim")
        table.add_column("Title")
        table.add_column("Owner")
        table.add_column("Likes", justify="right")
        table.add_column("Files")
        table.add_column("Published")

        for entry in entries:
            record = entry.record
            files = ["midi", *(slot for slot, blob in entry.secondary.items() if blob is not None)]
            table.add_row(
                record.id,
                record.title,
                entry.owner_display if entry.owner_active else f"[dim]{entry.owner_display}[/dim]",
                str(record.like_count),
                ", ".join(files),
                relative_time(record.created_at),
            )

        self._console.print(table)

    def record_detail(self, entry: CatalogEntry) -> None:
        """Print detailed record view."""
        record = entry.record
        lines = [
            f"[cyan]Owner:[/cyan] {entry.owner_display}",
            f"[cyan]Published:[/cyan] {record.created_at:%Y-%m-%d %H:%M} ({relative_time(record.created_at)})",
            f"[cyan]Likes:[/cyan] {record.like_count}",
            "",
            f"[cyan]midi:[/cyan] {entry.primary.filename} ({human_size(entry.primary.size)})",
        ]
        for slot, blob in entry.secondary.items():
            if blob is None:
                lines.append(f"[cyan]{slot}:[/cyan] [dim]missing[/dim]")
            else:
                lines.append(f"[cyan]{slot}:[/cyan] {blob.filename} ({human_size(blob.size)})")

        self._console.print(
            Panel(
                "\n".join(lines),
                title=f"[bold]{record.title}[/bold]",
                subtitle=f"[dim]{record.id}[/dim]",
                border_style="blue",
                padding=(1, 2),
            )
        )

    # -------------------------------------------------------------------------
    # Notifications
    # -------------------------------------------------------------------------

    def notifications(self, items: list[Notification], unread: int) -> None:
        if not items:
            self.info("No notifications")
            return

        self._console.print(f"{unread} unread of {len(items)}:\n")
        for n in items:
            marker = "[dim]·[/dim]" if n.read else "[bold blue]●[/bold blue]"
            self._console.print(
                f"{marker} [bold]{n.actor_id}[/bold] liked “{n.subject_title}” "
                f"[dim]{relative_time(n.created_at)} · {n.id}[/dim]"
            )


# Module-level default instance for convenience
_default: Console | None = None


def get_console() -> Console:
    """Get the default console instance."""
    global _default
    if _default is None:
        _default = Console()
    return _default
