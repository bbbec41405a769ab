"""Catalog housekeeping commands."""

import json

import cyclopts

from midivault.cli.console import get_console
from midivault.cli.util.runner import run_handler
from midivault.domain.catalog.command.maintenance import (
    ClearCatalog,
    ClearCatalogHandler,
    CompactCatalog,
    CompactCatalogHandler,
)
from midivault.domain.catalog.query.export import ExportRecords, ExportRecordsHandler

app = cyclopts.App(name="maintenance", help="Catalog housekeeping")


@app.command
def compact() -> None:
    """Rewrite stored metadata without duplicate records."""
    result = run_handler(CompactCatalogHandler, CompactCatalog())
    get_console().success(f"Removed {result.duplicates_removed} duplicate(s)")


@app.command
def dump() -> None:
    """Print the stored record metadata as JSON."""
    result = run_handler(ExportRecordsHandler, ExportRecords())
    get_console().print_json(json.dumps(result.documents))


@app.command
def clear(*, yes: bool = False) -> None:
    """Remove every record and file. Administrator only.

    Args:
        yes: Skip the confirmation prompt.
    """
    result = run_handler(ClearCatalogHandler, ClearCatalog(), yes=yes)
    get_console().success(f"Removed {result.records_removed} record(s)")
