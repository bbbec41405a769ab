"""Publish, browse, like, delete and download records."""

import mimetypes
from pathlib import Path

from midivault.cli.console import get_console
from midivault.cli.util.runner import run_handler
from midivault.domain.catalog.command.delete import DeleteRecord, DeleteRecordHandler
from midivault.domain.catalog.command.like import ToggleLike, ToggleLikeHandler
from midivault.domain.catalog.command.publish import PublishRecord, PublishRecordHandler
from midivault.domain.catalog.model.value import PRIMARY_SLOT, RecordId, UploadFile
from midivault.domain.catalog.query.download import DownloadPayload, DownloadPayloadHandler
from midivault.domain.catalog.query.get_record import GetRecord, GetRecordHandler
from midivault.domain.catalog.query.list_records import (
    ListRecords,
    ListRecordsHandler,
    SearchRecords,
    SearchRecordsHandler,
)


def _upload(path: Path) -> UploadFile:
    content_type, _ = mimetypes.guess_type(path.name)
    return UploadFile(filename=path.name, content=path.read_bytes(), content_type=content_type)


def publish(
    title: str,
    midi: Path,
    /,
    *,
    video: Path | None = None,
    audio: Path | None = None,
) -> None:
    """Publish a MIDI file with optional video and audio companions.

    Args:
        title: Display title.
        midi: Primary file (.mid, .zip or .rar).
        video: Optional performance video.
        audio: Optional audio rendering.
    """
    secondary = {
        slot: _upload(path) for slot, path in (("video", video), ("audio", audio)) if path
    }
    result = run_handler(
        PublishRecordHandler,
        PublishRecord(title=title, primary=_upload(midi), secondary=secondary),
    )
    get_console().success(f"Published {result.record_id}")


def list_records() -> None:
    """List every record, newest first."""
    result = run_handler(ListRecordsHandler, ListRecords())
    get_console().record_list(result.items)


def search(keyword: str = "", /) -> None:
    """Search record titles (case-insensitive).

    Args:
        keyword: Text to look for. Empty lists everything.
    """
    result = run_handler(SearchRecordsHandler, SearchRecords(keyword=keyword))
    get_console().record_list(result.items, title=f"Results for '{keyword}'" if keyword else None)


def show(record_id: str, /) -> None:
    """Show one record with its files."""
    result = run_handler(GetRecordHandler, GetRecord(record_id=RecordId(record_id)))
    get_console().record_detail(result.entry)


def like(record_id: str, /) -> None:
    """Like a record, or remove your like."""
    result = run_handler(ToggleLikeHandler, ToggleLike(record_id=RecordId(record_id)))
    verb = "Liked" if result.liked else "Unliked"
    get_console().success(f"{verb} ({result.like_count} like{'s' if result.like_count != 1 else ''})")


def delete(record_id: str, /, *, yes: bool = False) -> None:
    """Delete one of your records and its files.

    Args:
        record_id: Record to delete.
        yes: Skip the confirmation prompt.
    """
    console = get_console()
    result = run_handler(DeleteRecordHandler, DeleteRecord(record_id=RecordId(record_id)), yes=yes)
    if result.deleted:
        console.success(f"Deleted {record_id}")
    else:
        console.warning("Aborted")


def download(
    record_id: str,
    /,
    *,
    slot: str = PRIMARY_SLOT,
    output: Path = Path("."),
) -> None:
    """Save a record's file, named after the record title.

    Args:
        record_id: Record to download from.
        slot: Which file to fetch (midi, video, audio).
        output: Target directory.
    """
    result = run_handler(
        DownloadPayloadHandler,
        DownloadPayload(record_id=RecordId(record_id), slot=slot),
    )
    output.mkdir(parents=True, exist_ok=True)
    target = output / result.filename
    target.write_bytes(result.content)
    get_console().success(f"Saved {target}")
