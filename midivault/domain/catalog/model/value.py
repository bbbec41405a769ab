import hashlib
import secrets
import string
from datetime import datetime
from enum import StrEnum
from typing import NewType

from pydantic import Field

from midivault.domain.shared.model.value import ValueObject

RecordId = NewType("RecordId", str)

PRIMARY_SLOT = "midi"

_ID_ALPHABET = string.digits + string.ascii_lowercase


class RecordStatus(StrEnum):
    # Only APPROVED is ever written; other stored values are kept as plain strings.
    APPROVED = "approved"


def new_record_id(now: datetime) -> RecordId:
    """``<epoch milliseconds>_<9 random base36 chars>``."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return RecordId(f"{int(now.timestamp() * 1000)}_{suffix}")


def blob_key(record_id: RecordId, slot: str) -> str:
    """Blob Store key for a record's payload slot (e.g. ``<id>_midi``)."""
    return f"{record_id}_{slot}"


def filename_from_title(title: str, extension: str) -> str:
    """Local filename for a download. Path separators in the title become ``_``."""
    return title.replace("/", "_").replace("\\", "_") + extension


def file_extension(filename: str) -> str:
    """Extract file extension including dot, lower-cased (e.g., '.mid')."""
    dot_idx = filename.rfind(".")
    if dot_idx == -1:
        return ""
    return filename[dot_idx:].lower()


class UploadFile(ValueObject):
    """A file handed in for publishing."""

    filename: str
    content: bytes
    content_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)


class UploadRule(ValueObject):
    """Constraints for one payload slot."""

    extensions: tuple[str, ...]  # e.g., (".mid", ".zip")
    max_bytes: int

    @property
    def default_extension(self) -> str:
        return self.extensions[0] if self.extensions else ""

    def accepts_name(self, filename: str) -> bool:
        name = filename.lower()
        return any(name.endswith(ext.lower()) for ext in self.extensions)


class Blob(ValueObject):
    """An opaque payload plus the filename/type hint needed to rebuild a download name."""

    key: str
    filename: str
    content_type: str | None = None
    size: int
    checksum: str
    content: bytes = Field(repr=False)

    @classmethod
    def from_upload(cls, key: str, upload: UploadFile) -> "Blob":
        return cls(
            key=key,
            filename=upload.filename,
            content_type=upload.content_type,
            size=upload.size,
            checksum=f"sha256:{hashlib.sha256(upload.content).hexdigest()}",
            content=upload.content,
        )


class LikeOutcome(ValueObject):
    liked: bool
    like_count: int
