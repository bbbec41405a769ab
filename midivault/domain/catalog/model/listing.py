"""Read models handed to the presentation layer."""

from pydantic import BaseModel

from midivault.domain.catalog.model.record import Record
from midivault.domain.catalog.model.value import Blob
from midivault.domain.shared.model.value import ValueObject

REMOVED_OWNER_LABEL = "[account removed]"


class CatalogEntry(BaseModel):
    """A visible record with its payloads resolved from the Blob Store."""

    record: Record
    primary: Blob
    secondary: dict[str, Blob | None] = {}
    owner_active: bool = True

    @property
    def owner_display(self) -> str:
        return self.record.owner_id if self.owner_active else REMOVED_OWNER_LABEL


class Download(ValueObject):
    filename: str
    content_type: str | None = None
    content: bytes
