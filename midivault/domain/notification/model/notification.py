from datetime import UTC, datetime

from pydantic import field_validator

from midivault.domain.auth.model.value import UserId
from midivault.domain.shared.model.value import StoredModel


class Notification(StoredModel):
    """Tells a record owner that someone liked their record.

    Only `read` ever changes after creation. `subject_title` is copied at like time so
    the notification still reads correctly after the record is deleted.
    """

    id: str
    recipient_id: UserId
    actor_id: UserId
    subject_title: str
    created_at: datetime
    read: bool = False

    @field_validator("created_at")
    @classmethod
    def _aware(cls, v: datetime) -> datetime:
        return v if v.tzinfo is not None else v.replace(tzinfo=UTC)

    def mark_read(self) -> bool:
        """Returns True if the flag changed."""
        if self.read:
            return False
        self.read = True
        return True
