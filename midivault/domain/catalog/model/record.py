from datetime import UTC, datetime
from typing import Any

from pydantic import field_validator, model_validator

from midivault.domain.auth.model.value import UserId
from midivault.domain.catalog.model.value import (
    PRIMARY_SLOT,
    RecordId,
    RecordStatus,
    blob_key,
)
from midivault.domain.shared.model.value import StoredModel

# Keys used by the first, browser-only storage layout.
_LEGACY_SLOT_KEYS = {"videoId": "video", "audioId": "audio"}


class Record(StoredModel):
    """A published catalog entry.

    Invariants:
    - `id`, `title`, `owner_id`, blob ids and `created_at` are immutable after publish
    - `liked_by` holds each user at most once, in the order they liked
    - `status` round-trips unchanged, even for values this version never writes
    """

    id: RecordId
    title: str
    owner_id: UserId
    primary_blob_id: str
    secondary_blob_ids: dict[str, str] = {}
    liked_by: list[UserId] = []
    created_at: datetime
    status: str = RecordStatus.APPROVED.value

    @model_validator(mode="before")
    @classmethod
    def _upgrade_legacy_layout(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "midiId" not in data:
            return data
        data = dict(data)
        data.setdefault("ownerId", data.pop("username", None))
        data.setdefault("primaryBlobId", data.pop("midiId"))
        data.setdefault("likedBy", data.pop("likes", []))
        secondary = {}
        for key, slot in _LEGACY_SLOT_KEYS.items():
            value = data.pop(key, None)
            if value:
                secondary[slot] = value
        data.setdefault("secondaryBlobIds", secondary)
        return data

    @field_validator("liked_by")
    @classmethod
    def _unique_likes(cls, v: list[UserId]) -> list[UserId]:
        return list(dict.fromkeys(v))

    @field_validator("created_at")
    @classmethod
    def _aware(cls, v: datetime) -> datetime:
        return v if v.tzinfo is not None else v.replace(tzinfo=UTC)

    @classmethod
    def publish(
        cls,
        record_id: RecordId,
        title: str,
        owner_id: UserId,
        secondary_slots: list[str],
        created_at: datetime,
    ) -> "Record":
        return cls(
            id=record_id,
            title=title,
            owner_id=owner_id,
            primary_blob_id=blob_key(record_id, PRIMARY_SLOT),
            secondary_blob_ids={slot: blob_key(record_id, slot) for slot in secondary_slots},
            liked_by=[],
            created_at=created_at,
            status=RecordStatus.APPROVED.value,
        )

    @property
    def is_visible(self) -> bool:
        return self.status == RecordStatus.APPROVED

    @property
    def like_count(self) -> int:
        return len(self.liked_by)

    def blob_ids(self) -> list[str]:
        """All referenced blob keys, optional ones first and the primary last."""
        return [*self.secondary_blob_ids.values(), self.primary_blob_id]

    def blob_id_for(self, slot: str) -> str | None:
        if slot == PRIMARY_SLOT:
            return self.primary_blob_id
        return self.secondary_blob_ids.get(slot)

    def is_liked_by(self, user_id: UserId) -> bool:
        return user_id in self.liked_by

    def toggle_like(self, user_id: UserId) -> bool:
        """Flip ``user_id``'s membership in `liked_by`. Returns True if now liked."""
        if user_id in self.liked_by:
            self.liked_by = [u for u in self.liked_by if u != user_id]
            return False
        self.liked_by = [*self.liked_by, user_id]
        return True
