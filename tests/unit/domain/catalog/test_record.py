"""Unit tests for the Record model."""

from datetime import UTC, datetime

from midivault.domain.auth.model.value import UserId
from midivault.domain.catalog.model.record import Record
from midivault.domain.catalog.model.value import RecordId, new_record_id


def _make_record(**overrides) -> Record:
    defaults = dict(
        record_id=RecordId("1700000000000_abc123def"),
        title="Etude",
        owner_id=UserId("alice"),
        secondary_slots=[],
        created_at=datetime(2024, 1, 1, tzinfo=UTC),
    )
    defaults.update(overrides)
    return Record.publish(**defaults)


class TestRecordPublish:
    def test_blob_keys_derive_from_id(self):
        record = _make_record(secondary_slots=["video", "audio"])
        assert record.primary_blob_id == "1700000000000_abc123def_midi"
        assert record.secondary_blob_ids == {
            "video": "1700000000000_abc123def_video",
            "audio": "1700000000000_abc123def_audio",
        }

    def test_starts_approved_without_likes(self):
        record = _make_record()
        assert record.status == "approved"
        assert record.is_visible
        assert record.liked_by == []
        assert record.like_count == 0

    def test_blob_ids_list_primary_last(self):
        record = _make_record(secondary_slots=["video"])
        assert record.blob_ids() == [record.secondary_blob_ids["video"], record.primary_blob_id]

    def test_blob_id_for_unknown_slot(self):
        assert _make_record().blob_id_for("audio") is None


class TestRecordLikes:
    def test_toggle_adds_then_removes(self):
        record = _make_record()
        assert record.toggle_like(UserId("bob")) is True
        assert record.is_liked_by(UserId("bob"))
        assert record.toggle_like(UserId("bob")) is False
        assert record.liked_by == []

    def test_duplicate_likes_collapse_on_load(self):
        doc = _make_record().to_document()
        doc["likedBy"] = ["bob", "carol", "bob"]
        assert Record.model_validate(doc).liked_by == ["bob", "carol"]


class TestRecordDocument:
    def test_document_uses_camel_case_keys(self):
        doc = _make_record().to_document()
        assert doc["ownerId"] == "alice"
        assert doc["primaryBlobId"].endswith("_midi")
        assert doc["likedBy"] == []
        assert "owner_id" not in doc

    def test_unknown_status_and_extra_keys_round_trip(self):
        doc = _make_record().to_document()
        doc["status"] = "pending"
        doc["genre"] = "baroque"

        record = Record.model_validate(doc)

        assert not record.is_visible
        assert record.to_document() == doc

    def test_naive_timestamps_are_treated_as_utc(self):
        doc = _make_record().to_document()
        doc["createdAt"] = "2024-01-01T00:00:00"
        assert Record.model_validate(doc).created_at.tzinfo is not None

    def test_legacy_layout_is_upgraded(self):
        record = Record.model_validate(
            {
                "id": "1",
                "title": "Old",
                "username": "alice",
                "midiId": "1_midi",
                "videoId": "1_video",
                "audioId": None,
                "likes": ["bob"],
                "createdAt": "2023-05-01T12:00:00Z",
                "status": "approved",
            }
        )
        assert record.owner_id == "alice"
        assert record.primary_blob_id == "1_midi"
        assert record.secondary_blob_ids == {"video": "1_video"}
        assert record.liked_by == ["bob"]


class TestRecordId:
    def test_format(self):
        now = datetime(2024, 1, 1, tzinfo=UTC)
        record_id = new_record_id(now)
        millis, suffix = record_id.split("_")
        assert millis == str(int(now.timestamp() * 1000))
        assert len(suffix) == 9
        assert suffix.isalnum() and suffix == suffix.lower()
