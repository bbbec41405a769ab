"""Unit tests for UploadPolicy."""

import pytest

from midivault.domain.catalog.model.value import UploadFile, UploadRule
from midivault.domain.catalog.service.upload_policy import MIB, UploadPolicy
from midivault.domain.shared.error import ValidationError


def _upload(filename: str, size: int = 10) -> UploadFile:
    return UploadFile(filename=filename, content=b"x" * size)


def _small_policy() -> UploadPolicy:
    return UploadPolicy(
        {
            "midi": UploadRule(extensions=(".mid",), max_bytes=100),
            "audio": UploadRule(extensions=(".mp3",), max_bytes=50),
        }
    )


class TestUploadPolicyDefaults:
    def test_default_ceilings(self):
        policy = UploadPolicy()
        assert policy.rules["midi"].max_bytes == 150 * MIB
        assert policy.rules["video"].max_bytes == 150 * MIB
        assert policy.rules["audio"].max_bytes == 50 * MIB

    def test_secondary_slots(self):
        assert UploadPolicy().secondary_slots == ["video", "audio"]

    def test_primary_slot_is_required(self):
        with pytest.raises(ValueError):
            UploadPolicy({"audio": UploadRule(extensions=(".mp3",), max_bytes=1)})


class TestUploadPolicyValidate:
    def test_accepts_valid_bundle(self):
        _small_policy().validate("Etude", _upload("etude.mid"), {"audio": _upload("etude.mp3")})

    @pytest.mark.parametrize("title", [None, "", "   "])
    def test_rejects_missing_title(self, title):
        with pytest.raises(ValidationError) as exc:
            _small_policy().validate(title, _upload("etude.mid"))
        assert exc.value.field == "title"

    def test_rejects_missing_primary(self):
        with pytest.raises(ValidationError):
            _small_policy().validate("Etude", None)

    def test_extension_match_is_case_insensitive(self):
        _small_policy().validate("Etude", _upload("ETUDE.MID"))

    def test_rejects_wrong_primary_extension(self):
        with pytest.raises(ValidationError) as exc:
            _small_policy().validate("Etude", _upload("etude.txt"))
        assert exc.value.field == "midi"

    def test_file_exactly_at_ceiling_is_accepted(self):
        _small_policy().validate("Etude", _upload("etude.mid", size=100))

    def test_file_one_byte_over_ceiling_is_rejected(self):
        with pytest.raises(ValidationError, match="exceeds"):
            _small_policy().validate("Etude", _upload("etude.mid", size=101))

    def test_rejects_oversized_companion(self):
        with pytest.raises(ValidationError) as exc:
            _small_policy().validate(
                "Etude", _upload("etude.mid"), {"audio": _upload("etude.mp3", size=51)}
            )
        assert exc.value.field == "audio"

    def test_rejects_unknown_slot(self):
        with pytest.raises(ValidationError, match="Unknown payload slot"):
            _small_policy().validate("Etude", _upload("etude.mid"), {"video": _upload("a.mp4")})

    def test_title_checked_before_extension(self):
        with pytest.raises(ValidationError) as exc:
            _small_policy().validate("", _upload("etude.txt"))
        assert exc.value.field == "title"

    def test_rejects_primary_slot_as_companion(self):
        with pytest.raises(ValidationError) as exc:
            _small_policy().validate(
                "Etude", _upload("etude.mid"), {"midi": _upload("other.mid", size=20)}
            )
        assert exc.value.field == "midi"
