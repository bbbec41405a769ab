"""Upload validation for publish: title, primary payload, optional companions."""

from collections.abc import Mapping

from midivault.domain.catalog.model.value import (
    PRIMARY_SLOT,
    UploadFile,
    UploadRule,
    file_extension,
)
from midivault.domain.shared.error import ValidationError

MIB = 1024 * 1024

DEFAULT_RULES: dict[str, UploadRule] = {
    PRIMARY_SLOT: UploadRule(extensions=(".mid", ".zip", ".rar"), max_bytes=150 * MIB),
    "video": UploadRule(extensions=(".mp4", ".mov", ".webm"), max_bytes=150 * MIB),
    "audio": UploadRule(extensions=(".mp3", ".wav", ".flac"), max_bytes=50 * MIB),
}


class UploadPolicy:
    """Per-slot extension allow-lists and size ceilings.

    Extension checks are case-insensitive suffix matches on the filename; the
    content is never inspected. A file exactly at its ceiling is accepted.
    """

    def __init__(self, rules: Mapping[str, UploadRule] | None = None) -> None:
        self.rules = dict(rules if rules is not None else DEFAULT_RULES)
        if PRIMARY_SLOT not in self.rules:
            raise ValueError(f"Upload rules must define the primary slot '{PRIMARY_SLOT}'")

    @property
    def secondary_slots(self) -> list[str]:
        return [slot for slot in self.rules if slot != PRIMARY_SLOT]

    def rule_for(self, slot: str) -> UploadRule:
        rule = self.rules.get(slot)
        if rule is None:
            raise ValidationError(f"Unknown payload slot '{slot}'", field=slot)
        return rule

    def validate(
        self,
        title: str | None,
        primary: UploadFile | None,
        secondary: Mapping[str, UploadFile] | None = None,
    ) -> None:
        """Check publish inputs in order; the first failure is raised."""
        if not title or not title.strip() or primary is None:
            raise ValidationError("A title and a primary file are required", field="title")

        self.check_file(PRIMARY_SLOT, primary)
        for slot, upload in (secondary or {}).items():
            if slot == PRIMARY_SLOT:
                raise ValidationError(
                    f"The {PRIMARY_SLOT} file cannot also be given as a companion", field=slot
                )
            self.check_file(slot, upload)

    def check_file(self, slot: str, upload: UploadFile) -> None:
        rule = self.rule_for(slot)
        if not rule.accepts_name(upload.filename):
            raise ValidationError(
                f"File type '{file_extension(upload.filename)}' not accepted for {slot}. "
                f"Allowed: {list(rule.extensions)}",
                field=slot,
            )
        if upload.size > rule.max_bytes:
            raise ValidationError(
                f"{slot} file size {upload.size} exceeds maximum {rule.max_bytes}",
                field=slot,
            )
