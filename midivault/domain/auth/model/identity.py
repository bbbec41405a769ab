"""Identity - the acting user's handle, as stored in the current-identity slot."""

from dataclasses import dataclass
from typing import Any

from midivault.domain.auth.model.value import UserId


@dataclass(frozen=True)
class Identity:
    user_id: UserId
    email: str

    def to_document(self) -> dict[str, Any]:
        return {"username": self.user_id, "email": self.email}

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Identity":
        return cls(user_id=UserId(doc["username"]), email=doc.get("email", ""))


def user_id_of(identity: Identity | None) -> UserId | None:
    return identity.user_id if identity is not None else None
