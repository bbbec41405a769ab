"""Account - a registered local user."""

import hashlib
import hmac
import secrets
from datetime import UTC, datetime

from pydantic import Field

from midivault.domain.auth.model.identity import Identity
from midivault.domain.auth.model.value import UserId, default_email
from midivault.domain.shared.model.value import StoredModel

_ALGORITHM = "pbkdf2_sha256"
_ITERATIONS = 240_000


def hash_password(password: str, *, salt: str | None = None, iterations: int = _ITERATIONS) -> str:
    """Hash a password as ``pbkdf2_sha256$<iterations>$<salt>$<hex digest>``."""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), iterations)
    return f"{_ALGORITHM}${iterations}${salt}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    try:
        algorithm, iterations, salt, _ = encoded.split("$", 3)
    except ValueError:
        return False
    if algorithm != _ALGORITHM:
        return False
    candidate = hash_password(password, salt=salt, iterations=int(iterations))
    return hmac.compare_digest(candidate, encoded)


class Account(StoredModel):
    """A local account. Stored in the ``users`` slot keyed by username.

    Invariants:
    - `username` and `created_at` are immutable after creation
    - `password_hash` never holds a plain-text password
    """

    username: UserId
    password_hash: str = Field(alias="password")
    email: str
    created_at: datetime

    @classmethod
    def register(cls, username: UserId, password: str) -> "Account":
        return cls(
            username=username,
            password_hash=hash_password(password),
            email=default_email(username),
            created_at=datetime.now(UTC),
        )

    def check_password(self, password: str) -> bool:
        return verify_password(password, self.password_hash)

    def identity(self) -> Identity:
        return Identity(user_id=self.username, email=self.email)
