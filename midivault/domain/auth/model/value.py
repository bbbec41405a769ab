"""Value objects for the auth domain."""

from typing import NewType

UserId = NewType("UserId", str)
"""Username of an account. Records and notifications refer to users by this value."""


def default_email(user_id: UserId) -> str:
    return f"{user_id}@example.com"
