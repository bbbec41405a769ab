"""Custom Dishka scopes for midivault."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """midivault dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Process lifetime (stores, services, loaded collections)
    - UOW: Unit of Work (one CLI command)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
