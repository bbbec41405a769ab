"""Handler-level authorization gates: public() and authenticated()."""

from __future__ import annotations

from dataclasses import dataclass


class Gate:
    """Base for handler-level authorization gates.

    Every CommandHandler/QueryHandler must declare ``__auth__: ClassVar[Gate]``.
    """


@dataclass(frozen=True)
class Public(Gate):
    """No identity required."""


@dataclass(frozen=True)
class Authenticated(Gate):
    """Requires an active identity from the session."""


_PUBLIC = Public()
_AUTHENTICATED = Authenticated()


def public() -> Public:
    """Mark a handler as publicly accessible (no identity required)."""
    return _PUBLIC


def authenticated() -> Authenticated:
    """Mark a handler as requiring a logged-in identity."""
    return _AUTHENTICATED
