"""Startup validation for handler authorization declarations."""

import logging

from midivault.domain.shared.authorization.gate import Gate
from midivault.domain.shared.command import CommandHandler
from midivault.domain.shared.error import ConfigurationError
from midivault.domain.shared.query import QueryHandler

logger = logging.getLogger(__name__)


def _check_handler_class(handler_cls: type) -> None:
    """Raise ConfigurationError if the handler does not declare a Gate in __auth__."""
    if not isinstance(getattr(handler_cls, "__auth__", None), Gate):
        raise ConfigurationError(f"Handler {handler_cls.__name__} has no __auth__ declaration")


def validate_all_handlers() -> None:
    """Scan all imported CommandHandler and QueryHandler subclasses.

    Raises ConfigurationError listing every handler missing an __auth__ declaration.
    """
    violations: list[str] = []

    for handler_cls in [*CommandHandler.__subclasses__(), *QueryHandler.__subclasses__()]:
        try:
            _check_handler_class(handler_cls)
        except ConfigurationError as e:
            violations.append(str(e))

    if violations:
        raise ConfigurationError(
            f"Authorization validation failed for {len(violations)} handler(s):\n"
            + "\n".join(f"  - {v}" for v in violations)
        )

    logger.debug("Authorization startup validation passed for all handlers")
