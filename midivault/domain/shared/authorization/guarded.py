"""Wraps handler run() methods with their __auth__ gate."""

import logging
from collections.abc import Callable, Coroutine
from functools import wraps
from typing import Any

from midivault.domain.shared.authorization.gate import Authenticated, Gate, Public
from midivault.domain.shared.error import AuthorizationError, ConfigurationError

logger = logging.getLogger("midivault.authz")

# Unbound async handler method: (self, cmd) -> Coroutine -> Result
HandlerMethod = Callable[..., Coroutine[Any, Any, Any]]


def wrap_run_with_gate(cls: type, original_run: HandlerMethod) -> HandlerMethod:
    """Evaluate ``cls.__auth__`` before every call to ``run``.

    ``authenticated()`` handlers must carry an ``identity_provider`` field; the
    resolved identity is stored on ``self.principal`` for the handler body.
    """

    @wraps(original_run)
    async def gated_run(self: Any, cmd: Any) -> Any:
        gate = getattr(type(self), "__auth__", None)

        if not isinstance(gate, Gate):
            raise ConfigurationError(f"Handler {type(self).__name__} has no __auth__ declaration")

        if isinstance(gate, Public):
            return await original_run(self, cmd)

        if isinstance(gate, Authenticated):
            provider = getattr(self, "identity_provider", None)
            if provider is None:
                raise ConfigurationError(
                    f"Handler {type(self).__name__} is authenticated() but has no identity_provider"
                )
            identity = await provider.current_identity()
            if identity is None:
                raise AuthorizationError("Login required", code="missing_identity")

            logger.debug("Auth check: handler=%s, user_id=%s", type(self).__name__, identity.user_id)
            self.principal = identity
            return await original_run(self, cmd)

        raise ConfigurationError(  # pragma: no cover
            f"Handler {type(self).__name__} has unhandled __auth__ type: {type(gate).__name__}"
        )

    return gated_run
