"""Runs one command or query handler inside a fresh container."""

import asyncio
import logging
import sys
from typing import Any

from midivault.application.di import create_container
from midivault.cli.console import get_console
from midivault.config import Config, configure_logging
from midivault.domain.shared.authorization.startup import validate_all_handlers
from midivault.domain.shared.error import DomainError, InfrastructureError
from midivault.domain.shared.port.confirmation import AlwaysConfirm, ConfirmationPort
from midivault.infrastructure.prompt.confirmation import RichConfirmation

logger = logging.getLogger(__name__)

EXIT_DOMAIN_ERROR = 1
EXIT_INFRASTRUCTURE_ERROR = 2


async def _execute(handler_type: type, message: Any, confirmation: ConfirmationPort) -> Any:
    config = Config()  # type: ignore[call-arg]
    configure_logging(config.logging)
    validate_all_handlers()

    container = create_container(confirmation, config)
    try:
        async with container() as uow:
            handler = await uow.get(handler_type)
            return await handler.run(message)
    finally:
        await container.close()


def run_handler(handler_type: type, message: Any, *, yes: bool = False) -> Any:
    """Run ``handler_type`` on ``message`` and return its result.

    Domain errors exit with status 1 and infrastructure errors with status 2,
    each after a single message on stderr.
    """
    console = get_console()
    confirmation: ConfirmationPort = AlwaysConfirm() if yes else RichConfirmation()
    try:
        return asyncio.run(_execute(handler_type, message, confirmation))
    except DomainError as e:
        console.error(e.message)
        sys.exit(EXIT_DOMAIN_ERROR)
    except InfrastructureError as e:
        logger.debug("Infrastructure failure", exc_info=True)
        console.error(e.message, hint="Check the storage location and the log for details")
        sys.exit(EXIT_INFRASTRUCTURE_ERROR)
