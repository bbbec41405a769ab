from dishka import AsyncContainer, from_context, make_async_container

from midivault.config import Config
from midivault.domain.auth.util.di import AuthProvider
from midivault.domain.catalog.util.di import CatalogProvider
from midivault.domain.shared.port.confirmation import ConfirmationPort
from midivault.infrastructure.persistence.di import PersistenceProvider
from midivault.util.di.base import Provider
from midivault.util.di.scope import Scope


class ContextProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)
    confirmation = from_context(provides=ConfirmationPort, scope=Scope.APP)


def create_container(confirmation: ConfirmationPort, config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        ContextProvider(),
        PersistenceProvider(),
        AuthProvider(),
        CatalogProvider(),
        context={Config: config, ConfirmationPort: confirmation},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
