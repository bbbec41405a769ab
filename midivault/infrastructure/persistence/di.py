from typing import AsyncIterable

from dishka import provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from midivault.config import Config
from midivault.domain.catalog.port.blob_store import BlobStore
from midivault.domain.shared.port.slot_store import SlotStore
from midivault.infrastructure.persistence.adapter.blob_store import LocalFileBlobStore
from midivault.infrastructure.persistence.adapter.slot_store import SQLAlchemySlotStore
from midivault.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from midivault.util.di.base import Provider
from midivault.util.di.scope import Scope


class PersistenceProvider(Provider):
    @provide(scope=Scope.APP)
    async def get_engine(self, config: Config) -> AsyncIterable[AsyncEngine]:
        engine = create_db_engine(config)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.APP)
    def get_slot_store(
        self,
        engine: AsyncEngine,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> SlotStore:
        return SQLAlchemySlotStore(engine, session_factory)

    @provide(scope=Scope.APP)
    def get_blob_store(self, config: Config) -> BlobStore:
        return LocalFileBlobStore(config.storage.blob_dir)
