import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from midivault.domain.shared.error import StorageError
from midivault.domain.shared.port.slot_store import SlotStore
from midivault.infrastructure.persistence.tables import metadata, slots_table

logger = logging.getLogger(__name__)


class SQLAlchemySlotStore(SlotStore):
    """Slot store backed by the ``slots`` table. Every write is its own transaction."""

    def __init__(
        self,
        engine: AsyncEngine,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        self._engine = engine
        self._session_factory = session_factory
        self._schema_ready = False

    async def read(self, name: str) -> Any | None:
        try:
            await self._ensure_schema()
            async with self._session_factory() as session:
                stmt = select(slots_table.c.payload).where(slots_table.c.name == name)
                result = await session.execute(stmt)
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Reading slot %s failed: %s", name, e)
            raise StorageError(f"Failed to read slot '{name}'") from e

    async def write(self, name: str, document: Any) -> None:
        values = {"payload": document, "updated_at": datetime.now(UTC)}
        try:
            await self._ensure_schema()
            async with self._session_factory() as session:
                stmt = select(slots_table.c.name).where(slots_table.c.name == name)
                existing = (await session.execute(stmt)).first()
                if existing:
                    await session.execute(
                        update(slots_table).where(slots_table.c.name == name).values(**values)
                    )
                else:
                    await session.execute(insert(slots_table).values(name=name, **values))
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("Writing slot %s failed: %s", name, e)
            raise StorageError(f"Failed to write slot '{name}'") from e

    async def clear(self, name: str) -> None:
        try:
            await self._ensure_schema()
            async with self._session_factory() as session:
                await session.execute(delete(slots_table).where(slots_table.c.name == name))
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("Clearing slot %s failed: %s", name, e)
            raise StorageError(f"Failed to clear slot '{name}'") from e

    async def _ensure_schema(self) -> None:
        if self._schema_ready:
            return
        async with self._engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
        self._schema_ready = True
