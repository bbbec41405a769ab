"""Integration fixtures: a real container over a temporary SQLite database and blob directory."""

from collections.abc import AsyncIterator
from pathlib import Path

import pytest_asyncio
from dishka import AsyncContainer

from midivault.application.di import create_container
from midivault.config import Config, StorageConfig
from midivault.domain.shared.port.confirmation import AlwaysConfirm


@pytest_asyncio.fixture
async def container(tmp_path: Path) -> AsyncIterator[AsyncContainer]:
    config = Config(
        storage=StorageConfig(
            database_url=f"sqlite+aiosqlite:///{tmp_path}/midivault.db",
            blob_dir=str(tmp_path / "blobs"),
        )
    )
    container = create_container(AlwaysConfirm(), config)
    yield container
    await container.close()
