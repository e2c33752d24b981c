"""
Shared test fixtures.

Uses an in-memory SQLite database (via aiosqlite) so tests run without
Docker / PostgreSQL.  Doubles for the device, the map surface and the
routing engine live in ``tests.helpers``.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from courtnav.bridge.host import HostBridge
from courtnav.domain.entities import Court
from courtnav.infrastructure.database import Base
from courtnav.services.position import PositionProvider
from tests.helpers import (
    FakeLocationBackend,
    RecordingSurface,
    TestSessionFactory,
    make_court,
    test_engine,
)


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables, yield a session, then drop everything."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionFactory() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def courts() -> list[Court]:
    return [
        make_court("c1", 10.31, 123.90, name="Ayala Courts"),
        make_court("c2", 10.342, 123.911, name="Banilad Hub", phone_number=None),
        make_court("c3", 10.31, 123.979, name="Lapu-Lapu Beach Courts"),
    ]


@pytest.fixture
def location() -> FakeLocationBackend:
    return FakeLocationBackend()


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def bridge(surface: RecordingSurface) -> HostBridge:
    return HostBridge(surface)


@pytest.fixture
def positions(location: FakeLocationBackend) -> PositionProvider:
    return PositionProvider(location, timeout_seconds=1.0)
