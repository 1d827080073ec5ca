"""API test fixtures — async DB + FastAPI test client + fake Graph.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness check sees the test engine
    - get_outlook_client overridden with a client wired to FakeGraph

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so the route
      sessions and the test session see the same data
    - Seed helpers insert through the ORM directly, not the API, so each test
      exercises only the route it is about
"""

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

import artist_crm.infrastructure.database as db_module
from artist_crm.db.base import Base
from artist_crm.infrastructure.database import DatabaseSessionManager, get_db
from artist_crm.infrastructure.outlook_client import get_outlook_client
from artist_crm.main import app
from artist_crm.models.artist import Artist
from artist_crm.models.opportunity import Opportunity

from tests.fake_graph import FakeGraph


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def graph():
    return FakeGraph()


@pytest.fixture
async def client(test_engine, test_session_factory, graph):
    """FastAPI test client with DB and Outlook dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    outlook = graph.client()
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_outlook_client] = lambda: outlook

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
    await outlook.aclose()


# -- Seed helpers --------------------------------------------------------------

@pytest.fixture
def make_artist(test_db):
    async def _make(**overrides) -> Artist:
        fields = {
            "first_name": "Camille",
            "last_name": "Durand",
            "email": "camille@example.org",
            "discipline": "music",
        }
        fields.update(overrides)
        artist = Artist(**fields)
        test_db.add(artist)
        await test_db.commit()
        await test_db.refresh(artist)
        return artist
    return _make


@pytest.fixture
async def artist(make_artist):
    return await make_artist()


@pytest.fixture
def make_opportunity(test_db):
    async def _make(**overrides) -> Opportunity:
        fields = {
            "title": "Bourse de création",
            "type": "grant",
            "deadline": datetime(2030, 6, 1, tzinfo=timezone.utc),
        }
        fields.update(overrides)
        opportunity = Opportunity(**fields)
        test_db.add(opportunity)
        await test_db.commit()
        await test_db.refresh(opportunity)
        return opportunity
    return _make


@pytest.fixture
async def opportunity(make_opportunity):
    return await make_opportunity()
