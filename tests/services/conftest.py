"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - db_manager and dog_client singletons patched so the readiness probe sees test state
    - get_dog_client overridden with a real DogApiClient; upstream is mocked with respx

Design Decisions:
    - SQLite in-memory: fast, no external dependency, enforces the unique email constraint
    - Real client behind respx over a fake: route tests cover decoding and no-call guarantees
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from dogproxy.db.base import Base
from dogproxy.infrastructure.database import get_db, DatabaseSessionManager
from dogproxy.infrastructure.dog_api_client import (
    DogApiClient, DogApiConfig, get_dog_client,
)
from dogproxy.models.user import User
import dogproxy.infrastructure.database as db_module
import dogproxy.infrastructure.dog_api_client as dog_module
from dogproxy.main import app

DOG_API_BASE_URL = "https://dog.ceo/api"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
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
async def dog_api_client():
    client = DogApiClient(DogApiConfig(base_url=DOG_API_BASE_URL))
    yield client
    await client.aclose()


@pytest.fixture
async def client(test_engine, test_session_factory, dog_api_client):
    """FastAPI test client with DB and upstream dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_dog_client] = lambda: dog_api_client

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager
    original_dog_client = dog_module.dog_client
    dog_module.dog_client = dog_api_client

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
    dog_module.dog_client = original_dog_client


@pytest.fixture
async def seed_users(test_db):
    """Insert two users directly into the test DB."""
    users = [
        User(name="Ada Lovelace", email="ada@example.com", address="12 St James's Sq"),
        User(name="Alan Turing", email="alan@example.com", address="Bletchley Park"),
    ]
    test_db.add_all(users)
    await test_db.commit()
    for user in users:
        await test_db.refresh(user)
    return users
