"""Test configuration and shared fixtures."""

import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tests.fakes import FakeRedis, create_tables, sqlite_engine


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def app(fake_redis):
    from todo_app.cache.redis_client import get_redis
    from todo_app.main import app as application

    application.dependency_overrides[get_redis] = lambda: fake_redis
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def db_session_factory(tmp_path):
    """Session factory over a fresh SQLite file with all tables created."""
    engine = sqlite_engine(f"sqlite+aiosqlite:///{tmp_path / 'todos.db'}")
    asyncio.run(create_tables(engine))
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def db_client(app, db_session_factory):
    """Client whose requests go through the database backend."""
    from todo_app.api.context import get_backend_db

    async def _db():
        async with db_session_factory() as session:
            yield session

    app.dependency_overrides[get_backend_db] = _db
    return TestClient(app)
