"""Shared fixtures: a throwaway SQLite store per test and an ASGI client bound to it."""

from httpx import ASGITransport, AsyncClient
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from livingbook.db.base import Base
from livingbook.db.session import get_db
from livingbook.main import app


@pytest_asyncio.fixture(scope="function")
async def async_engine(tmp_path):
    """File-backed so several sessions can hit the same database concurrently."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'livingbook_test.db'}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_factory(async_engine):
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(scope="function")
async def async_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def async_client(session_factory):
    """Every request gets its own session, like in production."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
