"""Fixtures for database-backed tests on a throwaway SQLite file."""

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from helpdesk.application.services import ChangeFeed
from helpdesk.infrastructure.database import Base, enable_sqlite_foreign_keys, get_db_session
from helpdesk.infrastructure.dependencies import get_change_feed, get_session_factory
from helpdesk.main import create_api_app, create_functions_app


@pytest_asyncio.fixture
async def db_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Fresh schema per test; a file database so concurrent sessions get their own connection."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'helpdesk.db'}")
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


def _session_dependency(session_factory: async_sessionmaker[AsyncSession]):
    async def override() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return override


def bind_to_database(app, session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Point an app's database dependencies at the test database."""
    app.dependency_overrides[get_db_session] = _session_dependency(session_factory)
    app.dependency_overrides[get_session_factory] = lambda: session_factory


@pytest_asyncio.fixture
async def api_app(session_factory):
    """The admin API app on the test database, with its own change feed."""
    api = create_api_app()
    bind_to_database(api, session_factory)
    feed = ChangeFeed()
    api.dependency_overrides[get_change_feed] = lambda: feed
    return api


@pytest_asyncio.fixture
async def api_client(api_app) -> AsyncGenerator[AsyncClient, None]:
    """Client for the admin API app mounted at the root, so paths start with /v1."""
    async with AsyncClient(transport=ASGITransport(app=api_app), base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def functions_app(session_factory):
    """The functions app on the test database; tests override the chat provider."""
    functions = create_functions_app()
    bind_to_database(functions, session_factory)
    return functions
