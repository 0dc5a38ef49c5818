"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from urllib.parse import urlparse

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from helpdesk.config import get_settings
from helpdesk.infrastructure.database import Base, engine
from helpdesk.infrastructure.database.session import async_session_factory
from helpdesk.infrastructure.database.repositories import (
    SQLAlchemySkillRepository,
    SQLAlchemyUserRepository,
)
from helpdesk.application.services import SkillService
from helpdesk.infrastructure.dependencies import get_change_feed
from helpdesk.infrastructure.logging.log_config import setup_logging
from helpdesk.presentation.api.router import router as api_router
from helpdesk.presentation.functions.llm_command import router as llm_command_router

logger = logging.getLogger(__name__)


async def _ensure_database_exists() -> None:
    """Create the PostgreSQL database if it does not yet exist.

    Connects to the ``postgres`` maintenance database and issues
    ``CREATE DATABASE`` when the target is missing. Other backends are left
    alone.
    """
    import asyncpg

    settings = get_settings()
    if not settings.database_url.startswith("postgresql://"):
        return
    db_name = urlparse(settings.database_url).path.lstrip("/")
    if not db_name:
        return

    maintenance_url = settings.database_url.rsplit("/", 1)[0] + "/postgres"
    try:
        conn = await asyncpg.connect(maintenance_url)
        try:
            exists = await conn.fetchval("SELECT 1 FROM pg_database WHERE datname = $1", db_name)
            if not exists:
                # CREATE DATABASE cannot run inside a transaction block
                await conn.execute(f'CREATE DATABASE "{db_name}"')
                logger.info("Created database '%s'", db_name)
        finally:
            await conn.close()
    except (OSError, asyncpg.PostgresError) as exc:
        logger.warning("Could not auto-create database '%s': %s", db_name, exc)


async def _seed_skill_vocabulary() -> None:
    async with async_session_factory() as session:
        service = SkillService(SQLAlchemySkillRepository(session), SQLAlchemyUserRepository(session))
        await service.seed_defaults()
        await session.commit()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create tables and seed vocabularies on startup; close change streams on shutdown."""
    setup_logging()

    await _ensure_database_exists()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await _seed_skill_vocabulary()

    yield

    await get_change_feed().shutdown()
    await engine.dispose()


def create_api_app() -> FastAPI:
    """Admin REST API, served under ``/api`` with the configured CORS origins."""
    settings = get_settings()
    api = FastAPI(title=settings.app_title, version=settings.app_version)
    api.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    api.include_router(api_router)
    return api


def create_functions_app() -> FastAPI:
    """Browser-callable functions under ``/functions/v1``.

    No CORS middleware here: each handler sets permissive CORS headers
    itself, including on the OPTIONS preflight.
    """
    settings = get_settings()
    functions = FastAPI(title=f"{settings.app_title} functions", version=settings.app_version)
    functions.include_router(llm_command_router)
    return functions


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.mount("/api", create_api_app())
    app.mount("/functions/v1", create_functions_app())
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "helpdesk.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
