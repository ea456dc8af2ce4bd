"""Pytest fixtures for database-backed catalog tests.

Tests run against a migrated SQLite database (aiosqlite) by default. Set
``PODCASTS_TEST_DB=pglite`` to run the same tests against an ephemeral
PostgreSQL started by py-pglite.

Examples
--------
>>> PODCASTS_TEST_DB=pglite pytest tests/catalog_storage
"""

from __future__ import annotations

import asyncio
import contextlib
import typing as typ

import pytest
import pytest_asyncio
import sqlalchemy as sa
import sqlalchemy.exc as sa_exc
from _catalog_db import TEST_DB_ENV, selected_backend, sqlite_url

from podcasts.catalog.service import CatalogService
from podcasts.catalog.storage import (
    SqlAlchemyUnitOfWork,
    apply_migrations,
    build_session_factory,
    create_engine_for_url,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker


@contextlib.asynccontextmanager
async def _pglite_engine(tmp_path: Path) -> typ.AsyncIterator[AsyncEngine]:
    """Start a py-pglite Postgres and yield an async engine bound to it."""
    try:
        from py_pglite import PGliteConfig, PGliteManager
    except ModuleNotFoundError as exc:
        msg = (
            f"{TEST_DB_ENV}=pglite requested, but py-pglite is not installed. "
            f"Install the test extra or unset {TEST_DB_ENV}."
        )
        raise RuntimeError(msg) from exc

    config = PGliteConfig(work_dir=tmp_path / "pglite")
    with PGliteManager(config):
        engine = create_engine_for_url(config.get_connection_string())
        try:
            await _wait_for_engine_ready(engine)
            yield engine
        finally:
            await engine.dispose()


async def _wait_for_engine_ready(engine: AsyncEngine) -> None:
    """Wait until py-pglite accepts connections."""
    max_attempts = 30
    for attempt in range(1, max_attempts + 1):
        try:
            async with engine.connect() as connection:
                await connection.execute(sa.text("SELECT 1"))
        except sa_exc.OperationalError:
            if attempt == max_attempts:
                raise
            await asyncio.sleep(0.1)
        else:
            return


@pytest_asyncio.fixture
async def database_engine(tmp_path: Path) -> typ.AsyncIterator[AsyncEngine]:
    """Yield an empty database engine for the selected backend."""
    if selected_backend() == "pglite":
        async with _pglite_engine(tmp_path) as engine:
            yield engine
        return

    engine = create_engine_for_url(sqlite_url(tmp_path))
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def migrated_engine(database_engine: AsyncEngine) -> typ.AsyncIterator[AsyncEngine]:
    """Yield an engine with every migration applied."""
    await apply_migrations(database_engine)
    yield database_engine


@pytest.fixture
def session_factory(migrated_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return a session factory bound to the migrated engine."""
    return build_session_factory(migrated_engine)


@pytest.fixture
def sql_catalog_service(
    session_factory: async_sessionmaker[AsyncSession],
) -> CatalogService:
    """Return a catalog service backed by the migrated test database."""
    return CatalogService(lambda: SqlAlchemyUnitOfWork(session_factory))
