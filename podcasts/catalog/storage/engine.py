"""Engine and session-factory construction for the catalog database."""

from __future__ import annotations

import typing as typ

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

if typ.TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from podcasts.config import CatalogSettings


def _enable_sqlite_foreign_keys(dbapi_connection: typ.Any, _record: object) -> None:  # noqa: ANN401
    # SQLite leaves foreign keys off for every new connection.
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys = ON")
    finally:
        cursor.close()


def create_engine_for_url(database_url: str, *, echo: bool = False) -> AsyncEngine:
    """Create an async engine, enabling foreign keys on SQLite.

    Parameters
    ----------
    database_url : str
        SQLAlchemy async URL, for example ``sqlite+aiosqlite:///podcasts.db``
        or ``postgresql+psycopg://user@host/podcasts``.
    echo : bool, optional
        Whether to echo emitted SQL.

    Returns
    -------
    AsyncEngine
        The configured engine.
    """
    engine = create_async_engine(database_url, echo=echo, pool_pre_ping=True)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_engine_from_settings(settings: CatalogSettings) -> AsyncEngine:
    """Create the catalog engine described by ``settings``."""
    return create_engine_for_url(settings.database_url, echo=settings.sql_echo)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return a session factory whose sessions keep objects usable after commit."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
