"""Alembic environment for the podcast catalog schema."""

from __future__ import annotations

import asyncio
import typing as typ
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import AsyncConnection, async_engine_from_config

from alembic import context
from podcasts.catalog.storage.models import Base
from podcasts.config import CatalogSettings

if typ.TYPE_CHECKING:
    from sqlalchemy.engine import Connection

config = context.config

if config.config_file_name and config.attributes.get("connection") is None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def _database_url() -> str:
    """Return the URL set by the caller, else the one from the environment."""
    configured = config.get_main_option("sqlalchemy.url")
    if configured:
        return configured
    url = CatalogSettings.from_environment().database_url
    config.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    return url


def _configure(**options: typ.Any) -> None:  # noqa: ANN401
    url = options.get("url") or _database_url()
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=url.startswith("sqlite"),
        **options,
    )


def run_migrations_offline() -> None:
    """Emit migration SQL without a database connection."""
    _configure(url=_database_url(), literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()


def _do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=connection.dialect.name == "sqlite",
    )
    with context.begin_transaction():
        context.run_migrations()


async def _run_with_new_engine() -> None:
    _database_url()
    section = config.get_section(config.config_ini_section) or {}
    connectable = async_engine_from_config(
        section,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with connectable.connect() as connection:
        await connection.run_sync(_do_run_migrations)
    await connectable.dispose()


def run_migrations_online() -> None:
    """Run migrations on a caller-supplied connection or a fresh engine."""
    connectable = config.attributes.get("connection")
    if connectable is None:
        asyncio.run(_run_with_new_engine())
    elif isinstance(connectable, AsyncConnection):
        asyncio.run(connectable.run_sync(_do_run_migrations))
    else:
        _do_run_migrations(connectable)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
