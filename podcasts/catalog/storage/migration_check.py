"""Schema drift detection between ORM models and Alembic migrations.

Applies every migration to an ephemeral PostgreSQL (py-pglite) database and
compares the result with ``Base.metadata``. A non-zero exit code lets CI
block model changes that ship without a migration.

Examples
--------
>>> python -m podcasts.catalog.storage.migration_check
"""

from __future__ import annotations

import asyncio
import pathlib
import sys
import tempfile
import typing as typ

from alembic.autogenerate import compare_metadata
from alembic.migration import MigrationContext

from podcasts.logging import get_logger, log_error, log_info

from .migrations import apply_migrations
from .models import Base

if typ.TYPE_CHECKING:
    import sqlalchemy as sa
    from sqlalchemy.engine import Connection
    from sqlalchemy.ext.asyncio import AsyncEngine

_logger = get_logger(__name__)


def _compare_schema(
    connection: Connection,
    metadata: sa.MetaData,
) -> list[tuple[object, ...]]:
    ctx = MigrationContext.configure(connection)
    return typ.cast("list[tuple[object, ...]]", compare_metadata(ctx, metadata))


async def detect_schema_drift(engine: AsyncEngine) -> list[tuple[object, ...]]:
    """Detect differences between applied migrations and ORM models.

    Parameters
    ----------
    engine : AsyncEngine
        Engine whose database already has every migration applied.

    Returns
    -------
    list[tuple[object, ...]]
        Differences found. An empty list means models and migrations agree.
    """
    async with engine.connect() as connection:
        return await connection.run_sync(_compare_schema, Base.metadata)


async def check_migrations_cli() -> int:
    """Run the schema drift check as a CLI entrypoint.

    Returns
    -------
    int
        0 when models and migrations match, 1 when drift is detected, 2 when
        the ephemeral database cannot be started.
    """
    try:
        from py_pglite import PGliteConfig, PGliteManager
    except ModuleNotFoundError:
        log_error(_logger, "py-pglite is not installed; cannot run drift check.")
        return 2

    from sqlalchemy.ext.asyncio import create_async_engine

    work_dir = pathlib.Path(tempfile.mkdtemp(prefix="podcasts-migration-check-"))
    config = PGliteConfig(work_dir=work_dir)

    with PGliteManager(config):
        engine = create_async_engine(config.get_connection_string(), pool_pre_ping=True)
        try:
            log_info(_logger, "Applying migrations to ephemeral database.")
            await apply_migrations(engine)
            diffs = await detect_schema_drift(engine)
        finally:
            await engine.dispose()

    if diffs:
        log_error(_logger, "Schema drift detected (%s difference(s)):", len(diffs))
        for diff in diffs:
            log_error(_logger, "  %s", diff)
        return 1

    log_info(_logger, "No schema drift detected.")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(check_migrations_cli()))
