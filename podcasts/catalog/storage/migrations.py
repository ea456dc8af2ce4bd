"""Apply and inspect catalog schema migrations.

The Alembic scripts live beside ``alembic.ini`` at the project root. Tests,
the drift check and deployment scripts all migrate through here, on a
connection borrowed from the caller's async engine.

Examples
--------
>>> await apply_migrations(engine)
>>> await current_revision(engine)
'20261018_000001'
"""

from __future__ import annotations

import pathlib
import typing as typ

from alembic.config import Config
from alembic.migration import MigrationContext

from alembic import command
from podcasts.logging import get_logger, log_info

if typ.TYPE_CHECKING:
    from sqlalchemy.engine import Connection
    from sqlalchemy.ext.asyncio import AsyncEngine

logger = get_logger(__name__)

CATALOG_ROOT = pathlib.Path(__file__).resolve().parents[3]
HEAD = "head"


def catalog_alembic_config(engine: AsyncEngine) -> Config:
    """Return an Alembic configuration for the catalog scripts and ``engine``."""
    cfg = Config(str(CATALOG_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(CATALOG_ROOT / "alembic"))
    url = engine.url.render_as_string(hide_password=False)
    # ConfigParser treats % as interpolation.
    cfg.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    return cfg


def _upgrade(connection: Connection, cfg: Config, revision: str) -> None:
    cfg.attributes["connection"] = connection
    command.upgrade(cfg, revision)


def _read_revision(connection: Connection) -> str | None:
    return MigrationContext.configure(connection).get_current_revision()


async def current_revision(engine: AsyncEngine) -> str | None:
    """Return the revision the catalog database is at, or None when unmigrated."""
    async with engine.connect() as connection:
        return await connection.run_sync(_read_revision)


async def apply_migrations(engine: AsyncEngine, *, revision: str = HEAD) -> str | None:
    """Upgrade the catalog schema behind ``engine``.

    Parameters
    ----------
    engine : AsyncEngine
        Engine for the catalog database.
    revision : str, optional
        Target revision; the newest one by default.

    Returns
    -------
    str | None
        The revision the database is at afterwards.
    """
    cfg = catalog_alembic_config(engine)
    async with engine.begin() as connection:
        await connection.run_sync(_upgrade, cfg, revision)
    reached = await current_revision(engine)
    log_info(
        logger,
        "Catalog schema at revision %s on %s.",
        reached,
        engine.dialect.name,
    )
    return reached
