"""Composition root wiring settings, database and catalog service.

Examples
--------
>>> catalog = build_catalog(CatalogSettings.from_environment())
>>> result = await catalog.service.get_all_podcasts()
>>> await catalog.close()
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from podcasts.catalog.service import CatalogService
from podcasts.catalog.storage import (
    SqlAlchemyUnitOfWork,
    build_session_factory,
    create_engine_from_settings,
)
from podcasts.logging import configure_logging, get_logger, log_info, log_warning

if typ.TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from podcasts.config import CatalogSettings

logger = get_logger(__name__)


@dc.dataclass(frozen=True, slots=True)
class Catalog:
    """A running catalog: the service and the engine it owns."""

    service: CatalogService
    engine: AsyncEngine

    async def close(self) -> None:
        """Dispose of the engine's connection pool."""
        await self.engine.dispose()


def build_catalog(settings: CatalogSettings, *, configure: bool = True) -> Catalog:
    """Build the catalog service described by ``settings``.

    Parameters
    ----------
    settings : CatalogSettings
        Database and logging settings.
    configure : bool, optional
        Whether to configure femtologging from ``settings.log_level``.

    Returns
    -------
    Catalog
        Service plus the engine to dispose on shutdown.
    """
    if configure:
        level, used_default = configure_logging(settings.log_level)
        if used_default:
            log_warning(logger, "Unknown log level %r; using %s.", settings.log_level, level)
    engine = create_engine_from_settings(settings)
    session_factory = build_session_factory(engine)
    service = CatalogService(lambda: SqlAlchemyUnitOfWork(session_factory))
    log_info(logger, "Catalog bound to %s database.", engine.dialect.name)
    return Catalog(service=service, engine=engine)
