"""Environment-driven settings for the podcast catalog.

Settings are read once by the composition root and passed explicitly to the
pieces that need them; nothing here is cached at import time.

Examples
--------
>>> settings = CatalogSettings.from_environment({"PODCASTS_LOG_LEVEL": "debug"})
>>> settings.log_level
'DEBUG'
"""

from __future__ import annotations

import dataclasses as dc
import os
import typing as typ

from .logging import normalise_level

if typ.TYPE_CHECKING:
    import collections.abc as cabc

DATABASE_URL_ENV = "PODCASTS_DATABASE_URL"
FALLBACK_DATABASE_URL_ENV = "DATABASE_URL"
LOG_LEVEL_ENV = "PODCASTS_LOG_LEVEL"
SQL_ECHO_ENV = "PODCASTS_SQL_ECHO"

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///podcasts.db"
_TRUTHY_VALUES = frozenset({"1", "on", "true", "yes"})


def _first_non_blank(
    environ: cabc.Mapping[str, str],
    *names: str,
) -> str | None:
    for name in names:
        value = environ.get(name)
        if value is not None and value.strip():
            return value.strip()
    return None


def _flag_enabled(raw_value: str | None) -> bool:
    """Return True when an environment toggle is truthy."""
    if raw_value is None:
        return False
    return raw_value.strip().lower() in _TRUTHY_VALUES


@dc.dataclass(frozen=True, slots=True)
class CatalogSettings:
    """Runtime settings for the catalog service.

    Attributes
    ----------
    database_url : str
        SQLAlchemy async database URL.
    log_level : str
        Normalised femtologging level name.
    sql_echo : bool
        Whether SQLAlchemy should echo emitted SQL.
    """

    database_url: str = DEFAULT_DATABASE_URL
    log_level: str = "INFO"
    sql_echo: bool = False

    @classmethod
    def from_environment(
        cls,
        environ: cabc.Mapping[str, str] | None = None,
    ) -> CatalogSettings:
        """Build settings from environment variables.

        Missing or invalid values fall back to the defaults.
        """
        env = os.environ if environ is None else environ
        database_url = _first_non_blank(env, DATABASE_URL_ENV, FALLBACK_DATABASE_URL_ENV)
        level, _ = normalise_level(env.get(LOG_LEVEL_ENV))
        return cls(
            database_url=database_url or DEFAULT_DATABASE_URL,
            log_level=str(level),
            sql_echo=_flag_enabled(env.get(SQL_ECHO_ENV)),
        )


__all__ = ("DEFAULT_DATABASE_URL", "CatalogSettings")
