"""SQLAlchemy persistence adapters for the podcast catalog.

This package provides the ORM models, the podcast and episode repositories,
and the unit-of-work that binds them to one session per operation.

Examples
--------
>>> engine = create_engine_for_url("sqlite+aiosqlite:///podcasts.db")
>>> session_factory = build_session_factory(engine)
>>> async with SqlAlchemyUnitOfWork(session_factory) as uow:
...     podcasts = await uow.podcasts.list()
"""

from .migrations import apply_migrations, current_revision
from .engine import (
    build_session_factory,
    create_engine_for_url,
    create_engine_from_settings,
)
from .migration_check import detect_schema_drift
from .models import Base, EpisodeRecord, PodcastRecord
from .repositories import SqlAlchemyEpisodeRepository, SqlAlchemyPodcastRepository
from .uow import SqlAlchemyUnitOfWork

__all__ = (
    "Base",
    "EpisodeRecord",
    "PodcastRecord",
    "SqlAlchemyEpisodeRepository",
    "SqlAlchemyPodcastRepository",
    "SqlAlchemyUnitOfWork",
    "apply_migrations",
    "build_session_factory",
    "create_engine_for_url",
    "create_engine_from_settings",
    "current_revision",
    "detect_schema_drift",
)
