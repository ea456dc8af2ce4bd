"""Unit-of-work implementation for catalog persistence.

Each unit of work owns one async session, so an operation's existence check
and its mutation run in the same transaction. Work that is not committed is
discarded when the context exits.

Examples
--------
>>> async with SqlAlchemyUnitOfWork(session_factory) as uow:
...     podcast = await uow.podcasts.get(podcast_id)
...     await uow.podcasts.delete(podcast_id)
...     await uow.commit()
"""

from __future__ import annotations

import typing as typ

from podcasts.catalog.ports import CatalogUnitOfWork
from podcasts.logging import get_logger, log_debug

from .repositories import SqlAlchemyEpisodeRepository, SqlAlchemyPodcastRepository

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from types import TracebackType

    from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


class SqlAlchemyUnitOfWork(CatalogUnitOfWork):
    """Async unit-of-work backed by SQLAlchemy sessions.

    Parameters
    ----------
    session_factory : collections.abc.Callable[[], AsyncSession]
        Factory that produces new async sessions for the unit-of-work scope.

    Attributes
    ----------
    podcasts : SqlAlchemyPodcastRepository
        Podcast store bound to the active session.
    episodes : SqlAlchemyEpisodeRepository
        Episode store bound to the active session.
    """

    def __init__(self, session_factory: cabc.Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        """Open a session and bind the repositories to it."""
        self._session = self._session_factory()
        self.podcasts = SqlAlchemyPodcastRepository(self._session)
        self.episodes = SqlAlchemyEpisodeRepository(self._session)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Roll back on error and close the session."""
        if self._session is None:
            return
        try:
            if exc is not None:
                await self._session.rollback()
        finally:
            await self._session.close()
            self._session = None

    def _require_session(self) -> AsyncSession:
        """Return the active session or raise when missing."""
        if self._session is None:
            msg = "Session not initialized for unit of work."
            raise RuntimeError(msg)
        return self._session

    async def commit(self) -> None:
        """Commit the current transaction.

        Raises
        ------
        RuntimeError
            If the unit of work has not been entered.
        """
        await self._require_session().commit()
        log_debug(logger, "Committed catalog unit of work.")

    async def rollback(self) -> None:
        """Roll back the current transaction."""
        await self._require_session().rollback()
