"""SQLAlchemy repositories for the podcast catalog.

Repositories operate within a supplied async session and are composed through
the catalog unit-of-work. They hold no business rules; the catalog service is
the only place where these primitives are combined into domain operations.

Examples
--------
>>> async with SqlAlchemyUnitOfWork(session_factory) as uow:
...     podcast = await uow.podcasts.add(new_podcast)
...     await uow.commit()
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import sqlalchemy as sa
from sqlalchemy import orm

from podcasts.catalog.ports import EpisodeRepository, PodcastRepository

from .mappers import (
    _episode_from_record,
    _episode_to_record,
    _podcast_from_record,
    _podcast_to_record,
)
from .models import EpisodeRecord, PodcastRecord

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from sqlalchemy.ext.asyncio import AsyncSession

    from podcasts.catalog.domain import (
        Episode,
        EpisodeChanges,
        NewEpisode,
        NewPodcast,
        Podcast,
    )


@dc.dataclass(slots=True)
class _RepositoryBase:
    """Shared helpers for SQLAlchemy repositories."""

    _session: AsyncSession

    async def _insert[RecordT](self, record: RecordT) -> RecordT:
        """Add a record and flush so the store assigns its id."""
        self._session.add(record)
        await self._session.flush()
        return record

    async def _list_where[RecordT, DomainT](
        self,
        record_type: type[RecordT],
        where_clause: typ.Any,  # noqa: ANN401 - SQLAlchemy clause typing.
        order_by_clause: typ.Any,  # noqa: ANN401 - SQLAlchemy clause typing.
        mapper: cabc.Callable[[RecordT], DomainT],
    ) -> list[DomainT]:
        """List mapped records matching a filter and ordering."""
        result = await self._session.execute(
            sa.select(record_type).where(where_clause).order_by(order_by_clause)
        )
        return [mapper(row) for row in result.scalars()]

    async def _update_where(
        self,
        record_type: type[object],
        where_clause: typ.Any,  # noqa: ANN401 - SQLAlchemy clause typing.
        values: dict[str, typ.Any],
    ) -> int:
        """Execute an update statement and return the matched row count."""
        result = await self._session.execute(
            sa.update(record_type).where(where_clause).values(**values)
        )
        return typ.cast("sa.CursorResult[typ.Any]", result).rowcount

    async def _delete_where(
        self,
        record_type: type[object],
        where_clause: typ.Any,  # noqa: ANN401 - SQLAlchemy clause typing.
    ) -> None:
        """Execute a delete statement for matching records."""
        await self._session.execute(sa.delete(record_type).where(where_clause))


class SqlAlchemyPodcastRepository(_RepositoryBase, PodcastRepository):
    """Persist podcasts using SQLAlchemy."""

    async def list(self) -> list[Podcast]:
        """List all podcasts ordered by id."""
        return await self._list_where(
            PodcastRecord,
            sa.true(),
            PodcastRecord.id,
            _podcast_from_record,
        )

    async def get(
        self,
        podcast_id: int,
        *,
        include_episodes: bool = False,
    ) -> Podcast | None:
        """Fetch a podcast by identifier, optionally with its episodes."""
        statement = sa.select(PodcastRecord).where(PodcastRecord.id == podcast_id)
        if include_episodes:
            statement = statement.options(orm.selectinload(PodcastRecord.episodes))
        result = await self._session.execute(statement)
        record = result.scalar_one_or_none()
        if record is None:
            return None
        return _podcast_from_record(record, include_episodes=include_episodes)

    async def add(self, podcast: NewPodcast) -> Podcast:
        """Insert a podcast record.

        Parameters
        ----------
        podcast : NewPodcast
            Values for the new podcast.

        Returns
        -------
        Podcast
            The inserted podcast carrying its store-assigned id.
        """
        record = await self._insert(_podcast_to_record(podcast))
        return _podcast_from_record(record)

    async def update(self, podcast: Podcast) -> None:
        """Persist the mutable fields of an existing podcast."""
        await self._update_where(
            PodcastRecord,
            PodcastRecord.id == podcast.id,
            {
                "title": podcast.title,
                "category": podcast.category,
                "rating": podcast.rating,
                "updated_at": podcast.updated_at,
            },
        )

    async def delete(self, podcast_id: int) -> None:
        """Delete a podcast and its episodes.

        Episodes are removed explicitly as well as through ``ON DELETE
        CASCADE`` because SQLite only enforces foreign keys when asked to.
        """
        await self._delete_where(EpisodeRecord, EpisodeRecord.podcast_id == podcast_id)
        await self._delete_where(PodcastRecord, PodcastRecord.id == podcast_id)


class SqlAlchemyEpisodeRepository(_RepositoryBase, EpisodeRepository):
    """Persist episodes using SQLAlchemy."""

    async def list_for_podcast(self, podcast_id: int) -> list[Episode]:
        """List a podcast's episodes in insertion order.

        Parameters
        ----------
        podcast_id : int
            Identifier of the owning podcast.

        Returns
        -------
        list[Episode]
            Episodes owned by the podcast, oldest first.
        """
        return await self._list_where(
            EpisodeRecord,
            EpisodeRecord.podcast_id == podcast_id,
            EpisodeRecord.id,
            _episode_from_record,
        )

    async def add(self, episode: NewEpisode) -> Episode:
        """Insert an episode record and return it with its id."""
        record = await self._insert(_episode_to_record(episode))
        return _episode_from_record(record)

    async def update(self, changes: EpisodeChanges) -> int:
        """Write the supplied columns of one episode within its podcast."""
        return await self._update_where(
            EpisodeRecord,
            sa.and_(
                EpisodeRecord.id == changes.id,
                EpisodeRecord.podcast_id == changes.podcast_id,
            ),
            changes.supplied_values(),
        )

    async def delete(self, episode_id: int, *, podcast_id: int) -> None:
        """Delete an episode within its owning podcast."""
        await self._delete_where(
            EpisodeRecord,
            sa.and_(
                EpisodeRecord.id == episode_id,
                EpisodeRecord.podcast_id == podcast_id,
            ),
        )
