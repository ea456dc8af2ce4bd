"""Ports for catalog persistence.

These protocols describe the store adapters and the unit-of-work boundary the
catalog service composes. Adapters can be swapped (SQLAlchemy in production,
in-memory fakes in tests) without touching the service.

Examples
--------
Implement a repository that satisfies the protocol:

>>> class MemoryPodcastRepository(PodcastRepository):
...     async def list(self) -> list[Podcast]:
...         return list(self._items.values())
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from types import TracebackType

    from .domain import Episode, EpisodeChanges, NewEpisode, NewPodcast, Podcast


class PodcastRepository(typ.Protocol):
    """Persistence interface for podcasts.

    Methods
    -------
    list()
        Fetch every podcast.
    get(podcast_id, include_episodes=False)
        Fetch one podcast, optionally with its episodes.
    add(podcast)
        Insert a new podcast and return it with its assigned id.
    update(podcast)
        Save a podcast by identity.
    delete(podcast_id)
        Delete a podcast and the episodes it owns.
    """

    async def list(self) -> list[Podcast]:
        """Fetch every podcast in store order."""
        ...

    async def get(
        self,
        podcast_id: int,
        *,
        include_episodes: bool = False,
    ) -> Podcast | None:
        """Fetch a podcast by identifier.

        Parameters
        ----------
        podcast_id : int
            Identifier of the podcast.
        include_episodes : bool, optional
            Whether to load the podcast's episodes as well.

        Returns
        -------
        Podcast | None
            The matching podcast, or ``None`` if no match exists.
        """
        ...

    async def add(self, podcast: NewPodcast) -> Podcast:
        """Insert a podcast and return it with its store-assigned id."""
        ...

    async def update(self, podcast: Podcast) -> None:
        """Persist the mutable fields of an existing podcast."""
        ...

    async def delete(self, podcast_id: int) -> None:
        """Delete a podcast by identifier, cascading to its episodes."""
        ...


class EpisodeRepository(typ.Protocol):
    """Persistence interface for episodes."""

    async def list_for_podcast(self, podcast_id: int) -> list[Episode]:
        """List a podcast's episodes in insertion order."""
        ...

    async def add(self, episode: NewEpisode) -> Episode:
        """Insert an episode and return it with its store-assigned id."""
        ...

    async def update(self, changes: EpisodeChanges) -> int:
        """Write the supplied columns of one episode.

        Returns
        -------
        int
            Number of rows matched within the owning podcast.
        """
        ...

    async def delete(self, episode_id: int, *, podcast_id: int) -> None:
        """Delete an episode within its owning podcast."""
        ...


class CatalogUnitOfWork(typ.Protocol):
    """Transactional boundary exposing both catalog stores.

    Attributes
    ----------
    podcasts : PodcastRepository
        Podcast store bound to the unit-of-work session.
    episodes : EpisodeRepository
        Episode store bound to the unit-of-work session.
    """

    podcasts: PodcastRepository
    episodes: EpisodeRepository

    async def __aenter__(self) -> CatalogUnitOfWork:
        """Enter the unit-of-work context."""
        ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Exit the unit-of-work context, discarding uncommitted work."""
        ...

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Roll back the current transaction."""
        ...
