"""Catalog service for podcasts and their episodes.

Every operation follows the same shape: open a unit of work, look the podcast
up, validate, mutate, commit, and answer with a ``Success`` or ``Failure``.
Domain failures (missing podcast or episode, invalid rating) carry precise
messages. Any exception raised by the stores is logged and reported as
``"Internal server error occurred."``; nothing escapes an operation.

Examples
--------
>>> service = CatalogService(lambda: SqlAlchemyUnitOfWork(session_factory))
>>> created = await service.create_podcast(CreatePodcastInput("Hard Fork", "tech"))
>>> await service.update_podcast(
...     UpdatePodcastInput(created.payload, PodcastUpdatePayload(rating=5))
... )
Success(payload=None)
"""

from __future__ import annotations

import datetime as dt
import typing as typ

from podcasts.logging import get_logger, log_error, log_info, log_warning

from .domain import (
    EpisodeChanges,
    NewEpisode,
    NewPodcast,
    merge_podcast,
    rating_in_range,
)
from .results import (
    Failure,
    Success,
    episode_not_found,
    internal_error,
    invalid_rating,
    podcast_not_found,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .domain import (
        CreateEpisodeInput,
        CreatePodcastInput,
        Episode,
        EpisodeLocator,
        Podcast,
        UpdateEpisodeInput,
        UpdatePodcastInput,
    )
    from .ports import CatalogUnitOfWork
    from .results import Result

    type UowFactory = cabc.Callable[[], CatalogUnitOfWork]
    type Clock = cabc.Callable[[], dt.datetime]

logger = get_logger(__name__)


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


class CatalogService:
    """Create, read, update and delete podcasts and episodes.

    Parameters
    ----------
    uow_factory : collections.abc.Callable[[], CatalogUnitOfWork]
        Builds a fresh unit of work for each operation.
    clock : collections.abc.Callable[[], datetime.datetime], optional
        Source of creation and modification timestamps. Defaults to UTC now.
    """

    def __init__(self, uow_factory: UowFactory, *, clock: Clock = _utcnow) -> None:
        self._uow_factory = uow_factory
        self._clock = clock

    async def _run[PayloadT](
        self,
        operation: str,
        work: cabc.Callable[..., cabc.Awaitable[Result[PayloadT]]],
        *args: object,
    ) -> Result[PayloadT]:
        """Run ``work`` inside a unit of work and mask store faults."""
        try:
            async with self._uow_factory() as uow:
                result = await work(uow, *args)
        except Exception as exc:  # noqa: BLE001 - the envelope is the only failure channel.
            log_error(logger, "Catalog operation %s failed.", operation, exc_info=exc)
            return internal_error()
        if isinstance(result, Failure):
            log_info(logger, "Catalog operation %s rejected: %s", operation, result.error)
        return result

    # Podcasts

    async def get_all_podcasts(self) -> Result[list[Podcast]]:
        """Return every podcast in store order."""
        return await self._run("get_all_podcasts", self._get_all_podcasts)

    async def _get_all_podcasts(self, uow: CatalogUnitOfWork) -> Result[list[Podcast]]:
        return Success(await uow.podcasts.list())

    async def create_podcast(self, request: CreatePodcastInput) -> Result[int]:
        """Create an unrated podcast.

        Returns
        -------
        Result[int]
            ``Success`` carrying the store-assigned podcast id.
        """
        return await self._run("create_podcast", self._create_podcast, request)

    async def _create_podcast(
        self,
        uow: CatalogUnitOfWork,
        request: CreatePodcastInput,
    ) -> Result[int]:
        podcast = await uow.podcasts.add(
            NewPodcast(
                title=request.title,
                category=request.category,
                created_at=self._clock(),
            )
        )
        await uow.commit()
        log_info(logger, "Created podcast %s.", podcast.id)
        return Success(podcast.id)

    async def get_podcast(
        self,
        podcast_id: int,
        *,
        include_episodes: bool = False,
    ) -> Result[Podcast]:
        """Fetch one podcast, with its episodes only when asked."""
        return await self._run(
            "get_podcast", self._get_podcast, podcast_id, include_episodes
        )

    async def _get_podcast(
        self,
        uow: CatalogUnitOfWork,
        podcast_id: int,
        include_episodes: bool,  # noqa: FBT001
    ) -> Result[Podcast]:
        podcast = await uow.podcasts.get(podcast_id, include_episodes=include_episodes)
        if podcast is None:
            return podcast_not_found(podcast_id)
        return Success(podcast)

    async def update_podcast(self, request: UpdatePodcastInput) -> Result[None]:
        """Overwrite the supplied fields of a podcast.

        The rating is checked after the lookup and before anything is written,
        so an out-of-range rating leaves the podcast untouched even when the
        other fields in the payload are valid.
        """
        return await self._run("update_podcast", self._update_podcast, request)

    async def _update_podcast(
        self,
        uow: CatalogUnitOfWork,
        request: UpdatePodcastInput,
    ) -> Result[None]:
        podcast = await uow.podcasts.get(request.id)
        if podcast is None:
            return podcast_not_found(request.id)
        rating = request.payload.rating
        if rating is not None and not rating_in_range(rating):
            return invalid_rating()
        await uow.podcasts.update(merge_podcast(podcast, request.payload, self._clock()))
        await uow.commit()
        return Success()

    async def delete_podcast(self, podcast_id: int) -> Result[None]:
        """Delete a podcast together with its episodes."""
        return await self._run("delete_podcast", self._delete_podcast, podcast_id)

    async def _delete_podcast(
        self,
        uow: CatalogUnitOfWork,
        podcast_id: int,
    ) -> Result[None]:
        if await uow.podcasts.get(podcast_id) is None:
            return podcast_not_found(podcast_id)
        await uow.podcasts.delete(podcast_id)
        await uow.commit()
        log_info(logger, "Deleted podcast %s.", podcast_id)
        return Success()

    # Episodes

    async def _require_podcast_with_episodes(
        self,
        uow: CatalogUnitOfWork,
        podcast_id: int,
    ) -> Podcast | Failure:
        podcast = await uow.podcasts.get(podcast_id, include_episodes=True)
        if podcast is None:
            return podcast_not_found(podcast_id)
        return podcast

    async def get_episodes(self, podcast_id: int) -> Result[list[Episode]]:
        """List a podcast's episodes in insertion order."""
        return await self._run("get_episodes", self._get_episodes, podcast_id)

    async def _get_episodes(
        self,
        uow: CatalogUnitOfWork,
        podcast_id: int,
    ) -> Result[list[Episode]]:
        podcast = await self._require_podcast_with_episodes(uow, podcast_id)
        if isinstance(podcast, Failure):
            return podcast
        return Success(list(podcast.episodes))

    async def get_episode(self, locator: EpisodeLocator) -> Result[Episode]:
        """Fetch one episode from its podcast's loaded episodes."""
        return await self._run("get_episode", self._get_episode, locator)

    async def _get_episode(
        self,
        uow: CatalogUnitOfWork,
        locator: EpisodeLocator,
    ) -> Result[Episode]:
        podcast = await self._require_podcast_with_episodes(uow, locator.podcast_id)
        if isinstance(podcast, Failure):
            return podcast
        episode = podcast.find_episode(locator.episode_id)
        if episode is None:
            return episode_not_found(locator.podcast_id, locator.episode_id)
        return Success(episode)

    async def create_episode(self, request: CreateEpisodeInput) -> Result[int]:
        """Create an episode owned by an existing podcast.

        Returns
        -------
        Result[int]
            ``Success`` carrying the store-assigned episode id.
        """
        return await self._run("create_episode", self._create_episode, request)

    async def _create_episode(
        self,
        uow: CatalogUnitOfWork,
        request: CreateEpisodeInput,
    ) -> Result[int]:
        podcast = await self._require_podcast_with_episodes(uow, request.podcast_id)
        if isinstance(podcast, Failure):
            return podcast
        episode = await uow.episodes.add(
            NewEpisode(
                podcast_id=podcast.id,
                title=request.title,
                category=request.category,
                created_at=self._clock(),
            )
        )
        await uow.commit()
        log_info(logger, "Created episode %s in podcast %s.", episode.id, podcast.id)
        return Success(episode.id)

    async def delete_episode(self, locator: EpisodeLocator) -> Result[None]:
        """Delete an episode once its podcast is known to exist.

        The episode itself is not looked up first; deleting an id the podcast
        does not own succeeds without removing anything.
        """
        return await self._run("delete_episode", self._delete_episode, locator)

    async def _delete_episode(
        self,
        uow: CatalogUnitOfWork,
        locator: EpisodeLocator,
    ) -> Result[None]:
        podcast = await self._require_podcast_with_episodes(uow, locator.podcast_id)
        if isinstance(podcast, Failure):
            return podcast
        await uow.episodes.delete(locator.episode_id, podcast_id=locator.podcast_id)
        await uow.commit()
        return Success()

    async def update_episode(self, request: UpdateEpisodeInput) -> Result[None]:
        """Write the supplied episode fields once its podcast is known to exist.

        Unlike ``update_podcast`` this does not load and merge the stored
        episode: the supplied fields are written as they are.
        """
        return await self._run("update_episode", self._update_episode, request)

    async def _update_episode(
        self,
        uow: CatalogUnitOfWork,
        request: UpdateEpisodeInput,
    ) -> Result[None]:
        podcast = await self._require_podcast_with_episodes(uow, request.podcast_id)
        if isinstance(podcast, Failure):
            return podcast
        matched = await uow.episodes.update(
            EpisodeChanges(
                id=request.episode_id,
                podcast_id=request.podcast_id,
                updated_at=self._clock(),
                title=request.title,
                category=request.category,
            )
        )
        if matched == 0:
            log_warning(
                logger,
                "Episode %s is not in podcast %s; nothing was updated.",
                request.episode_id,
                request.podcast_id,
            )
        await uow.commit()
        return Success()
