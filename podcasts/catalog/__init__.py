"""Podcast catalog domain, result envelope and service.

Examples
--------
>>> service = CatalogService(lambda: SqlAlchemyUnitOfWork(session_factory))
>>> result = await service.get_episode(EpisodeLocator(podcast_id=1, episode_id=2))
>>> result.ok
False
"""

from .domain import (
    CreateEpisodeInput,
    CreatePodcastInput,
    Episode,
    EpisodeChanges,
    EpisodeLocator,
    NewEpisode,
    NewPodcast,
    Podcast,
    PodcastUpdatePayload,
    UpdateEpisodeInput,
    UpdatePodcastInput,
)
from .ports import CatalogUnitOfWork, EpisodeRepository, PodcastRepository
from .results import INTERNAL_ERROR, INVALID_RATING, Failure, Result, Success
from .service import CatalogService

__all__ = (
    "INTERNAL_ERROR",
    "INVALID_RATING",
    "CatalogService",
    "CatalogUnitOfWork",
    "CreateEpisodeInput",
    "CreatePodcastInput",
    "Episode",
    "EpisodeChanges",
    "EpisodeLocator",
    "EpisodeRepository",
    "Failure",
    "NewEpisode",
    "NewPodcast",
    "Podcast",
    "PodcastRepository",
    "PodcastUpdatePayload",
    "Result",
    "Success",
    "UpdateEpisodeInput",
    "UpdatePodcastInput",
)
