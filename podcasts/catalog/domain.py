"""Domain models and request types for the podcast catalog."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    import datetime as dt

UNRATED = 0
MIN_RATING = 1
MAX_RATING = 5


@dc.dataclass(frozen=True, slots=True)
class Episode:
    """An episode owned by exactly one podcast."""

    id: int
    podcast_id: int
    title: str
    category: str
    rating: int
    created_at: dt.datetime
    updated_at: dt.datetime


@dc.dataclass(frozen=True, slots=True)
class Podcast:
    """A podcast and, when loaded, its episodes in insertion order."""

    id: int
    title: str
    category: str
    rating: int
    created_at: dt.datetime
    updated_at: dt.datetime
    episodes: tuple[Episode, ...] = ()

    def find_episode(self, episode_id: int) -> Episode | None:
        """Return the loaded episode with ``episode_id``, if any."""
        return next(
            (episode for episode in self.episodes if episode.id == episode_id),
            None,
        )


@dc.dataclass(frozen=True, slots=True)
class NewPodcast:
    """Values for a podcast that has not been assigned an id yet."""

    title: str
    category: str
    created_at: dt.datetime
    rating: int = UNRATED


@dc.dataclass(frozen=True, slots=True)
class NewEpisode:
    """Values for an episode that has not been assigned an id yet."""

    podcast_id: int
    title: str
    category: str
    created_at: dt.datetime
    rating: int = UNRATED


@dc.dataclass(frozen=True, slots=True)
class EpisodeChanges:
    """Column overwrites for one episode.

    Only fields that are not ``None`` are written; nothing is read back from
    the stored episode first.
    """

    id: int
    podcast_id: int
    updated_at: dt.datetime
    title: str | None = None
    category: str | None = None

    def supplied_values(self) -> dict[str, object]:
        """Return the columns to write, including ``updated_at``."""
        values: dict[str, object] = {
            field: value
            for field, value in (("title", self.title), ("category", self.category))
            if value is not None
        }
        values["updated_at"] = self.updated_at
        return values


# Request types accepted by the catalog service.


@dc.dataclass(frozen=True, slots=True)
class CreatePodcastInput:
    """Mutable fields for a new podcast."""

    title: str
    category: str


@dc.dataclass(frozen=True, slots=True)
class PodcastUpdatePayload:
    """Optional field overwrites for a podcast.

    Attributes
    ----------
    title : str | None
        New title, or ``None`` to keep the stored one.
    category : str | None
        New category, or ``None`` to keep the stored one.
    rating : int | None
        New rating in ``[1, 5]``, or ``None`` to keep the stored one.
    """

    title: str | None = None
    category: str | None = None
    rating: int | None = None


@dc.dataclass(frozen=True, slots=True)
class UpdatePodcastInput:
    """Podcast identity plus the fields to overwrite."""

    id: int
    payload: PodcastUpdatePayload


@dc.dataclass(frozen=True, slots=True)
class EpisodeLocator:
    """Identifies an episode within its owning podcast."""

    podcast_id: int
    episode_id: int


@dc.dataclass(frozen=True, slots=True)
class CreateEpisodeInput:
    """Owning podcast and mutable fields for a new episode."""

    podcast_id: int
    title: str
    category: str


@dc.dataclass(frozen=True, slots=True)
class UpdateEpisodeInput:
    """Episode identity plus the fields to overwrite."""

    podcast_id: int
    episode_id: int
    title: str | None = None
    category: str | None = None


def rating_in_range(rating: object) -> bool:
    """Return True when ``rating`` is an accepted update value.

    Only whole ``int`` values count; ``bool`` and ``float`` are rejected.
    """
    if isinstance(rating, bool) or not isinstance(rating, int):
        return False
    return MIN_RATING <= rating <= MAX_RATING


def merge_podcast(
    podcast: Podcast,
    payload: PodcastUpdatePayload,
    updated_at: dt.datetime,
) -> Podcast:
    """Apply supplied payload fields onto a loaded podcast."""
    changes = {
        field: value
        for field, value in (
            ("title", payload.title),
            ("category", payload.category),
            ("rating", payload.rating),
        )
        if value is not None
    }
    return dc.replace(podcast, updated_at=updated_at, **changes)
