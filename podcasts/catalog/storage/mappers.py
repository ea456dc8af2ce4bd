"""Record-to-domain mapping helpers for catalog persistence.

Repositories call these helpers so they stay focused on data access.

Examples
--------
>>> podcast = _podcast_from_record(record, include_episodes=True)
"""

from __future__ import annotations

import datetime as dt
import typing as typ

from podcasts.catalog.domain import Episode, Podcast

from .models import EpisodeRecord, PodcastRecord

if typ.TYPE_CHECKING:
    from podcasts.catalog.domain import NewEpisode, NewPodcast


def _as_utc(value: dt.datetime) -> dt.datetime:
    """Return ``value`` in UTC, treating naive values as UTC.

    SQLite stores timestamps without an offset, so they load back naive.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.UTC)
    return value.astimezone(dt.UTC)


def _episode_from_record(record: EpisodeRecord) -> Episode:
    """Map an episode record to a domain entity."""
    return Episode(
        id=record.id,
        podcast_id=record.podcast_id,
        title=record.title,
        category=record.category,
        rating=record.rating,
        created_at=_as_utc(record.created_at),
        updated_at=_as_utc(record.updated_at),
    )


def _podcast_from_record(
    record: PodcastRecord,
    *,
    include_episodes: bool = False,
) -> Podcast:
    """Map a podcast record to a domain entity.

    ``record.episodes`` is only touched when ``include_episodes`` is set, since
    the relationship raises unless it was eagerly loaded.
    """
    episodes = (
        tuple(_episode_from_record(episode) for episode in record.episodes)
        if include_episodes
        else ()
    )
    return Podcast(
        id=record.id,
        title=record.title,
        category=record.category,
        rating=record.rating,
        created_at=_as_utc(record.created_at),
        updated_at=_as_utc(record.updated_at),
        episodes=episodes,
    )


def _podcast_to_record(podcast: NewPodcast) -> PodcastRecord:
    """Build a podcast record for insertion."""
    return PodcastRecord(
        title=podcast.title,
        category=podcast.category,
        rating=podcast.rating,
        created_at=podcast.created_at,
        updated_at=podcast.created_at,
    )


def _episode_to_record(episode: NewEpisode) -> EpisodeRecord:
    """Build an episode record for insertion."""
    return EpisodeRecord(
        podcast_id=episode.podcast_id,
        title=episode.title,
        category=episode.category,
        rating=episode.rating,
        created_at=episode.created_at,
        updated_at=episode.created_at,
    )
