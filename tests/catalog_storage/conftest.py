"""Shared fixtures for catalog storage tests."""

from __future__ import annotations

import datetime as dt
import typing as typ

import pytest
import pytest_asyncio

from podcasts.catalog.domain import NewEpisode, NewPodcast
from podcasts.catalog.storage import SqlAlchemyUnitOfWork

if typ.TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from podcasts.catalog.domain import Episode, Podcast


@pytest.fixture
def created_at() -> dt.datetime:
    """Return a fixed creation timestamp."""
    return dt.datetime(2021, 1, 15, 15, 24, 22, tzinfo=dt.UTC)


@pytest_asyncio.fixture
async def stored_podcast(
    session_factory: async_sessionmaker[AsyncSession],
    created_at: dt.datetime,
) -> tuple[Podcast, list[Episode]]:
    """Persist a podcast with two episodes and return them."""
    async with SqlAlchemyUnitOfWork(session_factory) as uow:
        podcast = await uow.podcasts.add(
            NewPodcast(title="Nightshift", category="science", created_at=created_at)
        )
        episodes = [
            await uow.episodes.add(
                NewEpisode(
                    podcast_id=podcast.id,
                    title=title,
                    category="science",
                    created_at=created_at,
                )
            )
            for title in ("Pilot", "Second light")
        ]
        await uow.commit()
    return (podcast, episodes)
