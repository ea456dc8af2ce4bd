"""SQLAlchemy ORM models for the podcast catalog.

The models back the ``podcasts`` and ``episodes`` tables and are shared by the
repositories and the Alembic migrations.

Examples
--------
Create the catalog tables directly (tests and throwaway databases only):

>>> async with engine.begin() as connection:
...     await connection.run_sync(Base.metadata.create_all)
"""

from __future__ import annotations

# SQLAlchemy evaluates annotations at runtime; keep stdlib types imported.
import datetime as dt  # noqa: TC003

import sqlalchemy as sa
from sqlalchemy import orm


class Base(orm.DeclarativeBase):
    """Base class for catalog SQLAlchemy models.

    Notes
    -----
    Alembic and the test fixtures rely on ``Base.metadata``.
    """


class PodcastRecord(Base):
    """SQLAlchemy model for podcasts.

    Attributes
    ----------
    id : int
        Store-assigned primary key.
    title : str
        Podcast title.
    category : str
        Free-form category label.
    rating : int
        0 when unrated, otherwise 1 to 5.
    created_at : datetime.datetime
        Timestamp when the record was created.
    updated_at : datetime.datetime
        Timestamp when the record was last updated.
    episodes : list[EpisodeRecord]
        Owned episodes ordered by id. Only loaded on request.
    """

    __tablename__ = "podcasts"

    id: orm.Mapped[int] = orm.mapped_column(sa.Integer, primary_key=True)
    title: orm.Mapped[str] = orm.mapped_column(sa.String(240))
    category: orm.Mapped[str] = orm.mapped_column(sa.String(120))
    rating: orm.Mapped[int] = orm.mapped_column(
        sa.Integer,
        default=0,
        server_default=sa.text("0"),
    )
    created_at: orm.Mapped[dt.datetime] = orm.mapped_column(
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
    )
    updated_at: orm.Mapped[dt.datetime] = orm.mapped_column(
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        onupdate=sa.func.now(),
    )
    episodes: orm.Mapped[list[EpisodeRecord]] = orm.relationship(
        back_populates="podcast",
        order_by="EpisodeRecord.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )

    __table_args__ = (
        sa.CheckConstraint(
            "rating >= 0 AND rating <= 5",
            name="ck_podcasts_rating",
        ),
    )


class EpisodeRecord(Base):
    """SQLAlchemy model for episodes.

    Attributes
    ----------
    id : int
        Store-assigned primary key.
    podcast_id : int
        Foreign key to the owning podcast.
    title : str
        Episode title.
    category : str
        Free-form category label.
    rating : int
        Episode rating.
    created_at : datetime.datetime
        Timestamp when the record was created.
    updated_at : datetime.datetime
        Timestamp when the record was last updated.
    """

    __tablename__ = "episodes"

    id: orm.Mapped[int] = orm.mapped_column(sa.Integer, primary_key=True)
    podcast_id: orm.Mapped[int] = orm.mapped_column(
        sa.Integer,
        sa.ForeignKey("podcasts.id", ondelete="CASCADE"),
        index=True,
    )
    title: orm.Mapped[str] = orm.mapped_column(sa.String(240))
    category: orm.Mapped[str] = orm.mapped_column(sa.String(120))
    rating: orm.Mapped[int] = orm.mapped_column(
        sa.Integer,
        default=0,
        server_default=sa.text("0"),
    )
    created_at: orm.Mapped[dt.datetime] = orm.mapped_column(
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
    )
    updated_at: orm.Mapped[dt.datetime] = orm.mapped_column(
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        onupdate=sa.func.now(),
    )
    podcast: orm.Mapped[PodcastRecord] = orm.relationship(
        back_populates="episodes",
        lazy="raise",
    )
