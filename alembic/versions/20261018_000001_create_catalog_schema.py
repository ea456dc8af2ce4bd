"""Create the podcast catalog schema.

Adds the ``podcasts`` table and the ``episodes`` table whose rows belong to
one podcast and are removed with it.

Examples
--------
>>> alembic upgrade head
"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

revision = "20261018_000001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamp_columns() -> list[sa.Column]:
    """Create shared created_at and updated_at columns."""
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    ]


def upgrade() -> None:
    """Create the catalog tables."""
    op.create_table(
        "podcasts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(length=240), nullable=False),
        sa.Column("category", sa.String(length=120), nullable=False),
        sa.Column(
            "rating",
            sa.Integer(),
            nullable=False,
            server_default=sa.text("0"),
        ),
        *_timestamp_columns(),
        sa.CheckConstraint(
            "rating >= 0 AND rating <= 5",
            name="ck_podcasts_rating",
        ),
    )
    op.create_table(
        "episodes",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "podcast_id",
            sa.Integer(),
            sa.ForeignKey("podcasts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(length=240), nullable=False),
        sa.Column("category", sa.String(length=120), nullable=False),
        sa.Column(
            "rating",
            sa.Integer(),
            nullable=False,
            server_default=sa.text("0"),
        ),
        *_timestamp_columns(),
    )
    op.create_index("ix_episodes_podcast_id", "episodes", ["podcast_id"])


def downgrade() -> None:
    """Drop the catalog tables."""
    op.drop_index("ix_episodes_podcast_id", table_name="episodes")
    op.drop_table("episodes")
    op.drop_table("podcasts")
