"""Success/failure envelope returned by every catalog operation.

Callers branch on the envelope instead of catching exceptions:

>>> result = await service.get_podcast(3)
>>> match result:
...     case Success(payload=podcast):
...         render(podcast)
...     case Failure(error=message):
...         show_error(message)
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

INTERNAL_ERROR = "Internal server error occurred."
INVALID_RATING = "Rating must be between 1 and 5."


@dc.dataclass(frozen=True, slots=True)
class Success[PayloadT]:
    """Successful outcome carrying an operation-specific payload."""

    payload: PayloadT | None = None

    @property
    def ok(self) -> typ.Literal[True]:
        """Always True."""
        return True


@dc.dataclass(frozen=True, slots=True)
class Failure:
    """Failed outcome carrying one human-readable message."""

    error: str

    @property
    def ok(self) -> typ.Literal[False]:
        """Always False."""
        return False


type Result[PayloadT] = Success[PayloadT] | Failure


def podcast_not_found(podcast_id: int) -> Failure:
    """Build the failure for a missing podcast."""
    return Failure(f"Podcast with id {podcast_id} not found")


def episode_not_found(podcast_id: int, episode_id: int) -> Failure:
    """Build the failure for an episode missing from a podcast."""
    return Failure(
        f"Episode with id {episode_id} not found in podcast with id {podcast_id}"
    )


def internal_error() -> Failure:
    """Build the failure that masks an infrastructure fault."""
    return Failure(INTERNAL_ERROR)


def invalid_rating() -> Failure:
    """Build the failure for a rating outside ``[1, 5]``."""
    return Failure(INVALID_RATING)


__all__ = (
    "INTERNAL_ERROR",
    "INVALID_RATING",
    "Failure",
    "Result",
    "Success",
    "episode_not_found",
    "internal_error",
    "invalid_rating",
    "podcast_not_found",
)
