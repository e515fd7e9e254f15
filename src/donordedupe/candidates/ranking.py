"""Ranking and output caps shared by the generation modes."""

from collections.abc import Iterable
from numbers import Real
from typing import Any, Protocol, TypeVar

from donordedupe.errors import InvalidInputError

__all__ = [
    "DEFAULT_MIN_SCORE",
    "TARGET_LIMIT",
    "SCAN_LIMIT",
    "BATCH_LIMIT",
    "rank_and_limit",
    "validate_min_score",
]

DEFAULT_MIN_SCORE = 50
TARGET_LIMIT = 20
SCAN_LIMIT = 100
BATCH_LIMIT = 5


class _Scored(Protocol):
    @property
    def score(self) -> int: ...


T = TypeVar("T", bound=_Scored)


def rank_and_limit(items: Iterable[T], limit: int) -> list[T]:
    """Sort by descending score and keep the first ``limit`` items.

    The sort is stable, so equal scores keep their discovery order.

    Parameters
    ----------
    items : Iterable[T]
        Scored results in discovery order.
    limit : int
        Maximum number of items to keep.

    Returns
    -------
    list[T]
        Ranked, capped list.
    """
    ranked = sorted(items, key=lambda item: item.score, reverse=True)
    return ranked[:limit]


def validate_min_score(value: Any, default: int = DEFAULT_MIN_SCORE) -> float:
    """Check a caller-supplied minimum score.

    Parameters
    ----------
    value : Any
        Requested threshold, or None for the default.
    default : int, optional
        Threshold used when ``value`` is None.

    Returns
    -------
    float
        Threshold in [0, 100].

    Raises
    ------
    InvalidInputError
        If the value is not a number or lies outside [0, 100].
    """
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInputError(f"minScore must be a number, got {value!r}")
    if not 0 <= value <= 100:
        raise InvalidInputError(f"minScore must be in [0, 100], got {value}")
    return value
