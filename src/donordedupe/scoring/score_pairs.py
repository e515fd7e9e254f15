"""Aggregate duplicate-confidence scoring.

Combines the reported field matches of a pair into one integer score:

    raw = sum(similarity * weight)   over reported matches
    score = round_half_up(100 * raw / 130), clamped to [0, 100]

A lone exact email (38) or phone (23) already signals a meaningful match;
together with a name match the pair crosses the usual 50-70 review band.
The weights are a tunable linear heuristic, not a calibrated probability.
"""

import math
from collections.abc import Iterable

from donordedupe.models import DonorRecord, NormalizedDonor
from donordedupe.normalize import normalize
from donordedupe.scoring.comparators import compare_fields
from donordedupe.scoring.models import FieldMatch, PairScore

__all__ = [
    "FIELD_WEIGHTS",
    "MAX_RAW_SCORE",
    "aggregate_score",
    "score_pair",
    "confidence_label",
]

FIELD_WEIGHTS: dict[str, int] = {
    "email": 50,
    "phone": 30,
    "lastName": 20,
    "firstName": 15,
    "address": 10,
    "postalCode": 5,
}

MAX_RAW_SCORE = sum(FIELD_WEIGHTS.values())

# Review bands, highest first
_CONFIDENCE_BANDS = (
    (80, "very_likely"),
    (60, "probable"),
)


def aggregate_score(matches: Iterable[FieldMatch]) -> int:
    """Weighted combination of field matches on a 0-100 scale.

    Parameters
    ----------
    matches : Iterable[FieldMatch]
        Reported field matches for one pair.

    Returns
    -------
    int
        Duplicate confidence in [0, 100].

    Raises
    ------
    KeyError
        If a match names a field without a weight.
    """
    raw = sum(match.similarity * FIELD_WEIGHTS[match.field] for match in matches)
    # Half-up rounding; round() would send 12.5 to 12
    score = math.floor(100 * raw / MAX_RAW_SCORE + 0.5)
    return max(0, min(100, score))


def _as_normalized(donor: DonorRecord | NormalizedDonor) -> NormalizedDonor:
    if isinstance(donor, NormalizedDonor):
        return donor
    return normalize(donor)


def score_pair(
    donor_a: DonorRecord | NormalizedDonor,
    donor_b: DonorRecord | NormalizedDonor,
) -> PairScore:
    """Score a single candidate pair.

    Parameters
    ----------
    donor_a : DonorRecord | NormalizedDonor
        First record. Pre-normalized records skip normalization.
    donor_b : DonorRecord | NormalizedDonor
        Second record.

    Returns
    -------
    PairScore
        Aggregate score and the field matches behind it.

    Notes
    -----
    Deterministic and symmetric: swapping the records yields the same score
    and the same matches with ``value1``/``value2`` swapped.
    """
    norm_a = _as_normalized(donor_a)
    norm_b = _as_normalized(donor_b)
    matches = compare_fields(norm_a, norm_b)

    return PairScore(
        record_a=norm_a.record,
        record_b=norm_b.record,
        score=aggregate_score(matches),
        matches=tuple(matches),
    )


def confidence_label(score: int) -> str:
    """Review band for a score.

    Parameters
    ----------
    score : int
        Aggregate score.

    Returns
    -------
    str
        'very_likely' (>= 80), 'probable' (>= 60) or 'possible'.
    """
    for floor, label in _CONFIDENCE_BANDS:
        if score >= floor:
            return label
    return "possible"
