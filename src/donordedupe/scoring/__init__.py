"""Pairwise duplicate scoring.

This module implements the scoring layer that compares two donor records
field by field and combines the evidence into an explainable 0-100 score.
"""

from donordedupe.scoring.comparators import FIELD_CONFIGS, FieldConfig, compare_fields
from donordedupe.scoring.models import FieldMatch, PairScore
from donordedupe.scoring.score_pairs import (
    FIELD_WEIGHTS,
    MAX_RAW_SCORE,
    aggregate_score,
    confidence_label,
    score_pair,
)
from donordedupe.scoring.similarity import levenshtein_distance, normalized_similarity

__all__ = [
    # Models
    "FieldMatch",
    "PairScore",
    # Similarity
    "levenshtein_distance",
    "normalized_similarity",
    # Comparators
    "FieldConfig",
    "FIELD_CONFIGS",
    "compare_fields",
    # Aggregate
    "FIELD_WEIGHTS",
    "MAX_RAW_SCORE",
    "aggregate_score",
    "confidence_label",
    "score_pair",
]
