"""Data models for pairwise scoring.

This module defines the per-field evidence and pair score produced by the
comparator registry and the aggregate scorer.
"""

from dataclasses import dataclass
from typing import Any

from donordedupe.models import FIELD_LABELS, DonorRecord


@dataclass(frozen=True, slots=True)
class FieldMatch:
    """Positive evidence from one compared field.

    Attributes
    ----------
    field : str
        Wire field name (e.g., 'email', 'lastName').
    similarity : float
        Match strength in [0, 1]; 1.0 for exact-match fields.
    value1 : str | None
        Value reported for the first record.
    value2 : str | None
        Value reported for the second record.
    """

    field: str
    similarity: float
    value1: str | None
    value2: str | None

    def swapped(self) -> "FieldMatch":
        """Same evidence seen from the other record's side."""
        return FieldMatch(
            field=self.field,
            similarity=self.similarity,
            value1=self.value2,
            value2=self.value1,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "field": self.field,
            "label": FIELD_LABELS.get(self.field, self.field),
            "score": self.similarity,
            "value1": self.value1,
            "value2": self.value2,
        }


@dataclass(frozen=True, slots=True)
class PairScore:
    """Duplicate-confidence score for a pair of records.

    Attributes
    ----------
    record_a : DonorRecord
        First record.
    record_b : DonorRecord
        Second record.
    score : int
        Aggregate duplicate confidence in [0, 100].
    matches : tuple[FieldMatch, ...]
        Reported field evidence, in comparator order.
    """

    record_a: DonorRecord
    record_b: DonorRecord
    score: int
    matches: tuple[FieldMatch, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "recordA": self.record_a.to_dict(),
            "recordB": self.record_b.to_dict(),
            "score": self.score,
            "matches": [m.to_dict() for m in self.matches],
        }
