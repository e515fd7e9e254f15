"""Shared data types for donordedupe.

Domain-specific types live closer to their consumers:
- Scoring types → donordedupe.scoring.models
- Result types → donordedupe.candidates.models
"""

from donordedupe.models.fields import (
    COLUMN_ALIASES,
    FIELD_LABELS,
    FIELD_NAMES,
    WIRE_NAMES,
    resolve_column,
)
from donordedupe.models.records import DonorRecord, NormalizedDonor

__all__ = [
    "DonorRecord",
    "NormalizedDonor",
    "FIELD_NAMES",
    "FIELD_LABELS",
    "COLUMN_ALIASES",
    "WIRE_NAMES",
    "resolve_column",
]
