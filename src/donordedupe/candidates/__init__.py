"""Candidate generation modes and result ranking."""

from donordedupe.candidates.generator import (
    check_batch_duplicates,
    find_duplicates_for,
    scan_all_duplicates,
    scan_pair_count,
)
from donordedupe.candidates.models import (
    BatchCandidateResult,
    BatchResult,
    DuplicateGroup,
    DuplicateMatch,
    ScanResult,
    TargetResult,
)
from donordedupe.candidates.ranking import (
    BATCH_LIMIT,
    DEFAULT_MIN_SCORE,
    SCAN_LIMIT,
    TARGET_LIMIT,
    rank_and_limit,
    validate_min_score,
)

__all__ = [
    # Drivers
    "find_duplicates_for",
    "scan_all_duplicates",
    "check_batch_duplicates",
    "scan_pair_count",
    # Results
    "DuplicateMatch",
    "DuplicateGroup",
    "TargetResult",
    "ScanResult",
    "BatchCandidateResult",
    "BatchResult",
    # Ranking
    "DEFAULT_MIN_SCORE",
    "TARGET_LIMIT",
    "SCAN_LIMIT",
    "BATCH_LIMIT",
    "rank_and_limit",
    "validate_min_score",
]
