"""Candidate generation drivers.

Three modes enumerate different record sets and shape their output
differently, but every pair goes through the same ``score_pair`` core:

- target: one record against every other record
- scan: every unordered pair of a snapshot, each visited exactly once
- batch: each unpersisted import row against every persisted record

All drivers are pure and in-memory. Records are normalized once per call.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from itertools import combinations

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
    SCAN_LIMIT,
    TARGET_LIMIT,
    rank_and_limit,
    validate_min_score,
)
from donordedupe.errors import InvalidInputError
from donordedupe.models import DonorRecord, NormalizedDonor
from donordedupe.normalize import normalize
from donordedupe.scoring import score_pair

__all__ = [
    "find_duplicates_for",
    "scan_all_duplicates",
    "check_batch_duplicates",
    "scan_pair_count",
]


def find_duplicates_for(
    target: DonorRecord,
    records: Iterable[DonorRecord],
    min_score: float | None = None,
    *,
    limit: int = TARGET_LIMIT,
) -> TargetResult:
    """Find probable duplicates of one record.

    Parameters
    ----------
    target : DonorRecord
        Reference record.
    records : Iterable[DonorRecord]
        Records to compare against. Records sharing the target's id are
        skipped, so the full snapshot can be passed as-is.
    min_score : float | None, optional
        Keep pairs scoring at least this much (default 50).
    limit : int, optional
        Output cap (default 20).

    Returns
    -------
    TargetResult
        Ranked duplicates and the uncapped count.
    """
    threshold = validate_min_score(min_score)
    norm_target = normalize(target)

    found: list[DuplicateMatch] = []
    for record in records:
        if target.id is not None and record.id == target.id:
            continue
        pair = score_pair(norm_target, normalize(record))
        if pair.score >= threshold:
            found.append(DuplicateMatch.from_pair(pair))

    return TargetResult(
        source_record=target,
        duplicates=tuple(rank_and_limit(found, limit)),
        total_found=len(found),
    )


def _sorted_by_id(records: Iterable[DonorRecord]) -> list[NormalizedDonor]:
    """Normalize a snapshot in canonical id order, rejecting bad ids."""
    seen: set[str] = set()
    normalized: list[NormalizedDonor] = []
    for record in records:
        if record.id is None:
            raise InvalidInputError("Every scanned record needs an id")
        if record.id in seen:
            raise InvalidInputError(f"Duplicate record id in snapshot: {record.id!r}")
        seen.add(record.id)
        normalized.append(normalize(record))

    normalized.sort(key=lambda donor: donor.record.id)
    return normalized


def scan_all_duplicates(
    records: Iterable[DonorRecord],
    min_score: float | None = None,
    *,
    limit: int = SCAN_LIMIT,
) -> ScanResult:
    """Score every unordered pair of a record snapshot.

    Pairs are enumerated as the upper triangle (i < j) of the id-sorted
    snapshot, which visits each pair once and never pairs a record with
    itself. Cost is O(n^2) pairs; only the output is capped.

    Parameters
    ----------
    records : Iterable[DonorRecord]
        Snapshot of persisted records (ids required and unique).
    min_score : float | None, optional
        Keep pairs scoring at least this much (default 50).
    limit : int, optional
        Output cap (default 100).

    Returns
    -------
    ScanResult
        Ranked pairs, uncapped count and snapshot size.

    Raises
    ------
    InvalidInputError
        If a record has no id or an id appears twice.
    """
    threshold = validate_min_score(min_score)
    snapshot = _sorted_by_id(records)

    groups: list[DuplicateGroup] = []
    for donor_a, donor_b in combinations(snapshot, 2):
        pair = score_pair(donor_a, donor_b)
        if pair.score >= threshold:
            groups.append(DuplicateGroup.from_pair(pair))

    return ScanResult(
        duplicate_groups=tuple(rank_and_limit(groups, limit)),
        total_found=len(groups),
        total_records_scanned=len(snapshot),
    )


def check_batch_duplicates(
    candidates: Sequence[DonorRecord],
    existing: Iterable[DonorRecord],
    min_score: float | None = None,
    *,
    limit: int = BATCH_LIMIT,
) -> BatchResult:
    """Check import rows against persisted records before import.

    Parameters
    ----------
    candidates : Sequence[DonorRecord]
        Import rows, usually without ids.
    existing : Iterable[DonorRecord]
        Persisted records.
    min_score : float | None, optional
        Keep pairs scoring at least this much (default 50).
    limit : int, optional
        Matches kept per import row (default 5).

    Returns
    -------
    BatchResult
        Rows with probable duplicates, in submission order.

    Raises
    ------
    InvalidInputError
        If ``candidates`` is not a sequence of ``DonorRecord``.
    """
    threshold = validate_min_score(min_score)
    if isinstance(candidates, str | bytes) or not isinstance(candidates, Sequence):
        raise InvalidInputError("Candidate list must be a sequence of donor records")

    persisted = [normalize(record) for record in existing]

    results: list[BatchCandidateResult] = []
    for index, candidate in enumerate(candidates):
        if not isinstance(candidate, DonorRecord):
            raise InvalidInputError(
                f"Candidate {index} is not a donor record: {type(candidate).__name__}"
            )
        norm_candidate = normalize(candidate)
        found: list[DuplicateMatch] = []
        for donor in persisted:
            pair = score_pair(norm_candidate, donor)
            if pair.score >= threshold:
                found.append(DuplicateMatch.from_pair(pair))

        if found:
            results.append(
                BatchCandidateResult(
                    index=index,
                    candidate=candidate,
                    duplicates=tuple(rank_and_limit(found, limit)),
                )
            )

    return BatchResult(
        duplicates_found=len(results),
        total_checked=len(candidates),
        results=tuple(results),
    )


def scan_pair_count(record_count: int) -> int:
    """Number of pairs a full scan of ``record_count`` records compares."""
    return record_count * (record_count - 1) // 2
