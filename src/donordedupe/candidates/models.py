"""Result models for the three candidate generation modes.

Each ``to_dict`` produces the wire shape callers receive: camelCase keys,
records serialized with ``DonorRecord.to_dict``.
"""

from dataclasses import dataclass
from typing import Any

from donordedupe.models import DonorRecord
from donordedupe.scoring.models import FieldMatch, PairScore
from donordedupe.scoring.score_pairs import confidence_label


@dataclass(frozen=True, slots=True)
class DuplicateMatch:
    """One probable duplicate of a reference record.

    Attributes
    ----------
    record : DonorRecord
        The matching record.
    score : int
        Aggregate score in [0, 100].
    matches : tuple[FieldMatch, ...]
        Field evidence; ``value1`` belongs to the reference record.
    """

    record: DonorRecord
    score: int
    matches: tuple[FieldMatch, ...]

    @classmethod
    def from_pair(cls, pair: PairScore) -> "DuplicateMatch":
        """Build from a pair scored as (reference, other)."""
        return cls(record=pair.record_b, score=pair.score, matches=pair.matches)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "record": self.record.to_dict(),
            "score": self.score,
            "confidence": confidence_label(self.score),
            "matches": [m.to_dict() for m in self.matches],
        }


@dataclass(frozen=True, slots=True)
class DuplicateGroup:
    """A probable duplicate pair found by a full scan.

    Attributes
    ----------
    record_a : DonorRecord
        Record with the smaller id.
    record_b : DonorRecord
        Record with the larger id.
    score : int
        Aggregate score in [0, 100].
    matches : tuple[FieldMatch, ...]
        Field evidence; ``value1`` belongs to ``record_a``.
    """

    record_a: DonorRecord
    record_b: DonorRecord
    score: int
    matches: tuple[FieldMatch, ...]

    @classmethod
    def from_pair(cls, pair: PairScore) -> "DuplicateGroup":
        """Build from a scored pair."""
        return cls(
            record_a=pair.record_a,
            record_b=pair.record_b,
            score=pair.score,
            matches=pair.matches,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "recordA": self.record_a.to_dict(),
            "recordB": self.record_b.to_dict(),
            "score": self.score,
            "confidence": confidence_label(self.score),
            "matches": [m.to_dict() for m in self.matches],
        }


@dataclass(frozen=True, slots=True)
class TargetResult:
    """Duplicates of one named record.

    Attributes
    ----------
    source_record : DonorRecord
        The target record.
    duplicates : tuple[DuplicateMatch, ...]
        Ranked matches, capped.
    total_found : int
        Matches at or above the threshold before capping.
    """

    source_record: DonorRecord
    duplicates: tuple[DuplicateMatch, ...]
    total_found: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "sourceRecord": self.source_record.to_dict(),
            "duplicates": [d.to_dict() for d in self.duplicates],
            "totalFound": self.total_found,
        }


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Duplicate pairs across a whole record snapshot.

    Attributes
    ----------
    duplicate_groups : tuple[DuplicateGroup, ...]
        Ranked pairs, capped.
    total_found : int
        Pairs at or above the threshold before capping.
    total_records_scanned : int
        Records in the snapshot.
    """

    duplicate_groups: tuple[DuplicateGroup, ...]
    total_found: int
    total_records_scanned: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "duplicateGroups": [g.to_dict() for g in self.duplicate_groups],
            "totalFound": self.total_found,
            "totalRecordsScanned": self.total_records_scanned,
        }


@dataclass(frozen=True, slots=True)
class BatchCandidateResult:
    """Existing records matching one import row.

    Attributes
    ----------
    index : int
        0-based position of the row in the submitted batch.
    candidate : DonorRecord
        The import row.
    duplicates : tuple[DuplicateMatch, ...]
        Top matches among persisted records.
    """

    index: int
    candidate: DonorRecord
    duplicates: tuple[DuplicateMatch, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "index": self.index,
            "candidate": self.candidate.to_dict(),
            "duplicates": [d.to_dict() for d in self.duplicates],
        }


@dataclass(frozen=True, slots=True)
class BatchResult:
    """Import pre-check outcome.

    Attributes
    ----------
    duplicates_found : int
        Import rows with at least one probable duplicate.
    total_checked : int
        Import rows submitted.
    results : tuple[BatchCandidateResult, ...]
        One entry per row with duplicates, in submission order.
    """

    duplicates_found: int
    total_checked: int
    results: tuple[BatchCandidateResult, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "duplicatesFound": self.duplicates_found,
            "totalChecked": self.total_checked,
            "results": [r.to_dict() for r in self.results],
        }
