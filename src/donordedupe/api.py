"""Public API for donor duplicate detection.

This module provides the file-based entry points of donordedupe, enabling:
- Finding the duplicates of one stored donor
- Scanning a whole donor snapshot for duplicate pairs
- Checking an import file against stored donors before it is persisted

Each function loads the donor snapshot from a file, runs the
``DuplicateDetector`` and returns its ``EngineResult``. Missing, unreadable or
malformed files are reported as INVALID_INPUT failures, not raised.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from donordedupe.engine import DuplicateDetector, EngineConfig, EngineResult
from donordedupe.errors import ErrorKind, InvalidInputError
from donordedupe.parse import load_donors
from donordedupe.store import FileDonorRepository

if TYPE_CHECKING:
    from donordedupe.audit import AuditLogger
    from donordedupe.candidates import BatchResult, ScanResult, TargetResult

__all__ = [
    "find_duplicates",
    "scan_duplicates",
    "check_import",
]


def _open_detector(
    donors_path: str | Path,
    config: EngineConfig | None,
    logger: AuditLogger | None,
) -> DuplicateDetector:
    repository = FileDonorRepository(donors_path)
    return DuplicateDetector(repository, config=config, logger=logger)


def _file_failure(error: Exception, logger: AuditLogger | None) -> EngineResult:
    message = str(error)
    if logger:
        logger.error(
            exception_class=type(error).__name__,
            message=message,
            kind=ErrorKind.INVALID_INPUT.value,
            stage="load",
        )
    return EngineResult.failure(ErrorKind.INVALID_INPUT, message)


def find_duplicates(
    donors_path: str | Path,
    record_id: str,
    *,
    min_score: float | None = None,
    config: EngineConfig | None = None,
    logger: AuditLogger | None = None,
) -> EngineResult[TargetResult]:
    """Find the probable duplicates of one donor in a donor file.

    Parameters
    ----------
    donors_path : str | Path
        Donor snapshot (CSV, JSON or JSONL). Every row needs a unique id.
    record_id : str
        Id of the target donor.
    min_score : float | None, optional
        Threshold in [0, 100]. Defaults to ``config.min_score`` (50).
    config : EngineConfig | None, optional
        Detector configuration.
    logger : AuditLogger | None, optional
        Audit logger.

    Returns
    -------
    EngineResult[TargetResult]
        Result with up to 20 duplicates, best first.

    Examples
    --------
        >>> from donordedupe import find_duplicates
        >>> result = find_duplicates("donors.csv", "d-0042", min_score=60)
        >>> for dup in result.value.duplicates:
        ...     print(dup.record.id, dup.score)
    """
    try:
        detector = _open_detector(donors_path, config, logger)
    except (OSError, InvalidInputError) as e:
        return _file_failure(e, logger)
    return detector.find_duplicates_for(record_id, min_score)


def scan_duplicates(
    donors_path: str | Path,
    *,
    min_score: float | None = None,
    config: EngineConfig | None = None,
    logger: AuditLogger | None = None,
) -> EngineResult[ScanResult]:
    """Scan every pair of donors in a donor file.

    Parameters
    ----------
    donors_path : str | Path
        Donor snapshot (CSV, JSON or JSONL).
    min_score : float | None, optional
        Threshold in [0, 100].
    config : EngineConfig | None, optional
        Detector configuration.
    logger : AuditLogger | None, optional
        Audit logger.

    Returns
    -------
    EngineResult[ScanResult]
        Result with up to 100 duplicate pairs, best first.
    """
    try:
        detector = _open_detector(donors_path, config, logger)
    except (OSError, InvalidInputError) as e:
        return _file_failure(e, logger)
    return detector.scan_all_duplicates(min_score)


def check_import(
    import_path: str | Path,
    donors_path: str | Path,
    *,
    min_score: float | None = None,
    config: EngineConfig | None = None,
    logger: AuditLogger | None = None,
) -> EngineResult[BatchResult]:
    """Check the rows of an import file against stored donors.

    Parameters
    ----------
    import_path : str | Path
        Import file (CSV, JSON or JSONL). English and French column
        headers are recognised; rows need no id.
    donors_path : str | Path
        Donor snapshot to check against.
    min_score : float | None, optional
        Threshold in [0, 100].
    config : EngineConfig | None, optional
        Detector configuration.
    logger : AuditLogger | None, optional
        Audit logger.

    Returns
    -------
    EngineResult[BatchResult]
        Import rows with probable duplicates, each with its top 5 matches.

    Examples
    --------
        >>> from donordedupe import check_import
        >>> result = check_import("import.csv", "donors.csv")
        >>> print(result.value.duplicates_found, "of", result.value.total_checked)
    """
    try:
        candidates = load_donors(import_path)
        detector = _open_detector(donors_path, config, logger)
    except (OSError, InvalidInputError) as e:
        return _file_failure(e, logger)
    return detector.check_batch_duplicates(candidates, min_score)
