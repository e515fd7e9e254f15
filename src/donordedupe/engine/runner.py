"""Duplicate detector service.

Wraps the three candidate generation modes behind one object that owns an
injected record repository. Each operation fetches its record snapshot once,
runs the pure in-memory driver, logs the run, and returns an explicit
``EngineResult`` instead of raising:

- NotFound / InvalidInput failures carry a descriptive message
- anything else is reported as Internal with a generic message; the details
  and traceback go to the audit log only

There is no retry and no partial result: a failed fetch fails the call.
"""

import time
import traceback
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from donordedupe.audit.logger import AuditLogger
from donordedupe.candidates import (
    BatchResult,
    ScanResult,
    TargetResult,
    check_batch_duplicates,
    find_duplicates_for,
    scan_all_duplicates,
    scan_pair_count,
    validate_min_score,
)
from donordedupe.engine.config import EngineConfig, EngineResult
from donordedupe.errors import (
    DuplicateDetectionError,
    ErrorKind,
    InvalidInputError,
    NotFoundError,
)
from donordedupe.models import DonorRecord
from donordedupe.parse import parse_batch_payload
from donordedupe.store import DonorRepository

T = TypeVar("T")

# Operation names used as audit stages
STAGE_FIND = "find_duplicates_for"
STAGE_SCAN = "scan_all_duplicates"
STAGE_BATCH = "check_batch_duplicates"

_INTERNAL_MESSAGES = {
    STAGE_FIND: "Internal error while searching for duplicates",
    STAGE_SCAN: "Internal error while scanning for duplicates",
    STAGE_BATCH: "Internal error while checking import duplicates",
}

# (value, counters) produced by an operation body
_Outcome = tuple[T, dict[str, int]]


def _coerce_candidates(candidates: Any) -> list[DonorRecord]:
    """Accept donor records or a decoded JSON payload of donor objects."""
    if candidates is None:
        raise InvalidInputError("A candidate list is required")
    if (
        isinstance(candidates, Sequence)
        and not isinstance(candidates, str | bytes)
        and all(isinstance(c, DonorRecord) for c in candidates)
    ):
        return list(candidates)
    return parse_batch_payload(candidates)


class DuplicateDetector:
    """Find probable duplicate donors in a tenant's records.

    Parameters
    ----------
    repository : DonorRepository
        Read-only, tenant-scoped record source.
    config : EngineConfig | None, optional
        Thresholds and output caps. Defaults to ``EngineConfig()``.
    logger : AuditLogger | None, optional
        Audit logger. If None, nothing is logged.

    Examples
    --------
        >>> from donordedupe import DuplicateDetector, InMemoryDonorRepository
        >>> detector = DuplicateDetector(InMemoryDonorRepository(records))
        >>> result = detector.scan_all_duplicates(min_score=60)
        >>> if result.success:
        ...     print(result.value.total_found)
    """

    def __init__(
        self,
        repository: DonorRepository,
        config: EngineConfig | None = None,
        logger: AuditLogger | None = None,
    ) -> None:
        self.repository = repository
        self.config = config if config is not None else EngineConfig()
        self.logger = logger

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def find_duplicates_for(
        self,
        record_id: str,
        min_score: float | None = None,
    ) -> EngineResult[TargetResult]:
        """Compare one stored record against every other record.

        Parameters
        ----------
        record_id : str
            Id of the target record.
        min_score : float | None, optional
            Threshold override in [0, 100].

        Returns
        -------
        EngineResult[TargetResult]
            Up to ``config.target_limit`` duplicates, best first. Fails with
            NOT_FOUND for an unknown id.
        """

        def work() -> _Outcome[TargetResult]:
            threshold = validate_min_score(min_score, default=self.config.min_score)
            if not isinstance(record_id, str) or not record_id:
                raise InvalidInputError("recordId must be a non-empty string")

            records = self.repository.list_all()
            target = next((r for r in records if r.id == record_id), None)
            if target is None:
                raise NotFoundError(record_id)

            others = [r for r in records if r.id != record_id]
            result = find_duplicates_for(
                target, others, threshold, limit=self.config.target_limit
            )
            return result, {
                "records_scanned": len(others),
                "pairs_compared": len(others),
                "matches_kept": result.total_found,
            }

        rid = record_id if isinstance(record_id, str) else None
        return self._execute(STAGE_FIND, work, rid=rid)

    def scan_all_duplicates(self, min_score: float | None = None) -> EngineResult[ScanResult]:
        """Compare every unordered pair of stored records.

        The input snapshot is not capped: cost grows with the square of the
        record count. A WARN ``large_scan`` event is logged above
        ``config.scan_warn_pairs`` pairs.

        Parameters
        ----------
        min_score : float | None, optional
            Threshold override in [0, 100].

        Returns
        -------
        EngineResult[ScanResult]
            Up to ``config.scan_limit`` pairs, best first.
        """

        def work() -> _Outcome[ScanResult]:
            threshold = validate_min_score(min_score, default=self.config.min_score)
            records = self.repository.list_all()
            pairs = scan_pair_count(len(records))

            warn_at = self.config.scan_warn_pairs
            if self.logger and warn_at and pairs > warn_at:
                self.logger.event(
                    "large_scan",
                    data={"records": len(records), "pairs": pairs, "warn_pairs": warn_at},
                    level="WARN",
                    stage=STAGE_SCAN,
                )

            result = scan_all_duplicates(records, threshold, limit=self.config.scan_limit)
            return result, {
                "records_scanned": result.total_records_scanned,
                "pairs_compared": pairs,
                "matches_kept": result.total_found,
            }

        return self._execute(STAGE_SCAN, work)

    def check_batch_duplicates(
        self,
        candidates: Any,
        min_score: float | None = None,
    ) -> EngineResult[BatchResult]:
        """Check unpersisted import rows against stored records.

        Parameters
        ----------
        candidates : Any
            A sequence of ``DonorRecord`` or a decoded JSON list of donor
            objects (wire field names).
        min_score : float | None, optional
            Threshold override in [0, 100].

        Returns
        -------
        EngineResult[BatchResult]
            Rows with probable duplicates and their top
            ``config.batch_limit`` matches. Fails with INVALID_INPUT for a
            missing or malformed candidate list.
        """

        def work() -> _Outcome[BatchResult]:
            threshold = validate_min_score(min_score, default=self.config.min_score)
            rows = _coerce_candidates(candidates)
            existing = self.repository.list_all()

            result = check_batch_duplicates(
                rows, existing, threshold, limit=self.config.batch_limit
            )
            return result, {
                "records_scanned": len(existing),
                "candidates_checked": result.total_checked,
                "pairs_compared": len(rows) * len(existing),
                "matches_kept": result.duplicates_found,
            }

        return self._execute(STAGE_BATCH, work)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _execute(
        self,
        stage: str,
        work: Callable[[], _Outcome[T]],
        rid: str | None = None,
    ) -> EngineResult[T]:
        """Run an operation body with timing, logging and error mapping."""
        start = time.perf_counter()
        if self.logger:
            self.logger.stage_started(stage)

        try:
            value, counters = work()
        except DuplicateDetectionError as e:
            if e.kind is ErrorKind.INTERNAL:
                return self._internal_failure(stage, e, rid)
            self._log_error(stage, e, rid)
            return EngineResult.failure(e.kind, str(e))
        except Exception as e:
            return self._internal_failure(stage, e, rid)

        if self.logger:
            self.logger.stage_finished(
                stage=stage,
                duration_seconds=time.perf_counter() - start,
                counters=counters,
            )
        return EngineResult.ok(value)

    def _internal_failure(
        self, stage: str, error: Exception, rid: str | None
    ) -> EngineResult[Any]:
        self._log_error(stage, error, rid, with_traceback=True)
        return EngineResult.failure(ErrorKind.INTERNAL, _INTERNAL_MESSAGES[stage])

    def _log_error(
        self,
        stage: str,
        error: Exception,
        rid: str | None,
        with_traceback: bool = False,
    ) -> None:
        if not self.logger:
            return
        kind = error.kind if isinstance(error, DuplicateDetectionError) else ErrorKind.INTERNAL
        self.logger.error(
            exception_class=type(error).__name__,
            message=str(error),
            kind=kind.value,
            stage=stage,
            rid=rid,
            traceback=traceback.format_exc() if with_traceback else None,
        )
        self.logger.set_stage(None)
