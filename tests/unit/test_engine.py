"""Tests for the duplicate detector service."""

import json
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

import jsonschema
import pytest

from donordedupe.audit import LOG_EVENT_SCHEMA, AuditLogger
from donordedupe.engine import (
    DuplicateDetector,
    EngineConfig,
    EngineResult,
    ErrorKind,
    InternalError,
)
from donordedupe.models import DonorRecord
from donordedupe.store import InMemoryDonorRepository

MakeDonor = Callable[..., DonorRecord]


class _FailingRepository:
    """Repository whose storage backend is down."""

    def __init__(self, error: Exception) -> None:
        self.error = error

    def get(self, record_id: str) -> DonorRecord | None:
        raise self.error

    def list_all(self) -> list[DonorRecord]:
        raise self.error

    def get_many(self, record_ids: Iterable[str]) -> list[DonorRecord]:
        raise self.error


class _CountingRepository(InMemoryDonorRepository):
    """In-memory repository that counts storage reads."""

    def __init__(self, records: Iterable[DonorRecord]) -> None:
        super().__init__(records)
        self.reads = 0

    def get(self, record_id: str) -> DonorRecord | None:
        self.reads += 1
        return super().get(record_id)

    def list_all(self) -> list[DonorRecord]:
        self.reads += 1
        return super().list_all()

    def get_many(self, record_ids: Iterable[str]) -> list[DonorRecord]:
        self.reads += 1
        return super().get_many(record_ids)


@pytest.fixture
def records(make_donor: MakeDonor) -> list[DonorRecord]:
    """Tenant snapshot with one strong and one weak duplicate of d-1."""
    return [
        make_donor("d-1", first_name="Jean", last_name="Tremblay", email="j@x.com"),
        make_donor("d-2", first_name="Jean", last_name="Tremblay", email="J@X.com"),
        make_donor("d-3", first_name="Luc", last_name="Roy", email="j@x.com"),
        make_donor("d-4", first_name="Ana", last_name="Silva", phone="5145550000"),
    ]


@pytest.fixture
def detector(records: list[DonorRecord]) -> DuplicateDetector:
    """Detector without audit logging."""
    return DuplicateDetector(InMemoryDonorRepository(records))


@pytest.fixture
def logger(tmp_path: Path) -> Iterator[AuditLogger]:
    """Audit logger writing to a temporary file."""
    lg = AuditLogger(tmp_path / "events.jsonl", run_id="engine_test")
    yield lg
    lg.close()


def _read_events(path: Path) -> list[dict]:
    with path.open(encoding="utf-8") as f:
        events = [json.loads(line) for line in f if line.strip()]
    for event in events:
        jsonschema.validate(instance=event, schema=LOG_EVENT_SCHEMA)
    return events


# ---------------------------------------------------------------------------
# Configuration and results
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_config_defaults() -> None:
    """Test default thresholds and caps."""
    config = EngineConfig()

    assert config.to_dict() == {
        "min_score": 50,
        "target_limit": 20,
        "scan_limit": 100,
        "batch_limit": 5,
        "scan_warn_pairs": 5_000_000,
    }


@pytest.mark.unit
@pytest.mark.parametrize(
    "kwargs",
    [{"min_score": -1}, {"min_score": 101}, {"target_limit": 0}, {"scan_warn_pairs": -5}],
)
def test_config_validation(kwargs: dict) -> None:
    """Test invalid configuration is rejected at construction."""
    with pytest.raises(ValueError):
        EngineConfig(**kwargs)


@pytest.mark.unit
def test_result_to_dict() -> None:
    """Test both result shapes."""
    assert EngineResult.ok({"a": 1}).to_dict() == {
        "success": True,
        "result": {"a": 1},
        "error": None,
    }
    assert EngineResult.failure(ErrorKind.NOT_FOUND, "gone").to_dict() == {
        "success": False,
        "result": None,
        "error": {"kind": "not_found", "message": "gone"},
    }


# ---------------------------------------------------------------------------
# Target mode
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_find_duplicates_for(detector: DuplicateDetector) -> None:
    """Test a known record returns ranked duplicates."""
    result = detector.find_duplicates_for("d-1")

    assert result.success
    assert result.error_kind is None
    assert result.value.source_record.id == "d-1"
    assert [d.record.id for d in result.value.duplicates] == ["d-2"]


@pytest.mark.unit
def test_find_duplicates_for_min_score_override(detector: DuplicateDetector) -> None:
    """Test a lower threshold brings in the email-only match."""
    result = detector.find_duplicates_for("d-1", min_score=30)

    assert [(d.record.id, d.score) for d in result.value.duplicates] == [("d-2", 65), ("d-3", 38)]


@pytest.mark.unit
def test_find_duplicates_for_config_defaults(records: list[DonorRecord]) -> None:
    """Test the configured threshold and cap apply without overrides."""
    config = EngineConfig(min_score=30, target_limit=1)
    detector = DuplicateDetector(InMemoryDonorRepository(records), config=config)

    result = detector.find_duplicates_for("d-1")

    assert [d.record.id for d in result.value.duplicates] == ["d-2"]
    assert result.value.total_found == 2


@pytest.mark.unit
def test_find_duplicates_for_reads_snapshot_once(records: list[DonorRecord]) -> None:
    """Test the target and its comparison set come from a single read."""
    repository = _CountingRepository(records)
    detector = DuplicateDetector(repository)

    found = detector.find_duplicates_for("d-1")
    missing = detector.find_duplicates_for("nope")

    assert [d.record.id for d in found.value.duplicates] == ["d-2"]
    assert missing.error_kind is ErrorKind.NOT_FOUND
    assert repository.reads == 2


@pytest.mark.unit
def test_find_duplicates_for_unknown_id(detector: DuplicateDetector) -> None:
    """Test an unknown id is reported as not found."""
    result = detector.find_duplicates_for("nope")

    assert not result.success
    assert result.value is None
    assert result.error_kind is ErrorKind.NOT_FOUND
    assert "nope" in result.error_message


@pytest.mark.unit
@pytest.mark.parametrize("record_id", ["", None, 12])
def test_find_duplicates_for_bad_id(detector: DuplicateDetector, record_id: object) -> None:
    """Test a missing or non-string id is invalid input."""
    result = detector.find_duplicates_for(record_id)  # type: ignore[arg-type]

    assert result.error_kind is ErrorKind.INVALID_INPUT


@pytest.mark.unit
@pytest.mark.parametrize("min_score", [-0.1, 100.1, "60", True])
def test_find_duplicates_for_bad_min_score(detector: DuplicateDetector, min_score: object) -> None:
    """Test out-of-range or non-numeric thresholds are invalid input."""
    result = detector.find_duplicates_for("d-1", min_score=min_score)  # type: ignore[arg-type]

    assert result.error_kind is ErrorKind.INVALID_INPUT
    assert "minScore" in result.error_message


# ---------------------------------------------------------------------------
# Full-scan mode
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_scan_all_duplicates(detector: DuplicateDetector) -> None:
    """Test a scan reports each duplicate pair once."""
    result = detector.scan_all_duplicates()

    assert result.success
    pairs = [(g.record_a.id, g.record_b.id) for g in result.value.duplicate_groups]
    assert pairs == [("d-1", "d-2")]
    assert result.value.total_records_scanned == 4


@pytest.mark.unit
def test_scan_all_duplicates_is_idempotent(detector: DuplicateDetector) -> None:
    """Test repeated scans of an unchanged snapshot agree."""
    assert detector.scan_all_duplicates(0).to_dict() == detector.scan_all_duplicates(0).to_dict()


@pytest.mark.unit
def test_scan_logs_large_scan_warning(records: list[DonorRecord], logger: AuditLogger) -> None:
    """Test a WARN event is logged above the configured pair count."""
    config = EngineConfig(scan_warn_pairs=5)
    detector = DuplicateDetector(InMemoryDonorRepository(records), config=config, logger=logger)

    assert detector.scan_all_duplicates().success

    events = _read_events(logger.log_path)
    warning = next(e for e in events if e["event"] == "large_scan")
    assert warning["level"] == "WARN"
    assert warning["stage"] == "scan_all_duplicates"
    assert warning["data"] == {"records": 4, "pairs": 6, "warn_pairs": 5}


@pytest.mark.unit
@pytest.mark.parametrize("warn_pairs", [0, 6])
def test_scan_no_warning_at_or_below_limit(
    records: list[DonorRecord], logger: AuditLogger, warn_pairs: int
) -> None:
    """Test no warning when disabled or not exceeded."""
    config = EngineConfig(scan_warn_pairs=warn_pairs)
    detector = DuplicateDetector(InMemoryDonorRepository(records), config=config, logger=logger)

    detector.scan_all_duplicates()

    assert all(e["event"] != "large_scan" for e in _read_events(logger.log_path))


# ---------------------------------------------------------------------------
# Batch mode
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_check_batch_with_records(detector: DuplicateDetector, make_donor: MakeDonor) -> None:
    """Test a batch of donor records."""
    candidates = [make_donor(first_name="Ana", last_name="Silva", phone="514 555 0000")]

    result = detector.check_batch_duplicates(candidates)

    assert result.success
    assert result.value.duplicates_found == 1
    assert result.value.results[0].duplicates[0].record.id == "d-4"


@pytest.mark.unit
def test_check_batch_with_json_payload(detector: DuplicateDetector) -> None:
    """Test a decoded JSON payload with wire field names."""
    payload = [
        {"firstName": "Zoé", "lastName": "Nadeau"},
        {"firstName": "Jean", "lastName": "Tremblay", "email": "j@x.com"},
    ]

    result = detector.check_batch_duplicates(payload)

    assert result.value.total_checked == 2
    assert result.value.duplicates_found == 1
    assert result.value.results[0].index == 1
    assert [d.record.id for d in result.value.results[0].duplicates] == ["d-1", "d-2"]


@pytest.mark.unit
def test_check_batch_empty(detector: DuplicateDetector) -> None:
    """Test an empty batch succeeds with nothing to report."""
    result = detector.check_batch_duplicates([])

    assert result.success
    assert result.value.total_checked == 0


@pytest.mark.unit
@pytest.mark.parametrize(
    "payload",
    [None, "Jean Tremblay", {"firstName": "Jean"}, [{"email": {"nested": True}}], [1, 2]],
)
def test_check_batch_malformed(detector: DuplicateDetector, payload: object) -> None:
    """Test malformed candidate lists are invalid input."""
    result = detector.check_batch_duplicates(payload)

    assert result.error_kind is ErrorKind.INVALID_INPUT


# ---------------------------------------------------------------------------
# Failures and audit trail
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    "error", [RuntimeError("db down: secret"), InternalError("db down: secret")]
)
def test_storage_failure_is_internal(logger: AuditLogger, error: Exception) -> None:
    """Test storage failures are generic to callers and detailed in the log."""
    detector = DuplicateDetector(_FailingRepository(error), logger=logger)

    results = [
        detector.find_duplicates_for("d-1"),
        detector.scan_all_duplicates(),
        detector.check_batch_duplicates([]),
    ]

    for result in results:
        assert not result.success
        assert result.error_kind is ErrorKind.INTERNAL
        assert "secret" not in result.error_message

    errors = [e for e in _read_events(logger.log_path) if e["event"] == "error"]
    assert len(errors) == 3
    assert all(e["level"] == "ERROR" for e in errors)
    assert all(e["data"]["kind"] == "internal" for e in errors)
    assert all(e["data"]["message"] == "db down: secret" for e in errors)
    assert all("Traceback" in e["data"]["traceback"] for e in errors)
    assert errors[0]["rid"] == "d-1"


@pytest.mark.unit
def test_success_logs_stage_counters(records: list[DonorRecord], logger: AuditLogger) -> None:
    """Test each operation logs a started/finished pair with counters."""
    detector = DuplicateDetector(InMemoryDonorRepository(records), logger=logger)

    detector.find_duplicates_for("d-1")

    started, finished = _read_events(logger.log_path)
    assert started["event"] == "stage_started"
    assert finished["event"] == "stage_finished"
    assert finished["stage"] == "find_duplicates_for"
    assert finished["data"]["counters"] == {
        "records_scanned": 3,
        "pairs_compared": 3,
        "matches_kept": 1,
    }
    assert finished["data"]["duration_seconds"] >= 0


@pytest.mark.unit
def test_not_found_logged_without_traceback(
    records: list[DonorRecord], logger: AuditLogger
) -> None:
    """Test expected failures are logged with their kind only."""
    detector = DuplicateDetector(InMemoryDonorRepository(records), logger=logger)

    detector.find_duplicates_for("ghost")

    events = _read_events(logger.log_path)
    error = events[-1]
    assert error["event"] == "error"
    assert error["rid"] == "ghost"
    assert error["data"]["kind"] == "not_found"
    assert error["data"]["exception_class"] == "NotFoundError"
    assert "traceback" not in error["data"]
    assert logger.current_stage is None
