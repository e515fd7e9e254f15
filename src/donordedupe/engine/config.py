"""Engine configuration and result dataclasses."""

from dataclasses import asdict, dataclass
from typing import Any, Generic, TypeVar

from donordedupe.candidates.ranking import (
    BATCH_LIMIT,
    DEFAULT_MIN_SCORE,
    SCAN_LIMIT,
    TARGET_LIMIT,
)
from donordedupe.errors import ErrorKind

T = TypeVar("T")

DEFAULT_SCAN_WARN_PAIRS = 5_000_000


@dataclass
class EngineConfig:
    """Configuration for the duplicate detector.

    Attributes
    ----------
    min_score : float
        Default threshold when a request gives none (default: 50).
    target_limit : int
        Duplicates returned for a single target record (default: 20).
    scan_limit : int
        Pairs returned by a full scan (default: 100).
    batch_limit : int
        Matches returned per import row (default: 5).
    scan_warn_pairs : int
        Log a WARN ``large_scan`` event when a full scan would compare more
        pairs than this. 0 disables the warning.
    """

    min_score: float = DEFAULT_MIN_SCORE
    target_limit: int = TARGET_LIMIT
    scan_limit: int = SCAN_LIMIT
    batch_limit: int = BATCH_LIMIT
    scan_warn_pairs: int = DEFAULT_SCAN_WARN_PAIRS

    def __post_init__(self) -> None:
        """Validate."""
        if not 0 <= self.min_score <= 100:
            raise ValueError(f"min_score must be in [0, 100], got {self.min_score}")

        for name in ("target_limit", "scan_limit", "batch_limit"):
            value = getattr(self, name)
            if value < 1:
                raise ValueError(f"{name} must be at least 1, got {value}")

        if self.scan_warn_pairs < 0:
            raise ValueError(f"scan_warn_pairs must be >= 0, got {self.scan_warn_pairs}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class EngineResult(Generic[T]):
    """Outcome of one detector operation.

    Exactly one of ``value`` and ``error_kind`` is set.

    Attributes
    ----------
    success : bool
        Whether the operation completed.
    value : T | None
        Operation result on success.
    error_kind : ErrorKind | None
        Failure category on failure.
    error_message : str | None
        Descriptive message for not-found and invalid-input failures, a
        generic one for internal failures.
    """

    success: bool
    value: T | None = None
    error_kind: ErrorKind | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls, value: T) -> "EngineResult[T]":
        """Successful result."""
        return cls(success=True, value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "EngineResult[T]":
        """Failed result."""
        return cls(success=False, error_kind=kind, error_message=message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        if self.success:
            to_dict = getattr(self.value, "to_dict", None)
            return {
                "success": True,
                "result": to_dict() if callable(to_dict) else self.value,
                "error": None,
            }
        return {
            "success": False,
            "result": None,
            "error": {
                "kind": self.error_kind.value if self.error_kind else None,
                "message": self.error_message,
            },
        }
