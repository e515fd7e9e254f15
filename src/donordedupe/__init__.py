"""Fuzzy duplicate detection for donor records.

This package provides:
- Data models (donordedupe.models): donor records and field names
- Normalization (donordedupe.normalize): comparison-ready field values
- Scoring (donordedupe.scoring): explainable pairwise 0-100 scores
- Candidates (donordedupe.candidates): target, scan and batch modes
- Parsing (donordedupe.parse): donor and import file ingestion
- Store (donordedupe.store): read-only record repositories
- Engine (donordedupe.engine): duplicate detector service
- Audit (donordedupe.audit): structured JSONL logging
- CLI (donordedupe.cli): command-line interface
- Public API (donordedupe.api): file-based convenience functions
"""

__version__ = "0.1.0"
__license__ = "MIT"

from donordedupe.api import check_import, find_duplicates, scan_duplicates
from donordedupe.engine import DuplicateDetector, EngineConfig, EngineResult
from donordedupe.errors import (
    DuplicateDetectionError,
    ErrorKind,
    InternalError,
    InvalidInputError,
    NotFoundError,
    ParseError,
)
from donordedupe.models import DonorRecord
from donordedupe.parse import load_donors
from donordedupe.scoring import score_pair
from donordedupe.store import InMemoryDonorRepository

__all__ = [
    "__version__",
    "__license__",
    "DonorRecord",
    "score_pair",
    "DuplicateDetector",
    "EngineConfig",
    "EngineResult",
    "InMemoryDonorRepository",
    "ErrorKind",
    "DuplicateDetectionError",
    "NotFoundError",
    "InvalidInputError",
    "InternalError",
    "ParseError",
    "load_donors",
    "find_duplicates",
    "scan_duplicates",
    "check_import",
]
