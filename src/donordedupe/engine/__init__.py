"""Duplicate detection engine.

This package provides the service entry point over a record repository,
including configuration, explicit result types and the error taxonomy.
"""

from donordedupe.engine.config import EngineConfig, EngineResult
from donordedupe.engine.runner import DuplicateDetector
from donordedupe.errors import (
    DuplicateDetectionError,
    ErrorKind,
    InternalError,
    InvalidInputError,
    NotFoundError,
)

__all__ = [
    "EngineConfig",
    "EngineResult",
    "DuplicateDetector",
    "ErrorKind",
    "DuplicateDetectionError",
    "NotFoundError",
    "InvalidInputError",
    "InternalError",
]
