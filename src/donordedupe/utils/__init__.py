"""Common utility functions for donordedupe."""

from donordedupe.utils.hashing import calculate_file_sha256
from donordedupe.utils.timestamps import get_iso_timestamp

__all__ = [
    "get_iso_timestamp",
    "calculate_file_sha256",
]
