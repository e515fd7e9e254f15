"""Hashing utilities for report artifacts."""

import hashlib
from pathlib import Path

__all__ = ["calculate_file_sha256"]


def calculate_file_sha256(path: Path) -> str:
    """Calculate SHA256 hash of a file, read in chunks.

    Parameters
    ----------
    path : Path
        Path to file.

    Returns
    -------
    str
        SHA256 hash with "sha256:" prefix.

    Raises
    ------
    FileNotFoundError
        If file does not exist.
    """
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    sha256_hash = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            sha256_hash.update(chunk)

    return f"sha256:{sha256_hash.hexdigest()}"
