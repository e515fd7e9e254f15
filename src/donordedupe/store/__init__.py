"""Read-only donor record sources."""

from donordedupe.store.repository import (
    DonorRepository,
    FileDonorRepository,
    InMemoryDonorRepository,
)

__all__ = [
    "DonorRepository",
    "InMemoryDonorRepository",
    "FileDonorRepository",
]
