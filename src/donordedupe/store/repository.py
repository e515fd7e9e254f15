"""Read-only donor record sources.

The engine never reaches for a global data store: a repository is injected
and queried once per operation. Tenant scoping is the repository's job; a
repository instance only ever exposes one tenant's records.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol, runtime_checkable

from donordedupe.errors import InvalidInputError
from donordedupe.models import DonorRecord
from donordedupe.parse import load_donors

__all__ = [
    "DonorRepository",
    "InMemoryDonorRepository",
    "FileDonorRepository",
]


@runtime_checkable
class DonorRepository(Protocol):
    """Tenant-scoped, read-only access to persisted donor records."""

    def get(self, record_id: str) -> DonorRecord | None:
        """Return one record, or None if the id is unknown."""
        ...

    def list_all(self) -> list[DonorRecord]:
        """Return every record of the tenant."""
        ...

    def get_many(self, record_ids: Iterable[str]) -> list[DonorRecord]:
        """Return the known records among ``record_ids``, in request order."""
        ...


class InMemoryDonorRepository:
    """Repository over a fixed snapshot of records.

    Parameters
    ----------
    records : Iterable[DonorRecord]
        Persisted records. Each must have a unique id.

    Raises
    ------
    InvalidInputError
        If a record has no id or an id is repeated.
    """

    def __init__(self, records: Iterable[DonorRecord]) -> None:
        self._records: dict[str, DonorRecord] = {}
        for record in records:
            if record.id is None:
                raise InvalidInputError("Persisted donor records need an id")
            if record.id in self._records:
                raise InvalidInputError(f"Duplicate donor id: {record.id!r}")
            self._records[record.id] = record

    def __len__(self) -> int:
        return len(self._records)

    def get(self, record_id: str) -> DonorRecord | None:
        return self._records.get(record_id)

    def list_all(self) -> list[DonorRecord]:
        return list(self._records.values())

    def get_many(self, record_ids: Iterable[str]) -> list[DonorRecord]:
        return [self._records[rid] for rid in record_ids if rid in self._records]


class FileDonorRepository(InMemoryDonorRepository):
    """Repository loaded once from a donor file (CSV, JSON or JSONL).

    Parameters
    ----------
    path : str | Path
        Donor file exported from the store.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(load_donors(self.path))
