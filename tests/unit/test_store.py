"""Tests for donor repositories."""

from collections.abc import Callable
from pathlib import Path

import pytest

from donordedupe.errors import InvalidInputError
from donordedupe.models import DonorRecord
from donordedupe.store import DonorRepository, FileDonorRepository, InMemoryDonorRepository

MakeDonor = Callable[..., DonorRecord]


@pytest.mark.unit
def test_in_memory_repository(make_donor: MakeDonor) -> None:
    """Test lookups by id and listing in insertion order."""
    a = make_donor("a", first_name="Ana")
    b = make_donor("b", first_name="Ben")
    repo = InMemoryDonorRepository([a, b])

    assert isinstance(repo, DonorRepository)
    assert len(repo) == 2
    assert repo.get("a") is a
    assert repo.get("zzz") is None
    assert repo.list_all() == [a, b]
    assert repo.get_many(["b", "zzz", "a"]) == [b, a]


@pytest.mark.unit
def test_in_memory_repository_list_is_a_copy(make_donor: MakeDonor) -> None:
    """Test callers cannot alter the snapshot through list_all."""
    repo = InMemoryDonorRepository([make_donor("a")])

    repo.list_all().clear()

    assert len(repo.list_all()) == 1


@pytest.mark.unit
def test_in_memory_repository_rejects_bad_ids(make_donor: MakeDonor) -> None:
    """Test persisted records need unique ids."""
    with pytest.raises(InvalidInputError, match="need an id"):
        InMemoryDonorRepository([make_donor(None)])
    with pytest.raises(InvalidInputError, match="Duplicate donor id"):
        InMemoryDonorRepository([make_donor("a"), make_donor("a")])


@pytest.mark.unit
def test_file_repository(tmp_path: Path) -> None:
    """Test a repository loaded from a CSV snapshot."""
    path = tmp_path / "donors.csv"
    path.write_text("id,firstName,lastName\nd-1,Ana,Silva\nd-2,Ben,Roy\n", encoding="utf-8")

    repo = FileDonorRepository(path)

    assert repo.path == path
    assert [r.id for r in repo.list_all()] == ["d-1", "d-2"]
    assert repo.get("d-2").last_name == "Roy"


@pytest.mark.unit
def test_file_repository_missing_file(tmp_path: Path) -> None:
    """Test a missing snapshot raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        FileDonorRepository(tmp_path / "missing.json")
