"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from donordedupe.models import DonorRecord  # noqa: E402


@pytest.fixture
def make_donor() -> Callable[..., DonorRecord]:
    """Factory for donor records with minimal boilerplate.

    Every field defaults to absent; names default to empty strings as they
    do for rows without names.
    """

    def _factory(
        id: str | None = None,
        *,
        first_name: str = "",
        last_name: str = "",
        email: str | None = None,
        phone: str | None = None,
        mobile: str | None = None,
        address: str | None = None,
        city: str | None = None,
        postal_code: str | None = None,
    ) -> DonorRecord:
        return DonorRecord(
            id=id,
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone,
            mobile=mobile,
            address=address,
            city=city,
            postal_code=postal_code,
        )

    return _factory


@pytest.fixture
def full_donor(make_donor: Callable[..., DonorRecord]) -> DonorRecord:
    """Donor with every compared field populated."""
    return make_donor(
        "d-001",
        first_name="Jean",
        last_name="Tremblay",
        email="jean.tremblay@example.org",
        phone="514-555-1234",
        address="1234 rue Saint-Denis",
        city="Montréal",
        postal_code="H2X 1Y4",
    )
