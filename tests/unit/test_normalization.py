"""Tests for field normalization."""

import pytest

from donordedupe.models import DonorRecord
from donordedupe.normalize import (
    normalize,
    normalize_email,
    normalize_phone,
    normalize_postal_code,
    normalize_text,
    select_phone,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("  Jean  ", "jean"),
        ("TREMBLAY", "tremblay"),
        ("Éric", "éric"),
        ("", None),
        ("   ", None),
        (None, None),
    ],
)
def test_normalize_text(value: str | None, expected: str | None) -> None:
    """Test text is trimmed and lower-cased, blanks give None."""
    assert normalize_text(value) == expected


@pytest.mark.unit
def test_normalize_text_keeps_diacritics() -> None:
    """Test accented and unaccented spellings stay distinct."""
    assert normalize_text("Éric") != normalize_text("Eric")


@pytest.mark.unit
def test_normalize_email() -> None:
    """Test emails are compared case-insensitively."""
    assert normalize_email(" A@X.com ") == normalize_email("a@x.com") == "a@x.com"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("(514) 555-1234", "5145551234"),
        ("514.555.1234", "5145551234"),
        ("+1 514 555 1234", "+15145551234"),
        ("--", None),
        (None, None),
    ],
)
def test_normalize_phone(value: str | None, expected: str | None) -> None:
    """Test phone separators are stripped."""
    assert normalize_phone(value) == expected


@pytest.mark.unit
def test_select_phone_falls_back_to_mobile() -> None:
    """Test mobile is used only when phone is absent."""
    assert select_phone(None, "438-555-0000") == "4385550000"
    assert select_phone("  ", "438-555-0000") == "4385550000"
    assert select_phone("514-555-1234", "438-555-0000") == "5145551234"
    assert select_phone(None, None) is None


@pytest.mark.unit
def test_normalize_postal_code() -> None:
    """Test internal whitespace is removed and case kept."""
    assert normalize_postal_code("H2X 1Y4") == normalize_postal_code("H2X1Y4") == "H2X1Y4"
    assert normalize_postal_code(" h2x 1y4 ") == "h2x1y4"
    assert normalize_postal_code(" ") is None


@pytest.mark.unit
def test_normalize_record(full_donor: DonorRecord) -> None:
    """Test a record is normalized field by field."""
    norm = normalize(full_donor)

    assert norm.record is full_donor
    assert norm.id == "d-001"
    assert norm.email == "jean.tremblay@example.org"
    assert norm.first_name == "jean"
    assert norm.last_name == "tremblay"
    assert norm.phone == "5145551234"
    assert norm.address == "1234 rue saint-denis"
    assert norm.postal_code == "H2X1Y4"


@pytest.mark.unit
def test_normalize_is_idempotent(full_donor: DonorRecord) -> None:
    """Test normalizing already-normalized values changes nothing."""
    norm = normalize(full_donor)
    again = normalize(
        DonorRecord(
            first_name=norm.first_name or "",
            last_name=norm.last_name or "",
            email=norm.email,
            phone=norm.phone,
            address=norm.address,
            postal_code=norm.postal_code,
        )
    )

    assert (again.email, again.first_name, again.last_name) == (
        norm.email,
        norm.first_name,
        norm.last_name,
    )
    assert (again.phone, again.address, again.postal_code) == (
        norm.phone,
        norm.address,
        norm.postal_code,
    )
