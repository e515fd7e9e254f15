"""Tests for donor file ingestion and batch payload validation."""

import json
from pathlib import Path

import pytest

from donordedupe.errors import InvalidInputError, ParseError
from donordedupe.models import DonorRecord
from donordedupe.parse import (
    detect_encoding,
    load_donors,
    parse_batch_payload,
    read_csv_rows,
    sniff_delimiter,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("id,email,firstName", ","),
        ("Prénom;Nom;Courriel", ";"),
        ("id\temail\tphone", "\t"),
        ("email", ","),
    ],
)
def test_sniff_delimiter(header: str, expected: str) -> None:
    """Test the delimiter splitting the header most wins."""
    assert sniff_delimiter(header) == expected


@pytest.mark.unit
def test_detect_encoding() -> None:
    """Test BOM, UTF-8 and Latin-1 detection."""
    assert detect_encoding(b"\xef\xbb\xbfid") == "utf-8-sig"
    assert detect_encoding("Prénom".encode()) == "utf-8"
    assert detect_encoding("Prénom".encode("latin-1")) == "latin-1"


@pytest.mark.unit
def test_read_csv_rows_skips_blank_lines() -> None:
    """Test empty rows are dropped and CRLF handled."""
    rows = read_csv_rows("email,firstName\r\na@x.com,Ana\r\n,\r\n\r\nb@x.com,Ben\r\n")

    assert rows == [
        {"email": "a@x.com", "firstName": "Ana"},
        {"email": "b@x.com", "firstName": "Ben"},
    ]


# ---------------------------------------------------------------------------
# load_donors
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_load_csv_english(tmp_path: Path) -> None:
    """Test a comma-separated export with wire headers."""
    path = tmp_path / "donors.csv"
    path.write_text(
        "id,email,firstName,lastName,phone,postalCode,campaign\n"
        "d-1,j@x.com,Jean,Tremblay,514-555-1234,H2X 1Y4,Spring\n"
        "d-2,,Marie,Roy,,,\n",
        encoding="utf-8",
    )

    records = load_donors(path)

    assert records == [
        DonorRecord(
            id="d-1",
            email="j@x.com",
            first_name="Jean",
            last_name="Tremblay",
            phone="514-555-1234",
            postal_code="H2X 1Y4",
        ),
        DonorRecord(id="d-2", first_name="Marie", last_name="Roy"),
    ]


@pytest.mark.unit
def test_load_csv_french_semicolon(tmp_path: Path) -> None:
    """Test a French-locale spreadsheet export."""
    path = tmp_path / "import.csv"
    content = (
        "Prénom;Nom;Courriel;Cellulaire;Code postal\n"
        "Éric;Côté;eric@x.com;438 555 0000;G1K 3A1\n"
    )
    path.write_bytes(content.encode("latin-1"))

    records = load_donors(path)

    assert len(records) == 1
    record = records[0]
    assert record.first_name == "Éric"
    assert record.last_name == "Côté"
    assert record.mobile == "438 555 0000"
    assert record.postal_code == "G1K 3A1"
    assert record.id is None


@pytest.mark.unit
def test_load_json_array_and_envelope(tmp_path: Path) -> None:
    """Test JSON arrays and the donors envelope both load."""
    donors = [{"id": "d-1", "email": "a@x.com", "firstName": "Ana", "lastName": "Silva"}]
    array_path = tmp_path / "array.json"
    array_path.write_text(json.dumps(donors), encoding="utf-8")
    envelope_path = tmp_path / "envelope.json"
    envelope_path.write_text(json.dumps({"donors": donors}), encoding="utf-8")

    assert load_donors(array_path) == load_donors(envelope_path)
    assert load_donors(array_path)[0].email == "a@x.com"


@pytest.mark.unit
def test_load_jsonl(tmp_path: Path) -> None:
    """Test JSON lines with blank lines."""
    path = tmp_path / "donors.ndjson"
    path.write_text(
        '{"id": "d-1", "firstName": "Ana"}\n\n{"id": "d-2", "phone": 5145551234}\n',
        encoding="utf-8",
    )

    records = load_donors(path)

    assert [r.id for r in records] == ["d-1", "d-2"]
    assert records[1].phone == "5145551234"


@pytest.mark.unit
def test_load_missing_file(tmp_path: Path) -> None:
    """Test a missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_donors(tmp_path / "nope.csv")


@pytest.mark.unit
def test_load_unsupported_extension(tmp_path: Path) -> None:
    """Test unknown extensions are rejected."""
    path = tmp_path / "donors.xlsx"
    path.write_bytes(b"PK")

    with pytest.raises(ParseError, match="Unsupported") as exc_info:
        load_donors(path)
    assert exc_info.value.file == "donors.xlsx"


@pytest.mark.unit
def test_load_malformed_json(tmp_path: Path) -> None:
    """Test broken JSON is a parse error."""
    path = tmp_path / "donors.json"
    path.write_text("[{", encoding="utf-8")

    with pytest.raises(ParseError, match="Failed to parse donors.json"):
        load_donors(path)


@pytest.mark.unit
def test_load_json_wrong_shape(tmp_path: Path) -> None:
    """Test a JSON object without a donors array is rejected."""
    path = tmp_path / "donors.json"
    path.write_text('{"records": []}', encoding="utf-8")

    with pytest.raises(ParseError, match="expected a JSON array"):
        load_donors(path)


@pytest.mark.unit
def test_load_bad_row_reports_index(tmp_path: Path) -> None:
    """Test row errors name the file and the row."""
    path = tmp_path / "donors.jsonl"
    path.write_text('{"id": "d-1"}\n["not", "an", "object"]\n', encoding="utf-8")

    with pytest.raises(ParseError, match="row 1"):
        load_donors(path)


@pytest.mark.unit
def test_parse_error_is_invalid_input() -> None:
    """Test file errors share the invalid-input kind."""
    assert issubclass(ParseError, InvalidInputError)


# ---------------------------------------------------------------------------
# parse_batch_payload
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_parse_batch_payload() -> None:
    """Test a valid payload becomes records in order."""
    records = parse_batch_payload(
        [
            {"firstName": "Ana", "lastName": "Silva", "email": "a@x.com"},
            {"firstName": "Ben", "phone": 5145551234, "extra": {"ignored": True}},
        ]
    )

    assert [r.first_name for r in records] == ["Ana", "Ben"]
    assert records[1].phone == "5145551234"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("payload", "location"),
    [
        (None, "<root>"),
        ({"firstName": "Ana"}, "<root>"),
        (["Ana"], "0"),
        ([{"firstName": "Ana"}, {"email": ["a@x.com"]}], "1/email"),
        ([{"phone": True}], "0/phone"),
    ],
)
def test_parse_batch_payload_rejects_malformed(payload: object, location: str) -> None:
    """Test malformed payloads are invalid input naming the location."""
    with pytest.raises(InvalidInputError, match=f"at {location}:"):
        parse_batch_payload(payload)
