"""Donor file and batch payload ingestion.

Reads donor snapshots and import files (CSV, JSON array, JSONL) into
``DonorRecord`` objects, and validates batch pre-check payloads.
"""

import csv
import io
import json
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema.exceptions import best_match

from donordedupe.errors import InvalidInputError, ParseError
from donordedupe.models import DonorRecord
from donordedupe.parse.base import (
    SUPPORTED_EXTENSIONS,
    detect_encoding,
    format_for_extension,
    normalize_line_endings,
    sniff_delimiter,
)

__all__ = [
    "BATCH_PAYLOAD_SCHEMA",
    "load_donors",
    "parse_batch_payload",
    "read_csv_rows",
]

_FIELD_VALUE_SCHEMA: dict[str, Any] = {"type": ["string", "number", "null"]}

BATCH_PAYLOAD_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Batch duplicate pre-check payload",
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "id": _FIELD_VALUE_SCHEMA,
            "email": _FIELD_VALUE_SCHEMA,
            "firstName": _FIELD_VALUE_SCHEMA,
            "lastName": _FIELD_VALUE_SCHEMA,
            "phone": _FIELD_VALUE_SCHEMA,
            "mobile": _FIELD_VALUE_SCHEMA,
            "address": _FIELD_VALUE_SCHEMA,
            "city": _FIELD_VALUE_SCHEMA,
            "postalCode": _FIELD_VALUE_SCHEMA,
        },
    },
}

_BATCH_VALIDATOR = jsonschema.Draft202012Validator(BATCH_PAYLOAD_SCHEMA)


def parse_batch_payload(payload: Any) -> list[DonorRecord]:
    """Validate a batch pre-check payload and build candidate records.

    Parameters
    ----------
    payload : Any
        Decoded JSON: a list of donor objects with wire field names.

    Returns
    -------
    list[DonorRecord]
        One record per submitted object, in order.

    Raises
    ------
    InvalidInputError
        If the payload is not a list of objects or a known field has a
        non-scalar value.
    """
    first = best_match(_BATCH_VALIDATOR.iter_errors(payload))
    if first is not None:
        location = "/".join(str(p) for p in first.path) or "<root>"
        raise InvalidInputError(f"Invalid candidate list at {location}: {first.message}")

    return [DonorRecord.from_dict(item) for item in payload]


def read_csv_rows(content: str) -> list[dict[str, str]]:
    """Split CSV text into header-keyed rows.

    Parameters
    ----------
    content : str
        Decoded CSV text with a header line.

    Returns
    -------
    list[dict[str, str]]
        Rows keyed by the original header names; empty lines are skipped.
    """
    content = normalize_line_endings(content)
    header_line = content.split("\n", 1)[0]
    reader = csv.DictReader(io.StringIO(content), delimiter=sniff_delimiter(header_line))
    return [
        {key: value for key, value in row.items() if key is not None}
        for row in reader
        if any((value or "").strip() for value in row.values() if isinstance(value, str))
    ]


def _rows_from_json(content: str, file_name: str) -> list[Any]:
    data = json.loads(content)
    if isinstance(data, dict):
        # Accept the batch request envelope {"donors": [...]} as well
        data = data.get("donors")
    if not isinstance(data, list):
        raise ParseError(f"{file_name}: expected a JSON array of donors", file=file_name)
    return data


def _rows_from_jsonl(content: str) -> list[Any]:
    lines = normalize_line_endings(content).split("\n")
    return [json.loads(line) for line in lines if line.strip()]


def load_donors(path: str | Path) -> list[DonorRecord]:
    """Read a donor file.

    Format follows the extension: ``.csv``, ``.json`` (array, or an object
    with a ``donors`` array) and ``.jsonl``/``.ndjson``. CSV headers may use
    any known English or French alias; unknown columns are ignored.

    Parameters
    ----------
    path : str | Path
        File to read.

    Returns
    -------
    list[DonorRecord]
        Records in file order.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ParseError
        If the extension is unsupported or the content cannot be decoded.

    Examples
    --------
        >>> records = load_donors("donors.csv")
        >>> records[0].first_name
        'Jean'
    """
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    file_format = format_for_extension(file_path.suffix)
    if file_format is None:
        supported = ", ".join(sorted(SUPPORTED_EXTENSIONS))
        raise ParseError(
            f"Unsupported donor file type {file_path.suffix!r} (supported: {supported})",
            file=file_path.name,
        )

    file_bytes = file_path.read_bytes()
    content = file_bytes.decode(detect_encoding(file_bytes))

    try:
        if file_format == "csv":
            rows: list[Any] = read_csv_rows(content)
        elif file_format == "json":
            rows = _rows_from_json(content, file_path.name)
        else:
            rows = _rows_from_jsonl(content)
    except (json.JSONDecodeError, csv.Error) as e:
        raise ParseError(f"Failed to parse {file_path.name}: {e}", file=file_path.name) from e

    records: list[DonorRecord] = []
    for index, row in enumerate(rows):
        try:
            records.append(DonorRecord.from_dict(row))
        except InvalidInputError as e:
            raise ParseError(
                f"Failed to parse {file_path.name}, row {index}: {e}",
                file=file_path.name,
            ) from e
    return records

