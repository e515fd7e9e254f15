"""Donor file ingestion and batch payload validation."""

from donordedupe.parse.base import SUPPORTED_EXTENSIONS, detect_encoding, sniff_delimiter
from donordedupe.parse.ingestion import (
    BATCH_PAYLOAD_SCHEMA,
    load_donors,
    parse_batch_payload,
    read_csv_rows,
)

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "BATCH_PAYLOAD_SCHEMA",
    "detect_encoding",
    "sniff_delimiter",
    "load_donors",
    "parse_batch_payload",
    "read_csv_rows",
]
