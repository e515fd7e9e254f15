"""Base utilities for donor file readers."""

SUPPORTED_EXTENSIONS: dict[str, str] = {
    ".csv": "csv",
    ".json": "json",
    ".jsonl": "jsonl",
    ".ndjson": "jsonl",
}

_CSV_DELIMITERS = (",", ";", "\t")


def detect_encoding(file_bytes: bytes) -> str:
    """Detect encoding of file bytes using deterministic strategy.

    Parameters
    ----------
    file_bytes : bytes
        Complete file content as bytes.

    Returns
    -------
    str
        Detected encoding (utf-8-sig, utf-8 or latin-1).
    """
    if file_bytes.startswith(b"\xef\xbb\xbf"):
        return "utf-8-sig"

    try:
        file_bytes.decode("utf-8")
        return "utf-8"
    except UnicodeDecodeError:
        pass

    return "latin-1"


def normalize_line_endings(content: str) -> str:
    """Normalize line endings to LF."""
    content = content.replace("\r\n", "\n")
    return content.replace("\r", "\n")


def sniff_delimiter(header_line: str) -> str:
    """Pick the CSV delimiter that splits the header into the most columns.

    Spreadsheets saved with a French locale use ``;``. Ties resolve to the
    first candidate, so a single-column header yields ``,``.

    Parameters
    ----------
    header_line : str
        First line of the file.

    Returns
    -------
    str
        Delimiter character.
    """
    return max(_CSV_DELIMITERS, key=header_line.count)


def format_for_extension(suffix: str) -> str | None:
    """Format name for a file suffix, or None if unsupported."""
    return SUPPORTED_EXTENSIONS.get(suffix.lower())
