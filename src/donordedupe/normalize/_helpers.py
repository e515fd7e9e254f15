"""Compiled patterns for field normalization."""

import re

# Separators people type inside phone numbers: space, dash, dot, parentheses
PHONE_SEPARATORS_RE = re.compile(r"[\s\-.()]")
WHITESPACE_RE = re.compile(r"\s")


def blank_to_none(value: str | None) -> str | None:
    """Return None for empty results so they count as no evidence."""
    return value if value else None
