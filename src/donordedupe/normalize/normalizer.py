"""Deterministic per-field normalization for donor records.

All functions are pure and idempotent. An absent or blank value normalizes to
None, which the comparators treat as "no evidence" rather than a mismatch.
Names and addresses are only case-folded and trimmed: accented and unaccented
spellings stay distinct.
"""

from donordedupe.models.records import DonorRecord, NormalizedDonor

from ._helpers import PHONE_SEPARATORS_RE, WHITESPACE_RE, blank_to_none

__all__ = [
    "normalize",
    "normalize_text",
    "normalize_email",
    "normalize_phone",
    "normalize_postal_code",
    "select_phone",
]


def normalize_text(value: str | None) -> str | None:
    """Lower-case and trim a free-text field (name, address).

    Parameters
    ----------
    value : str | None
        Raw value.

    Returns
    -------
    str | None
        Normalized text or None if nothing remains.
    """
    if value is None:
        return None
    return blank_to_none(value.strip().lower())


def normalize_email(value: str | None) -> str | None:
    """Lower-case and trim an email address."""
    return normalize_text(value)


def normalize_phone(value: str | None) -> str | None:
    """Strip spaces, dashes, dots and parentheses from a phone number.

    Parameters
    ----------
    value : str | None
        Raw phone number.

    Returns
    -------
    str | None
        Digits (and any other characters, e.g. ``+``) or None.

    Examples
    --------
        >>> normalize_phone("(514) 555-1234")
        '5145551234'
    """
    if value is None:
        return None
    return blank_to_none(PHONE_SEPARATORS_RE.sub("", value))


def select_phone(phone: str | None, mobile: str | None) -> str | None:
    """Normalized phone, falling back to the mobile number."""
    return normalize_phone(phone) or normalize_phone(mobile)


def normalize_postal_code(value: str | None) -> str | None:
    """Remove all whitespace from a postal code.

    Case is preserved: ``"H2X 1Y4"`` and ``"H2X1Y4"`` normalize equal,
    ``"h2x1y4"`` does not.
    """
    if value is None:
        return None
    return blank_to_none(WHITESPACE_RE.sub("", value))


def normalize(record: DonorRecord) -> NormalizedDonor:
    """Normalize every compared field of a record once.

    Parameters
    ----------
    record : DonorRecord
        Source record.

    Returns
    -------
    NormalizedDonor
        Normalized view holding a reference to ``record``.
    """
    return NormalizedDonor(
        record=record,
        email=normalize_email(record.email),
        first_name=normalize_text(record.first_name),
        last_name=normalize_text(record.last_name),
        phone=select_phone(record.phone, record.mobile),
        address=normalize_text(record.address),
        postal_code=normalize_postal_code(record.postal_code),
    )
