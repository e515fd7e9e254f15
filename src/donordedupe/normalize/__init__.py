"""Field normalization for donor records."""

from donordedupe.normalize.normalizer import (
    normalize,
    normalize_email,
    normalize_phone,
    normalize_postal_code,
    normalize_text,
    select_phone,
)

__all__ = [
    "normalize",
    "normalize_text",
    "normalize_email",
    "normalize_phone",
    "normalize_postal_code",
    "select_phone",
]
