"""Donor record data model.

A ``DonorRecord`` is the read-only snapshot of the fields the duplicate
engine looks at. Records are owned by the caller or the record store and are
never mutated by the engine.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from donordedupe.errors import InvalidInputError
from donordedupe.models.fields import WIRE_NAMES, resolve_column

__all__ = ["DonorRecord", "NormalizedDonor"]


def _coerce_value(key: str, value: Any) -> str | None:
    """Coerce one raw field value to ``str | None``."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidInputError(f"Field {key!r} must be a string, got bool")
    if isinstance(value, int | float):
        # Spreadsheet exports turn phone numbers and postal codes into numbers
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        value = str(value)
    if not isinstance(value, str):
        raise InvalidInputError(
            f"Field {key!r} must be a string, got {type(value).__name__}"
        )
    return value if value.strip() else None


@dataclass(frozen=True, slots=True)
class DonorRecord:
    """Donor fields used for duplicate detection.

    Attributes
    ----------
    first_name : str
        Given name. Empty when the source row had none.
    last_name : str
        Family name. Empty when the source row had none.
    id : str | None
        Store identifier; None for import rows not yet persisted.
    email : str | None
        Email address as entered.
    phone : str | None
        Main phone number as entered.
    mobile : str | None
        Mobile number, used when ``phone`` is absent.
    address : str | None
        Street address line.
    city : str | None
        City. Fetched with the record but not compared.
    postal_code : str | None
        Postal or ZIP code as entered.
    """

    first_name: str = ""
    last_name: str = ""
    id: str | None = None
    email: str | None = None
    phone: str | None = None
    mobile: str | None = None
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DonorRecord":
        """Build a record from a wire dict, attribute dict or import row.

        Parameters
        ----------
        data : Mapping[str, Any]
            Field mapping. Keys may be wire names (``postalCode``), attribute
            names (``postal_code``) or known import headers (``code postal``).
            Unknown keys are ignored.

        Returns
        -------
        DonorRecord
            New record.

        Raises
        ------
        InvalidInputError
            If ``data`` is not a mapping or a known field holds a non-scalar.
        """
        if not isinstance(data, Mapping):
            raise InvalidInputError(
                f"Donor record must be an object, got {type(data).__name__}"
            )

        values: dict[str, str | None] = {}
        for key, raw_value in data.items():
            if not isinstance(key, str):
                continue
            attr = resolve_column(key)
            if attr is None:
                continue
            value = _coerce_value(key, raw_value)
            # First non-empty column wins when several aliases are present
            if values.get(attr) is None:
                values[attr] = value

        first_name = values.pop("first_name", None) or ""
        last_name = values.pop("last_name", None) or ""
        return cls(first_name=first_name, last_name=last_name, **values)

    def to_dict(self) -> dict[str, Any]:
        """Convert to wire (camelCase) dictionary."""
        return {wire: getattr(self, attr) for attr, wire in WIRE_NAMES.items()}


@dataclass(frozen=True, slots=True)
class NormalizedDonor:
    """A donor record with its compared fields canonicalized.

    Every normalized field is None when the source value carries no
    evidence (absent, blank, or nothing left after stripping).

    Attributes
    ----------
    record : DonorRecord
        Source record, kept for reporting original values.
    email : str | None
        Trimmed, lower-cased email.
    first_name : str | None
        Trimmed, lower-cased given name.
    last_name : str | None
        Trimmed, lower-cased family name.
    phone : str | None
        Phone (or mobile fallback) without separators.
    address : str | None
        Trimmed, lower-cased address line.
    postal_code : str | None
        Postal code without whitespace.
    """

    record: DonorRecord
    email: str | None
    first_name: str | None
    last_name: str | None
    phone: str | None
    address: str | None
    postal_code: str | None

    @property
    def id(self) -> str | None:
        """Id of the source record."""
        return self.record.id
