"""Field comparators for pairwise scoring.

This module provides pure, deterministic functions comparing the normalized
fields of two donor records. Each comparator returns a similarity and the
values to report; a ``FieldConfig`` turns that into a ``FieldMatch`` only when
the similarity clears the field's reporting threshold. A field that produces
no match is neutral evidence, never evidence against the pair.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from donordedupe.models import NormalizedDonor
from donordedupe.scoring.models import FieldMatch
from donordedupe.scoring.similarity import normalized_similarity

# (similarity, reported value for record a, reported value for record b)
CompareResult = tuple[float, str | None, str | None]


@dataclass(frozen=True, slots=True)
class FieldConfig:
    """Configuration for a field comparator.

    Attributes
    ----------
    name : str
        Wire field name (e.g., 'email', 'postalCode').
    extractor : Callable[[NormalizedDonor, NormalizedDonor], dict[str, Any]]
        Function to extract comparison inputs from a record pair.
    comparator : Callable[..., CompareResult]
        Comparison function.
    threshold : float
        A match is reported only when similarity is strictly above this.
    """

    name: str
    extractor: Callable[[NormalizedDonor, NormalizedDonor], dict[str, Any]]
    comparator: Callable[..., CompareResult]
    threshold: float

    def compare(self, donor_a: NormalizedDonor, donor_b: NormalizedDonor) -> FieldMatch | None:
        """Extract fields, compare them and apply the reporting threshold.

        Parameters
        ----------
        donor_a : NormalizedDonor
            First record.
        donor_b : NormalizedDonor
            Second record.

        Returns
        -------
        FieldMatch | None
            The match, or None when the field carries no positive evidence.
        """
        params = self.extractor(donor_a, donor_b)
        similarity, value1, value2 = self.comparator(**params)
        if similarity <= self.threshold:
            return None
        return FieldMatch(field=self.name, similarity=similarity, value1=value1, value2=value2)


def compare_exact(
    norm_a: str | None,
    norm_b: str | None,
    report_a: str | None,
    report_b: str | None,
) -> CompareResult:
    """Compare two normalized values for equality.

    Parameters
    ----------
    norm_a : str | None
        Normalized value from first record.
    norm_b : str | None
        Normalized value from second record.
    report_a : str | None
        Value to report for the first record.
    report_b : str | None
        Value to report for the second record.

    Returns
    -------
    tuple[float, str | None, str | None]
        1.0 when both are present and equal, else 0.0.
    """
    if not norm_a or not norm_b:
        return (0.0, report_a, report_b)
    return (1.0 if norm_a == norm_b else 0.0, report_a, report_b)


def compare_fuzzy(
    norm_a: str | None,
    norm_b: str | None,
    report_a: str | None,
    report_b: str | None,
) -> CompareResult:
    """Compare two normalized free-text values by edit-distance similarity.

    Returns
    -------
    tuple[float, str | None, str | None]
        Normalized similarity (0.0 when either side is missing).
    """
    return (normalized_similarity(norm_a, norm_b), report_a, report_b)


# ---------------------------------------------------------------------------
# Field extractors - map NormalizedDonor pairs to comparator arguments
# ---------------------------------------------------------------------------


def _extract_email(a: NormalizedDonor, b: NormalizedDonor) -> dict[str, Any]:
    return {
        "norm_a": a.email,
        "norm_b": b.email,
        "report_a": a.record.email,
        "report_b": b.record.email,
    }


def _extract_first_name(a: NormalizedDonor, b: NormalizedDonor) -> dict[str, Any]:
    return {
        "norm_a": a.first_name,
        "norm_b": b.first_name,
        "report_a": a.record.first_name,
        "report_b": b.record.first_name,
    }


def _extract_last_name(a: NormalizedDonor, b: NormalizedDonor) -> dict[str, Any]:
    return {
        "norm_a": a.last_name,
        "norm_b": b.last_name,
        "report_a": a.record.last_name,
        "report_b": b.record.last_name,
    }


def _extract_phone(a: NormalizedDonor, b: NormalizedDonor) -> dict[str, Any]:
    # Phone evidence is reported normalized since it may come from the mobile
    return {
        "norm_a": a.phone,
        "norm_b": b.phone,
        "report_a": a.phone,
        "report_b": b.phone,
    }


def _extract_address(a: NormalizedDonor, b: NormalizedDonor) -> dict[str, Any]:
    return {
        "norm_a": a.address,
        "norm_b": b.address,
        "report_a": a.record.address,
        "report_b": b.record.address,
    }


def _extract_postal_code(a: NormalizedDonor, b: NormalizedDonor) -> dict[str, Any]:
    return {
        "norm_a": a.postal_code,
        "norm_b": b.postal_code,
        "report_a": a.record.postal_code,
        "report_b": b.record.postal_code,
    }


# ---------------------------------------------------------------------------
# Field registry - ordered list for deterministic iteration
# ---------------------------------------------------------------------------


FIELD_CONFIGS: tuple[FieldConfig, ...] = (
    FieldConfig(name="email", extractor=_extract_email, comparator=compare_exact, threshold=0.0),
    FieldConfig(
        name="firstName", extractor=_extract_first_name, comparator=compare_fuzzy, threshold=0.8
    ),
    FieldConfig(
        name="lastName", extractor=_extract_last_name, comparator=compare_fuzzy, threshold=0.8
    ),
    FieldConfig(name="phone", extractor=_extract_phone, comparator=compare_exact, threshold=0.0),
    FieldConfig(
        name="address", extractor=_extract_address, comparator=compare_fuzzy, threshold=0.7
    ),
    FieldConfig(
        name="postalCode",
        extractor=_extract_postal_code,
        comparator=compare_exact,
        threshold=0.0,
    ),
)


def compare_fields(donor_a: NormalizedDonor, donor_b: NormalizedDonor) -> list[FieldMatch]:
    """Run every registered comparator on a pair.

    Parameters
    ----------
    donor_a : NormalizedDonor
        First record.
    donor_b : NormalizedDonor
        Second record.

    Returns
    -------
    list[FieldMatch]
        Reported matches in registry order.
    """
    matches: list[FieldMatch] = []
    for config in FIELD_CONFIGS:
        match = config.compare(donor_a, donor_b)
        if match is not None:
            matches.append(match)
    return matches
