"""Error taxonomy for duplicate detection.

Every failure raised by the engine carries an ``ErrorKind`` so the service
boundary can turn it into an explicit result without inspecting messages.
"""

from enum import Enum

__all__ = [
    "ErrorKind",
    "DuplicateDetectionError",
    "NotFoundError",
    "InvalidInputError",
    "InternalError",
    "ParseError",
]


class ErrorKind(str, Enum):
    """Failure categories surfaced to callers."""

    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    INTERNAL = "internal"


class DuplicateDetectionError(Exception):
    """Base class for all duplicate detection failures.

    Attributes
    ----------
    kind : ErrorKind
        Failure category.
    """

    kind: ErrorKind = ErrorKind.INTERNAL


class NotFoundError(DuplicateDetectionError):
    """Raised when a target record id is unknown."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, record_id: str) -> None:
        """Initialize not-found error.

        Parameters
        ----------
        record_id : str
            The id that could not be resolved.
        """
        super().__init__(f"Donor record not found: {record_id!r}")
        self.record_id = record_id


class InvalidInputError(DuplicateDetectionError):
    """Raised for a malformed candidate list, record or out-of-range minScore."""

    kind = ErrorKind.INVALID_INPUT


class InternalError(DuplicateDetectionError):
    """Raised when the record source or scoring fails unexpectedly."""

    kind = ErrorKind.INTERNAL


class ParseError(InvalidInputError):
    """Raised when a donor file cannot be read."""

    def __init__(
        self,
        message: str,
        file: str | None = None,
    ) -> None:
        """Initialize parse error.

        Parameters
        ----------
        message : str
            Error message.
        file : str | None, optional
            File where error occurred.
        """
        super().__init__(message)
        self.file = file
