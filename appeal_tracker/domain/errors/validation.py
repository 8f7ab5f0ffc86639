"""Input validation errors.

Raised for malformed input: blank content, past-dated deadlines,
unknown enumeration values, rejected submission payloads.
"""

from __future__ import annotations

from appeal_tracker.domain.exceptions import AppealTrackerError, ErrorKind


class AppealValidationError(AppealTrackerError):
    """Raised when operation input fails validation.

    Attributes:
        field: Name of the offending field.
        errors: Individual problems, one string per failure.
    """

    kind = ErrorKind.VALIDATION_FAILED

    def __init__(self, field: str, message: str, errors: list[str] | None = None) -> None:
        self.field = field
        self.errors = errors or [message]
        super().__init__(f"Invalid {field}: {message}")
