"""Base exception for the appeal tracker domain layer.

Every domain error carries an ErrorKind so a host can map failures
(to HTTP status codes, CLI exit codes, bulk reports) without an
isinstance chain over the concrete classes.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar


class ErrorKind(Enum):
    """Coarse failure category of a domain error."""

    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    INVALID_TRANSITION = "invalid_transition"
    VALIDATION_FAILED = "validation_failed"
    CONFLICT_RETRY_EXHAUSTED = "conflict_retry_exhausted"
    STORE_CONFLICT = "store_conflict"
    ALLOCATION_FAILED = "allocation_failed"


class AppealTrackerError(Exception):
    """Base exception for all domain errors.

    Bulk operations catch this class per case; anything else is a
    programming error and propagates.
    """

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
