"""Case identifier allocation errors.

CaseIdRetryExhaustedError is a value, not a failure: the allocator
returns it alongside the fallback identifier so callers can log the
degraded path. CaseIdAllocationError and DuplicateCaseIdError do abort
creation, and nothing is persisted when they are raised.
"""

from __future__ import annotations

from appeal_tracker.domain.exceptions import AppealTrackerError, ErrorKind


class CaseIdRetryExhaustedError(AppealTrackerError):
    """Every random candidate collided; the timestamp fallback was used.

    Attributes:
        attempts: Number of random candidates tried.
        fallback_case_id: The identifier produced by the fallback path.
    """

    kind = ErrorKind.CONFLICT_RETRY_EXHAUSTED

    def __init__(self, attempts: int, fallback_case_id: str) -> None:
        self.attempts = attempts
        self.fallback_case_id = fallback_case_id
        super().__init__(
            f"All {attempts} random case id candidates collided; "
            f"fell back to {fallback_case_id}"
        )


class CaseIdAllocationError(AppealTrackerError):
    """Raised when no usable case identifier could be produced."""

    kind = ErrorKind.ALLOCATION_FAILED

    def __init__(self, message: str) -> None:
        super().__init__(f"Failed to allocate case id: {message}")


class DuplicateCaseIdError(AppealTrackerError):
    """Raised by the store when a case id is already claimed at persist time.

    Attributes:
        case_id: The identifier that was already taken.
    """

    kind = ErrorKind.STORE_CONFLICT

    def __init__(self, case_id: str) -> None:
        self.case_id = case_id
        super().__init__(f"Case id already in use: {case_id}")
