"""Concurrent modification error for compare-and-swap writes.

Constraint:
- Two concurrent mutations of the same appeal must never silently lose
  a timeline entry. The store rejects a write whose expected version is
  stale, and the engine surfaces that rejection unchanged.
"""

from __future__ import annotations

from uuid import UUID

from appeal_tracker.domain.exceptions import AppealTrackerError, ErrorKind


class ConcurrentModificationError(AppealTrackerError):
    """Raised when a compare-and-swap write finds a newer version stored.

    This is a recoverable error - the caller should re-read the appeal
    and decide whether to retry the operation or abort.

    Attributes:
        case_key: The appeal being modified.
        expected_version: Version the writer read.
        actual_version: Version found in the store.
    """

    kind = ErrorKind.STORE_CONFLICT

    def __init__(self, case_key: UUID, expected_version: int, actual_version: int) -> None:
        self.case_key = case_key
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Concurrent modification detected for appeal {case_key}. "
            f"Expected version {expected_version}, found {actual_version}. "
            "Another request has modified this appeal."
        )
