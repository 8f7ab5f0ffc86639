"""Lookup errors for appeals and their notes."""

from __future__ import annotations

from uuid import UUID

from appeal_tracker.domain.exceptions import AppealTrackerError, ErrorKind


class AppealNotFoundError(AppealTrackerError):
    """Raised when a case key does not resolve to a stored appeal.

    Attributes:
        case_key: The key that was not found.
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(self, case_key: UUID) -> None:
        self.case_key = case_key
        super().__init__(f"Appeal not found: {case_key}")


class NoteNotFoundError(AppealTrackerError):
    """Raised when a note id is not attached to the given appeal.

    Attributes:
        case_key: The appeal that was searched.
        note_id: The note id that was not found.
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(self, case_key: UUID, note_id: UUID) -> None:
        self.case_key = case_key
        self.note_id = note_id
        super().__init__(f"Note {note_id} not found on appeal {case_key}")
