"""State transition errors for the appeal lifecycle.

These errors indicate that the requested change is well-formed but not
allowed for the case's current state or the requester's role. All of
them share InvalidTransitionError as their base.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from appeal_tracker.domain.exceptions import AppealTrackerError, ErrorKind

if TYPE_CHECKING:
    from appeal_tracker.domain.models.appeal import AppealStatus, DecisionOutcome


class InvalidTransitionError(AppealTrackerError):
    """Base error for changes the case's state or the role does not allow.

    Attributes:
        case_key: The appeal involved.
    """

    kind = ErrorKind.INVALID_TRANSITION

    def __init__(self, case_key: UUID, message: str) -> None:
        self.case_key = case_key
        super().__init__(message)


class StatusNotAllowedError(InvalidTransitionError):
    """Raised when a role requests a status outside its allowed targets.

    Attributes:
        from_status: Current status.
        to_status: Requested status.
        allowed: Statuses the requester may set.
        role: Role value of the requester.
    """

    def __init__(
        self,
        case_key: UUID,
        from_status: AppealStatus,
        to_status: AppealStatus,
        allowed: list[AppealStatus],
        role: str,
    ) -> None:
        self.from_status = from_status
        self.to_status = to_status
        self.allowed = allowed
        self.role = role
        allowed_str = ", ".join(sorted(s.value for s in allowed)) or "none"
        super().__init__(
            case_key,
            f"{role} may not move appeal {case_key} from "
            f"'{from_status.value}' to '{to_status.value}'. Allowed: {allowed_str}",
        )


class DecisionAlreadyRecordedError(InvalidTransitionError):
    """Raised when a decision is recorded on an already decided case.

    Use amend_decision() to change an existing decision.

    Attributes:
        existing_outcome: Outcome already on record.
    """

    def __init__(self, case_key: UUID, existing_outcome: DecisionOutcome) -> None:
        self.existing_outcome = existing_outcome
        super().__init__(
            case_key,
            f"Appeal {case_key} already has a decision "
            f"('{existing_outcome.value}'); amend it instead",
        )


class NoDecisionRecordedError(InvalidTransitionError):
    """Raised when amending a decision on a case that has none."""

    def __init__(self, case_key: UUID) -> None:
        super().__init__(case_key, f"Appeal {case_key} has no decision to amend")


class NoteAlreadyRetractedError(InvalidTransitionError):
    """Raised when retracting a note that is already a tombstone.

    Attributes:
        note_id: The note that was already retracted.
    """

    def __init__(self, case_key: UUID, note_id: UUID) -> None:
        self.note_id = note_id
        super().__init__(
            case_key, f"Note {note_id} on appeal {case_key} is already retracted"
        )
