"""Domain errors for the appeal tracker.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from AppealTrackerError.
"""

from appeal_tracker.domain.errors.appeal import AppealNotFoundError, NoteNotFoundError
from appeal_tracker.domain.errors.authorization import (
    AccessDeniedError,
    InactivePrincipalError,
)
from appeal_tracker.domain.errors.case_id import (
    CaseIdAllocationError,
    CaseIdRetryExhaustedError,
    DuplicateCaseIdError,
)
from appeal_tracker.domain.errors.concurrent_modification import (
    ConcurrentModificationError,
)
from appeal_tracker.domain.errors.state_transition import (
    DecisionAlreadyRecordedError,
    InvalidTransitionError,
    NoDecisionRecordedError,
    NoteAlreadyRetractedError,
    StatusNotAllowedError,
)
from appeal_tracker.domain.errors.validation import AppealValidationError

__all__: list[str] = [
    "AccessDeniedError",
    "AppealNotFoundError",
    "AppealValidationError",
    "CaseIdAllocationError",
    "CaseIdRetryExhaustedError",
    "ConcurrentModificationError",
    "DecisionAlreadyRecordedError",
    "DuplicateCaseIdError",
    "InactivePrincipalError",
    "InvalidTransitionError",
    "NoDecisionRecordedError",
    "NoteAlreadyRetractedError",
    "NoteNotFoundError",
    "StatusNotAllowedError",
]
