"""Appeal aggregate domain model.

This module defines the central case aggregate tracked through the review
workflow, together with its closed enumerations and the value objects that
make up its audit history.

Invariants:
- case_id is assigned once at creation and never changes
- timeline only grows; entries are never edited or removed
- notes are never removed; retraction leaves a tombstone
- status changes only through the lifecycle services
- version increments on every persisted mutation (optimistic locking)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class AppealStatus(Enum):
    """Status in the appeal lifecycle.

    Normal flow:
        SUBMITTED -> UNDER_REVIEW -> AWAITING_INFORMATION -> DECISION_MADE
        -> RESOLVED | REJECTED

    RESOLVED is also reached directly when a decision records the
    appeal as withdrawn. Admins may set any status at any time.
    """

    SUBMITTED = "submitted"
    UNDER_REVIEW = "under review"
    AWAITING_INFORMATION = "awaiting information"
    DECISION_MADE = "decision made"
    RESOLVED = "resolved"
    REJECTED = "rejected"

    def is_terminal(self) -> bool:
        """Check if this status closes the case.

        Returns:
            True for RESOLVED and REJECTED.
        """
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES: frozenset[AppealStatus] = frozenset(
    {AppealStatus.RESOLVED, AppealStatus.REJECTED}
)

# Targets a reviewer may request; SUBMITTED is reserved for admin override
REVIEWER_TARGET_STATUSES: frozenset[AppealStatus] = frozenset(
    {
        AppealStatus.UNDER_REVIEW,
        AppealStatus.AWAITING_INFORMATION,
        AppealStatus.DECISION_MADE,
        AppealStatus.RESOLVED,
        AppealStatus.REJECTED,
    }
)


class Priority(Enum):
    """Triage priority, independent of status."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class DecisionOutcome(Enum):
    """Outcome of a review decision."""

    UPHELD = "upheld"
    PARTIALLY_UPHELD = "partially upheld"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"

    def resulting_status(self) -> AppealStatus:
        """Status a case moves to when this outcome is recorded.

        Returns:
            RESOLVED for a withdrawal, DECISION_MADE otherwise.
        """
        if self is DecisionOutcome.WITHDRAWN:
            return AppealStatus.RESOLVED
        return AppealStatus.DECISION_MADE


class AppealType(Enum):
    """Category of appeal chosen by the student."""

    ACADEMIC_JUDGMENT = "Academic Judgment"
    PROCEDURAL_IRREGULARITY = "Procedural Irregularity"
    EXTENUATING_CIRCUMSTANCES = "Extenuating Circumstances"
    ASSESSMENT_IRREGULARITY = "Assessment Irregularity"
    OTHER = "Other"


class Ground(Enum):
    """Grounds a student may cite in support of an appeal."""

    ILLNESS = "Illness or medical condition"
    BEREAVEMENT = "Bereavement"
    PERSONAL_CIRCUMSTANCES = "Personal circumstances"
    TECHNICAL_ISSUES = "Technical issues during assessment"
    INADEQUATE_SUPERVISION = "Inadequate supervision"
    UNCLEAR_CRITERIA = "Unclear assessment criteria"
    OTHER = "Other"


class Semester(Enum):
    """Teaching period the appeal relates to."""

    FIRST = "1"
    SECOND = "2"
    SUMMER = "summer"
    FULL_YEAR = "full year"


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class AdviserContact:
    """Optional adviser supporting the student."""

    name: str
    email: str | None = field(default=None)
    phone: str | None = field(default=None)


@dataclass(frozen=True, eq=True)
class AppealDetails:
    """Typed body of an appeal submission.

    Defaulting and normalisation happen once, in the submission DTO;
    this value object only holds the result.
    """

    first_name: str
    last_name: str
    student_number: str
    email: str
    course: str
    department: str
    appeal_type: AppealType
    statement: str
    academic_year: str
    grounds: tuple[Ground, ...] = field(default=())
    phone: str | None = field(default=None)
    adviser: AdviserContact | None = field(default=None)
    module_code: str | None = field(default=None)
    semester: Semester | None = field(default=None)


@dataclass(frozen=True, eq=True)
class TimelineEntry:
    """One immutable audit record.

    Attributes:
        action: Short action label (e.g. "Status updated").
        description: Human-readable description including actor.
        performed_by: Principal id of the actor.
        timestamp: When the action happened (UTC).
    """

    action: str
    description: str
    performed_by: str
    timestamp: datetime


@dataclass(frozen=True, eq=True)
class AppealNote:
    """A remark attached to a case.

    Internal notes are staff-only. A retracted note stays in the list
    as a tombstone; it is never removed.
    """

    note_id: UUID
    content: str
    author: str
    author_role: str
    timestamp: datetime
    is_internal: bool = field(default=False)
    retracted: bool = field(default=False)
    retracted_by: str | None = field(default=None)
    retracted_at: datetime | None = field(default=None)

    def retract(self, by: str, at: datetime) -> AppealNote:
        """Return a tombstoned copy of this note."""
        return replace(self, retracted=True, retracted_by=by, retracted_at=at)


@dataclass(frozen=True, eq=True)
class Decision:
    """Review decision recorded on a case."""

    outcome: DecisionOutcome
    reason: str
    decision_date: datetime
    decided_by: str


@dataclass(frozen=True, eq=True)
class Appeal:
    """The appeal case aggregate.

    Since Appeal is frozen, every mutation returns a new instance with
    version unchanged; the repository bumps version on compare-and-swap.

    Attributes:
        case_key: Internal identity (UUID), immutable.
        case_id: Human-readable identifier APL-<year>-<6 digits>.
        student_id: Principal id of the submitting student, immutable.
        details: Typed submission body.
        status: Current lifecycle status.
        priority: Triage priority.
        assigned_reviewer: Principal id of the reviewer, if any.
        assigned_admin: Principal id of the owning admin, if any.
        decision: Recorded decision, if any.
        deadline: Optional due date (UTC).
        timeline: Append-only audit log.
        notes: Visibility-tagged remarks.
        version: Optimistic-lock counter.
        submitted_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
    """

    case_key: UUID
    case_id: str
    student_id: str
    details: AppealDetails
    status: AppealStatus = field(default=AppealStatus.SUBMITTED)
    priority: Priority = field(default=Priority.MEDIUM)
    assigned_reviewer: str | None = field(default=None)
    assigned_admin: str | None = field(default=None)
    decision: Decision | None = field(default=None)
    deadline: datetime | None = field(default=None)
    timeline: tuple[TimelineEntry, ...] = field(default=())
    notes: tuple[AppealNote, ...] = field(default=())
    version: int = field(default=0)
    submitted_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate appeal fields."""
        if not self.case_id:
            raise ValueError("Appeal must carry a case_id")
        if self.version < 0:
            raise ValueError(f"version must be non-negative, got {self.version}")

    @classmethod
    def new(
        cls,
        case_id: str,
        student_id: str,
        details: AppealDetails,
        submitted_at: datetime,
        case_key: UUID | None = None,
    ) -> Appeal:
        """Create a freshly submitted appeal with its first timeline entry.

        Args:
            case_id: Allocated human-readable identifier.
            student_id: Principal id of the submitting student.
            details: Typed submission body.
            submitted_at: Submission time (UTC).
            case_key: Optional explicit key (generated otherwise).

        Returns:
            Appeal in SUBMITTED status with exactly one timeline entry.
        """
        entry = TimelineEntry(
            action="Appeal submitted",
            description=(
                "Appeal created and submitted for review - "
                f"Type: {details.appeal_type.value}"
            ),
            performed_by=student_id,
            timestamp=submitted_at,
        )
        return cls(
            case_key=case_key or uuid4(),
            case_id=case_id,
            student_id=student_id,
            details=details,
            timeline=(entry,),
            submitted_at=submitted_at,
            updated_at=submitted_at,
        )

    @property
    def is_closed(self) -> bool:
        """True once the case has reached a terminal status."""
        return self.status.is_terminal()

    def find_note(self, note_id: UUID) -> AppealNote | None:
        """Look up a note by id."""
        for note in self.notes:
            if note.note_id == note_id:
                return note
        return None

    def with_entry(self, entry: TimelineEntry, **changes: object) -> Appeal:
        """Return a copy with one timeline entry appended and fields changed.

        Every mutation of an appeal goes through this method so that
        each change carries exactly one audit record.

        Args:
            entry: The timeline entry to append.
            **changes: Field updates applied together with the entry.

        Returns:
            New Appeal with the entry appended and updated_at refreshed.
        """
        if "timeline" in changes or "version" in changes:
            raise ValueError("timeline and version cannot be replaced directly")
        return replace(
            self,
            timeline=self.timeline + (entry,),
            updated_at=entry.timestamp,
            **changes,  # type: ignore[arg-type]
        )
