"""Role-filtered projection of appeals.

Every read path and every mutating operation renders its result through
project_appeal(), so the note visibility rule is applied in one place:

- Students never see internal notes, nor retracted notes.
- Staff (admin, reviewer) see every note, tombstones included.
- The timeline is the audit trail and is never filtered.
"""

from __future__ import annotations

from collections.abc import Iterable

from appeal_tracker.domain.models.appeal import Appeal, AppealNote
from appeal_tracker.domain.models.appeal_view import AppealView
from appeal_tracker.domain.models.principal import Role


def visible_notes(notes: Iterable[AppealNote], viewer_role: Role) -> tuple[AppealNote, ...]:
    """Filter notes for a viewer role.

    Args:
        notes: Notes in stored order.
        viewer_role: Role of the viewer.

    Returns:
        Notes the viewer may see, order preserved.
    """
    if viewer_role is Role.STUDENT:
        return tuple(n for n in notes if not n.is_internal and not n.retracted)
    return tuple(notes)


def project_appeal(appeal: Appeal, viewer_role: Role) -> AppealView:
    """Render an appeal for a viewer role."""
    return AppealView(
        viewer_role=viewer_role,
        case_key=appeal.case_key,
        case_id=appeal.case_id,
        student_id=appeal.student_id,
        details=appeal.details,
        status=appeal.status,
        priority=appeal.priority,
        assigned_reviewer=appeal.assigned_reviewer,
        assigned_admin=appeal.assigned_admin,
        decision=appeal.decision,
        deadline=appeal.deadline,
        timeline=appeal.timeline,
        notes=visible_notes(appeal.notes, viewer_role),
        version=appeal.version,
        submitted_at=appeal.submitted_at,
        updated_at=appeal.updated_at,
    )
