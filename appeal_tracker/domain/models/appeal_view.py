"""Role-filtered read model of an appeal.

An AppealView is what every operation returns. It is never the raw
stored record: notes are filtered for the viewer's role, while the
timeline is always shown in full.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from appeal_tracker.domain.models.appeal import (
    AppealDetails,
    AppealNote,
    AppealStatus,
    Decision,
    Priority,
    TimelineEntry,
)
from appeal_tracker.domain.models.principal import Role


@dataclass(frozen=True, eq=True)
class AppealView:
    """Projection of an appeal for one viewer role.

    Attributes:
        viewer_role: Role the projection was rendered for.
        notes: Notes visible to viewer_role.
        (remaining attributes mirror Appeal)
    """

    viewer_role: Role
    case_key: UUID
    case_id: str
    student_id: str
    details: AppealDetails
    status: AppealStatus
    priority: Priority
    assigned_reviewer: str | None
    assigned_admin: str | None
    decision: Decision | None
    deadline: datetime | None
    timeline: tuple[TimelineEntry, ...]
    notes: tuple[AppealNote, ...]
    version: int
    submitted_at: datetime
    updated_at: datetime
