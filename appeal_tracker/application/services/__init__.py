"""Application services - Use case orchestration.

This module contains application services that orchestrate domain
operations and coordinate with infrastructure adapters.

Available services:
- CaseIdAllocator: Human-readable case id allocation with bounded retry
- AppealLifecycleService: Creation, reads, status transitions, decisions
- AppealNoteService: Notes with role-dependent visibility and retraction
- AppealAssignmentService: Reviewer/admin assignment and priority
- AppealDeadlineService: Deadlines and the bucketed deadline overview
"""

from appeal_tracker.application.services.appeal_assignment_service import (
    AppealAssignmentService,
)
from appeal_tracker.application.services.appeal_case_base import AppealCaseServiceBase
from appeal_tracker.application.services.appeal_deadline_service import (
    AppealDeadlineService,
)
from appeal_tracker.application.services.appeal_lifecycle_service import (
    AppealLifecycleService,
)
from appeal_tracker.application.services.appeal_note_service import AppealNoteService
from appeal_tracker.application.services.appeal_projection import (
    project_appeal,
    visible_notes,
)
from appeal_tracker.application.services.base import LoggingMixin
from appeal_tracker.application.services.case_id_allocator import (
    CaseIdAllocation,
    CaseIdAllocator,
    random_case_code,
)

__all__: list[str] = [
    "AppealAssignmentService",
    "AppealCaseServiceBase",
    "AppealDeadlineService",
    "AppealLifecycleService",
    "AppealNoteService",
    "CaseIdAllocation",
    "CaseIdAllocator",
    "LoggingMixin",
    "project_appeal",
    "random_case_code",
    "visible_notes",
]
