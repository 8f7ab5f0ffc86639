"""Domain models for the appeal tracker.

Contains the appeal aggregate, its value objects and read models.
These models are immutable and contain no infrastructure dependencies.
"""

from appeal_tracker.domain.models.appeal import (
    AdviserContact,
    Appeal,
    AppealDetails,
    AppealNote,
    AppealStatus,
    AppealType,
    Decision,
    DecisionOutcome,
    Ground,
    Priority,
    Semester,
    TimelineEntry,
)
from appeal_tracker.domain.models.appeal_view import AppealView
from appeal_tracker.domain.models.bulk_result import (
    BulkItemFailure,
    BulkOperationResult,
)
from appeal_tracker.domain.models.deadline_buckets import (
    DeadlineBucket,
    DeadlineBuckets,
)
from appeal_tracker.domain.models.principal import Principal, Role

__all__: list[str] = [
    "AdviserContact",
    "Appeal",
    "AppealDetails",
    "AppealNote",
    "AppealStatus",
    "AppealType",
    "AppealView",
    "BulkItemFailure",
    "BulkOperationResult",
    "Decision",
    "DecisionOutcome",
    "DeadlineBucket",
    "DeadlineBuckets",
    "Ground",
    "Principal",
    "Priority",
    "Role",
    "Semester",
    "TimelineEntry",
]
