"""Domain services for the appeal tracker.

Domain services contain business logic that doesn't naturally fit in
entities or value objects. They are pure and must NOT depend on
infrastructure.

Available services:
- can_perform: Table-driven access policy for every appeal operation
- bucketize: Deadline classification into overdue/today/tomorrow/this week/upcoming
"""

from appeal_tracker.domain.services.appeal_access_policy import (
    OPERATION_ROLES,
    ROLE_SCOPE,
    AccessDecision,
    AccessScope,
    AppealOperation,
    can_perform,
)
from appeal_tracker.domain.services.deadline_bucketizer import (
    bucketize,
    classify_deadline,
    utc_date,
)

__all__ = [
    "OPERATION_ROLES",
    "ROLE_SCOPE",
    "AccessDecision",
    "AccessScope",
    "AppealOperation",
    "bucketize",
    "can_perform",
    "classify_deadline",
    "utc_date",
]
