"""Appeal access policy domain service.

A single, table-driven authorization predicate consulted by every
service entry point. Role gates are data, not scattered conditionals:

- OPERATION_ROLES says which roles may attempt an operation at all.
- ROLE_SCOPE says which cases a permitted role may touch.

Scopes:
- OWNER: students act only on cases they submitted.
- ASSIGNED: reviewers act only on cases assigned to them. When
  allow_unassigned_reviewer_access is set, a case with no reviewer yet
  is also in scope.
- ANY: admins act on every case.

Inactive principals are denied before either table is consulted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from appeal_tracker.domain.models.appeal import Appeal
from appeal_tracker.domain.models.principal import Principal, Role


class AppealOperation(Enum):
    """Operations gated by the access policy."""

    VIEW = "view appeal"
    CREATE = "create appeal"
    TRANSITION = "change status"
    RECORD_DECISION = "record decision"
    AMEND_DECISION = "amend decision"
    REQUEST_INFORMATION = "request information"
    ADD_NOTE = "add note"
    RETRACT_NOTE = "retract note"
    MANAGE_ASSIGNMENT = "manage assignment"
    MANAGE_DEADLINE = "manage deadline"
    VIEW_DEADLINES = "view deadline overview"


class AccessScope(Enum):
    """Which cases a role may act on."""

    OWNER = "owner"
    ASSIGNED = "assigned"
    ANY = "any"


_STAFF: frozenset[Role] = frozenset({Role.ADMIN, Role.REVIEWER})
_ADMIN_ONLY: frozenset[Role] = frozenset({Role.ADMIN})

OPERATION_ROLES: dict[AppealOperation, frozenset[Role]] = {
    AppealOperation.VIEW: frozenset(Role),
    AppealOperation.CREATE: frozenset({Role.STUDENT}),
    AppealOperation.TRANSITION: _STAFF,
    AppealOperation.RECORD_DECISION: _STAFF,
    AppealOperation.AMEND_DECISION: _ADMIN_ONLY,
    AppealOperation.REQUEST_INFORMATION: _STAFF,
    AppealOperation.ADD_NOTE: frozenset(Role),
    AppealOperation.RETRACT_NOTE: _ADMIN_ONLY,
    AppealOperation.MANAGE_ASSIGNMENT: _ADMIN_ONLY,
    AppealOperation.MANAGE_DEADLINE: _ADMIN_ONLY,
    AppealOperation.VIEW_DEADLINES: _ADMIN_ONLY,
}

ROLE_SCOPE: dict[Role, AccessScope] = {
    Role.STUDENT: AccessScope.OWNER,
    Role.REVIEWER: AccessScope.ASSIGNED,
    Role.ADMIN: AccessScope.ANY,
}


@dataclass(frozen=True)
class AccessDecision:
    """Result of an access check.

    Attributes:
        allowed: Whether the operation may proceed.
        reason: Why it was denied (empty when allowed).
        inactive: True when the denial is due to an inactive principal.
    """

    allowed: bool
    reason: str = ""
    inactive: bool = False

    def __bool__(self) -> bool:
        return self.allowed


_ALLOW = AccessDecision(allowed=True)


def _in_scope(
    principal: Principal,
    appeal: Appeal,
    allow_unassigned_reviewer_access: bool,
) -> AccessDecision:
    scope = ROLE_SCOPE[principal.role]
    if scope is AccessScope.ANY:
        return _ALLOW
    if scope is AccessScope.OWNER:
        if appeal.student_id == principal.id:
            return _ALLOW
        return AccessDecision(False, "appeal belongs to another student")
    # ASSIGNED
    if appeal.assigned_reviewer == principal.id:
        return _ALLOW
    if appeal.assigned_reviewer is None:
        if allow_unassigned_reviewer_access:
            return _ALLOW
        return AccessDecision(False, "no reviewer is assigned to this appeal")
    return AccessDecision(False, "appeal is assigned to another reviewer")


def can_perform(
    principal: Principal,
    operation: AppealOperation,
    appeal: Appeal | None = None,
    allow_unassigned_reviewer_access: bool = False,
) -> AccessDecision:
    """Decide whether a principal may perform an operation on a case.

    Pure function: no I/O, no logging, no mutation.

    Args:
        principal: The authenticated principal.
        operation: The operation being attempted.
        appeal: The case involved; None for case-less operations
            (create, deadline overview, bulk pre-checks).
        allow_unassigned_reviewer_access: Whether reviewers may act on
            cases that have no reviewer assigned yet.

    Returns:
        AccessDecision; truthy when allowed.
    """
    if not principal.is_active:
        return AccessDecision(False, "principal is inactive", inactive=True)

    if principal.role not in OPERATION_ROLES[operation]:
        return AccessDecision(
            False, f"role '{principal.role.value}' is not permitted"
        )

    if appeal is None:
        return _ALLOW

    return _in_scope(principal, appeal, allow_unassigned_reviewer_access)
