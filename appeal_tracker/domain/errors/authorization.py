"""Authorization errors (role, ownership and assignment checks).

Every denial surfaces as AccessDeniedError so callers can map a single
error kind to "forbidden", whatever precondition failed.
"""

from __future__ import annotations

from uuid import UUID

from appeal_tracker.domain.exceptions import AppealTrackerError, ErrorKind


class AccessDeniedError(AppealTrackerError):
    """Raised when a principal may not perform an operation on a case.

    Attributes:
        principal_id: The requesting principal.
        role: The principal's role value.
        operation: The operation that was attempted.
        case_key: The case involved, if any.
        reason: Which precondition failed.
    """

    kind = ErrorKind.FORBIDDEN

    def __init__(
        self,
        principal_id: str,
        role: str,
        operation: str,
        reason: str,
        case_key: UUID | None = None,
    ) -> None:
        self.principal_id = principal_id
        self.role = role
        self.operation = operation
        self.case_key = case_key
        self.reason = reason
        target = f" on appeal {case_key}" if case_key is not None else ""
        super().__init__(
            f"{role} {principal_id} may not {operation}{target}: {reason}"
        )


class InactivePrincipalError(AccessDeniedError):
    """Raised when a deactivated principal attempts any operation."""

    def __init__(
        self,
        principal_id: str,
        role: str,
        operation: str,
        case_key: UUID | None = None,
    ) -> None:
        super().__init__(
            principal_id=principal_id,
            role=role,
            operation=operation,
            reason="principal is inactive",
            case_key=case_key,
        )
