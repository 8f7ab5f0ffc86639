"""Result model for bulk operations over several cases.

Bulk operations are partial-failure, not all-or-nothing: every key ends
up in exactly one of succeeded or failed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from appeal_tracker.domain.exceptions import AppealTrackerError, ErrorKind
from appeal_tracker.domain.models.appeal_view import AppealView


@dataclass(frozen=True)
class BulkItemFailure:
    """Failure of a single key within a bulk operation.

    Attributes:
        case_key: The key that failed.
        error: The domain error raised for that key.
    """

    case_key: UUID
    error: AppealTrackerError

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    @property
    def error_type(self) -> str:
        """Class name of the error, for reporting."""
        return type(self.error).__name__

    @property
    def message(self) -> str:
        """Error message, for reporting."""
        return str(self.error)


@dataclass(frozen=True)
class BulkOperationResult:
    """Outcome of applying one update to a set of cases.

    Attributes:
        operation: Name of the bulk operation.
        succeeded: Updated views keyed by case key, in request order.
        failed: Per-key failures, in request order.
    """

    operation: str
    succeeded: dict[UUID, AppealView] = field(default_factory=dict)
    failed: dict[UUID, BulkItemFailure] = field(default_factory=dict)

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    @property
    def total(self) -> int:
        return self.success_count + self.failure_count

    @property
    def all_succeeded(self) -> bool:
        return not self.failed
