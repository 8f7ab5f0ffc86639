"""Appeal deadline service.

Admins set and clear case deadlines, individually or in bulk, and ask
for an overview of outstanding cases grouped into deadline buckets.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from uuid import UUID

import structlog

from appeal_tracker.application.services.appeal_case_base import AppealCaseServiceBase
from appeal_tracker.domain.errors.validation import AppealValidationError
from appeal_tracker.domain.models.appeal import Appeal, AppealNote
from appeal_tracker.domain.models.appeal_view import AppealView
from appeal_tracker.domain.models.bulk_result import BulkOperationResult
from appeal_tracker.domain.models.deadline_buckets import DeadlineBuckets
from appeal_tracker.domain.models.principal import Principal
from appeal_tracker.domain.services.appeal_access_policy import AppealOperation
from appeal_tracker.domain.services.deadline_bucketizer import bucketize


class AppealDeadlineService(AppealCaseServiceBase):
    """Manages case deadlines."""

    async def set_deadline(
        self,
        principal: Principal,
        case_key: UUID,
        deadline: datetime | date,
        reason: str | None = None,
    ) -> AppealView:
        """Set or move the deadline of a case.

        Args:
            principal: Active admin.
            case_key: The case to update.
            deadline: New deadline; must be after now.
            reason: Optional reason, kept as an internal note.

        Raises:
            AppealValidationError: Deadline not in the future, or blank reason.
        """
        log = self._log_operation(
            "set_deadline", case_key=str(case_key), principal_id=principal.id
        )
        self._check_access(principal, AppealOperation.MANAGE_DEADLINE, log)
        due = self._require_future(deadline, "deadline")
        reason_text = self._optional_reason(reason)
        return await self._set_one(principal, case_key, due, reason_text, log)

    async def clear_deadline(
        self,
        principal: Principal,
        case_key: UUID,
        reason: str | None = None,
    ) -> AppealView:
        """Remove the deadline of a case.

        Raises:
            AppealValidationError: The case has no deadline.
        """
        log = self._log_operation(
            "clear_deadline", case_key=str(case_key), principal_id=principal.id
        )
        self._check_access(principal, AppealOperation.MANAGE_DEADLINE, log)
        reason_text = self._optional_reason(reason)

        appeal = await self._load(case_key, log)
        self._check_access(principal, AppealOperation.MANAGE_DEADLINE, log, appeal)
        if appeal.deadline is None:
            raise AppealValidationError("deadline", "appeal has no deadline to clear")

        entry = self._entry(
            "Deadline cleared",
            f"Deadline removed by {self._actor(principal)}",
            principal,
        )
        stored = await self._persist(
            appeal,
            appeal.with_entry(
                entry,
                deadline=None,
                notes=self._notes_with_reason(appeal, reason_text, principal),
            ),
            log,
        )
        log.info("deadline_cleared")
        return self._view(stored, principal)

    async def bulk_set_deadline(
        self,
        principal: Principal,
        case_keys: Iterable[UUID],
        deadline: datetime | date,
        reason: str | None = None,
    ) -> BulkOperationResult:
        """Set the same deadline on several cases, each independently."""
        log = self._log_operation("bulk_set_deadline", principal_id=principal.id)
        self._check_access(principal, AppealOperation.MANAGE_DEADLINE, log)
        due = self._require_future(deadline, "deadline")
        reason_text = self._optional_reason(reason)

        async def apply(case_key: UUID) -> AppealView:
            return await self._set_one(
                principal, case_key, due, reason_text, log.bind(case_key=str(case_key))
            )

        return await self._run_bulk("bulk_set_deadline", case_keys, apply, log)

    async def deadline_overview(
        self,
        principal: Principal,
        horizon_days: int | None = None,
    ) -> DeadlineBuckets[AppealView]:
        """Bucket every outstanding case by deadline (admin only).

        Buckets hold the requester's views of the cases, never the
        stored aggregates.

        Args:
            principal: Active admin.
            horizon_days: Days counted as this week; defaults to config.
        """
        log = self._log_operation("deadline_overview", principal_id=principal.id)
        self._check_access(principal, AppealOperation.VIEW_DEADLINES, log)
        horizon = (
            self._config.deadline_horizon_days if horizon_days is None else horizon_days
        )
        outstanding = await self._repository.list_outstanding()
        views = [self._view(appeal, principal) for appeal in outstanding]
        buckets = bucketize(views, horizon, self._time.now())
        log.info("deadline_overview_built", total=buckets.total, horizon_days=horizon)
        return buckets

    # =========================================================================
    # Helpers
    # =========================================================================

    def _optional_reason(self, reason: str | None) -> str | None:
        return self._require_text(reason, "reason") if reason is not None else None

    def _notes_with_reason(
        self, appeal: Appeal, reason: str | None, principal: Principal
    ) -> tuple[AppealNote, ...]:
        if reason is None:
            return appeal.notes
        return appeal.notes + (self._note(reason, principal, is_internal=True),)

    async def _set_one(
        self,
        principal: Principal,
        case_key: UUID,
        due: datetime,
        reason: str | None,
        log: structlog.BoundLogger,
    ) -> AppealView:
        appeal = await self._load(case_key, log)
        self._check_access(principal, AppealOperation.MANAGE_DEADLINE, log, appeal)

        entry = self._entry(
            "Deadline set",
            f"Deadline set to {due.date().isoformat()} by {self._actor(principal)}",
            principal,
        )
        stored = await self._persist(
            appeal,
            appeal.with_entry(
                entry,
                deadline=due,
                notes=self._notes_with_reason(appeal, reason, principal),
            ),
            log,
        )
        log.info("deadline_set", deadline=due.isoformat())
        return self._view(stored, principal)
