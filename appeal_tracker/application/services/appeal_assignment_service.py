"""Appeal assignment service.

Admins assign the reviewer, the owning admin and the priority of a case.
An AssignmentUpdate only touches the fields it carries: an omitted field
is left alone, an explicit null clears the assignment.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any
from uuid import UUID

import structlog

from appeal_tracker.application.dtos.appeal import AssignmentUpdate, parse_dto
from appeal_tracker.application.services.appeal_case_base import AppealCaseServiceBase
from appeal_tracker.domain.models.appeal_view import AppealView
from appeal_tracker.domain.models.bulk_result import BulkOperationResult
from appeal_tracker.domain.models.principal import Principal
from appeal_tracker.domain.services.appeal_access_policy import AppealOperation

# AssignmentUpdate field -> Appeal attribute
_FIELD_MAP: dict[str, str] = {
    "reviewer": "assigned_reviewer",
    "admin": "assigned_admin",
    "priority": "priority",
}


def _describe(changes: Mapping[str, Any]) -> str:
    parts = []
    for name, value in changes.items():
        if value is None:
            parts.append(f"{name}: cleared")
        else:
            parts.append(f"{name}: {getattr(value, 'value', value)}")
    return ", ".join(parts)


class AppealAssignmentService(AppealCaseServiceBase):
    """Manages reviewer/admin assignment and priority."""

    async def assign(
        self,
        principal: Principal,
        case_key: UUID,
        update: AssignmentUpdate | Mapping[str, Any],
    ) -> AppealView:
        """Apply an assignment update to one case.

        Raises:
            AccessDeniedError: Not an active admin.
            AppealValidationError: Empty or malformed update.
        """
        log = self._log_operation(
            "assign", case_key=str(case_key), principal_id=principal.id
        )
        self._check_access(principal, AppealOperation.MANAGE_ASSIGNMENT, log)
        parsed = parse_dto(AssignmentUpdate, update, "update")
        return await self._assign_one(principal, case_key, parsed, log)

    async def bulk_assign(
        self,
        principal: Principal,
        case_keys: Iterable[UUID],
        update: AssignmentUpdate | Mapping[str, Any],
    ) -> BulkOperationResult:
        """Apply the same assignment update to several cases.

        The principal and the update are checked once, before the batch;
        per-case failures are collected in the result.
        """
        log = self._log_operation("bulk_assign", principal_id=principal.id)
        self._check_access(principal, AppealOperation.MANAGE_ASSIGNMENT, log)
        parsed = parse_dto(AssignmentUpdate, update, "update")

        async def apply(case_key: UUID) -> AppealView:
            return await self._assign_one(
                principal, case_key, parsed, log.bind(case_key=str(case_key))
            )

        return await self._run_bulk("bulk_assign", case_keys, apply, log)

    async def _assign_one(
        self,
        principal: Principal,
        case_key: UUID,
        update: AssignmentUpdate,
        log: structlog.BoundLogger,
    ) -> AppealView:
        appeal = await self._load(case_key, log)
        self._check_access(principal, AppealOperation.MANAGE_ASSIGNMENT, log, appeal)

        changes = update.changes()
        entry = self._entry(
            "Appeal assigned",
            f"Assignment updated ({_describe(changes)}) by {self._actor(principal)}",
            principal,
        )
        updated = appeal.with_entry(
            entry, **{_FIELD_MAP[name]: value for name, value in changes.items()}
        )
        stored = await self._persist(appeal, updated, log)
        log.info("appeal_assigned", fields=sorted(changes))
        return self._view(stored, principal)
