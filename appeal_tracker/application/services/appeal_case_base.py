"""Shared plumbing for services that act on a single appeal.

Every entry point follows the same unit-of-work shape:

1. PRINCIPAL GATE - reject inactive principals and disallowed roles
   before touching the store
2. LOAD - read the appeal (NotFound if missing)
3. SCOPE CHECK - ownership / assignment via can_perform()
4. VALIDATE + MUTATE - build a new immutable Appeal with exactly one
   new timeline entry
5. PERSIST - compare-and-swap on the version that was read; conflicts
   propagate to the caller, they are never retried or swallowed here
6. PROJECT - return the view filtered for the requester's role
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import TypeVar
from uuid import UUID, uuid4

import structlog

from appeal_tracker.application.ports.appeal_repository import (
    AppealRepositoryProtocol,
)
from appeal_tracker.application.ports.time_authority import TimeAuthorityProtocol
from appeal_tracker.application.services.appeal_projection import project_appeal
from appeal_tracker.application.services.base import LoggingMixin
from appeal_tracker.config.appeal_config import (
    DEFAULT_APPEAL_ENGINE_CONFIG,
    AppealEngineConfig,
)
from appeal_tracker.domain.errors.appeal import AppealNotFoundError
from appeal_tracker.domain.errors.authorization import (
    AccessDeniedError,
    InactivePrincipalError,
)
from appeal_tracker.domain.errors.concurrent_modification import (
    ConcurrentModificationError,
)
from appeal_tracker.domain.errors.validation import AppealValidationError
from appeal_tracker.domain.exceptions import AppealTrackerError
from appeal_tracker.domain.models.appeal import Appeal, AppealNote, TimelineEntry
from appeal_tracker.domain.models.appeal_view import AppealView
from appeal_tracker.domain.models.bulk_result import (
    BulkItemFailure,
    BulkOperationResult,
)
from appeal_tracker.domain.models.principal import Principal
from appeal_tracker.domain.services.appeal_access_policy import (
    AppealOperation,
    can_perform,
)

_EnumT = TypeVar("_EnumT", bound=Enum)


class AppealCaseServiceBase(LoggingMixin):
    """Base class for appeal services.

    Attributes:
        _repository: Appeal store with compare-and-swap writes.
        _time: Source of "now".
        _config: Engine configuration (reviewer access policy etc.).
    """

    def __init__(
        self,
        repository: AppealRepositoryProtocol,
        time_authority: TimeAuthorityProtocol,
        config: AppealEngineConfig = DEFAULT_APPEAL_ENGINE_CONFIG,
    ) -> None:
        self._repository = repository
        self._time = time_authority
        self._config = config
        self._init_logger()

    # =========================================================================
    # Authorization
    # =========================================================================

    def _check_access(
        self,
        principal: Principal,
        operation: AppealOperation,
        log: structlog.BoundLogger,
        appeal: Appeal | None = None,
    ) -> None:
        """Raise unless the access policy allows the operation.

        Raises:
            InactivePrincipalError: If the principal is inactive.
            AccessDeniedError: If role, ownership or assignment fails.
        """
        decision = can_perform(
            principal,
            operation,
            appeal,
            allow_unassigned_reviewer_access=self._config.allow_unassigned_reviewer_access,
        )
        if decision:
            return
        case_key = appeal.case_key if appeal is not None else None
        log.warning("access_denied", reason=decision.reason)
        if decision.inactive:
            raise InactivePrincipalError(
                principal_id=principal.id,
                role=principal.role.value,
                operation=operation.value,
                case_key=case_key,
            )
        raise AccessDeniedError(
            principal_id=principal.id,
            role=principal.role.value,
            operation=operation.value,
            reason=decision.reason,
            case_key=case_key,
        )

    async def _load(self, case_key: UUID, log: structlog.BoundLogger) -> Appeal:
        appeal = await self._repository.get(case_key)
        if appeal is None:
            log.info("appeal_not_found")
            raise AppealNotFoundError(case_key)
        return appeal

    async def _load_for(
        self,
        principal: Principal,
        operation: AppealOperation,
        case_key: UUID,
        log: structlog.BoundLogger,
    ) -> Appeal:
        """Gate the principal, load the appeal, then check scope."""
        self._check_access(principal, operation, log)
        appeal = await self._load(case_key, log)
        self._check_access(principal, operation, log, appeal)
        return appeal

    # =========================================================================
    # Persistence
    # =========================================================================

    async def _persist(
        self,
        original: Appeal,
        updated: Appeal,
        log: structlog.BoundLogger,
    ) -> Appeal:
        """Write the mutated appeal with compare-and-swap.

        Raises:
            ConcurrentModificationError: If another write won the race.
        """
        try:
            return await self._repository.compare_and_swap(
                original.case_key, original.version, updated
            )
        except ConcurrentModificationError as exc:
            log.warning(
                "store_conflict",
                expected_version=exc.expected_version,
                actual_version=exc.actual_version,
            )
            raise

    def _view(self, appeal: Appeal, principal: Principal) -> AppealView:
        return project_appeal(appeal, principal.role)

    # =========================================================================
    # Building blocks
    # =========================================================================

    def _entry(self, action: str, description: str, principal: Principal) -> TimelineEntry:
        return TimelineEntry(
            action=action,
            description=description,
            performed_by=principal.id,
            timestamp=self._time.now(),
        )

    def _note(self, content: str, principal: Principal, is_internal: bool) -> AppealNote:
        return AppealNote(
            note_id=uuid4(),
            content=content,
            author=principal.id,
            author_role=principal.role.value,
            timestamp=self._time.now(),
            is_internal=is_internal,
        )

    @staticmethod
    def _actor(principal: Principal) -> str:
        """Actor phrase used in timeline descriptions."""
        return f"{principal.role.value}: {principal.name}"

    @staticmethod
    def _require_text(value: str | None, field: str) -> str:
        """Return stripped text or raise if it is missing or blank."""
        if value is None or not value.strip():
            raise AppealValidationError(field, "must not be empty")
        return value.strip()

    @staticmethod
    def _parse_enum(enum_cls: type[_EnumT], value: _EnumT | str, field: str) -> _EnumT:
        """Parse an enum member from itself or its value."""
        if isinstance(value, enum_cls):
            return value
        try:
            return enum_cls(value)
        except ValueError:
            allowed = ", ".join(str(m.value) for m in enum_cls)
            raise AppealValidationError(
                field, f"unknown value {value!r} (allowed: {allowed})"
            ) from None

    def _require_future(self, moment: datetime | date, field: str) -> datetime:
        """Normalise a deadline to aware UTC and require it to be after now.

        A bare date means the start of that day (UTC), so today's date is
        already in the past.
        """
        if isinstance(moment, datetime):
            deadline = moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)
        else:
            deadline = datetime.combine(moment, time.min, tzinfo=timezone.utc)
        deadline = deadline.astimezone(timezone.utc)
        if deadline <= self._time.now():
            raise AppealValidationError(
                field, f"must be in the future, got {deadline.isoformat()}"
            )
        return deadline

    # =========================================================================
    # Bulk
    # =========================================================================

    async def _run_bulk(
        self,
        operation_name: str,
        case_keys: Iterable[UUID],
        action: Callable[[UUID], Awaitable[AppealView]],
        log: structlog.BoundLogger,
    ) -> BulkOperationResult:
        """Apply an action to each distinct key independently.

        Domain errors are recorded per key and never abort the batch.
        Anything else is a programming error and propagates.
        """
        result = BulkOperationResult(operation=operation_name)
        for case_key in dict.fromkeys(case_keys):
            try:
                result.succeeded[case_key] = await action(case_key)
            except AppealTrackerError as exc:
                log.info(
                    "bulk_item_failed",
                    case_key=str(case_key),
                    error_type=type(exc).__name__,
                    error_kind=exc.kind.value,
                )
                result.failed[case_key] = BulkItemFailure(case_key=case_key, error=exc)
        log.info(
            "bulk_completed",
            succeeded=result.success_count,
            failed=result.failure_count,
        )
        return result
