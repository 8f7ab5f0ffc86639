"""Appeal lifecycle service.

Creation, reads, status transitions and decisions.

Transition rules:
- Students never change status.
- Admins may set any status from any status (override).
- Reviewers act only within their assignment scope and may only request
  targets in REVIEWER_TARGET_STATUSES.

Decision rules:
- A case carries at most one decision; recording a second one is an
  InvalidTransition. Admins change an existing decision through
  amend_decision(), which keeps the previous outcome in the timeline.
- A withdrawn outcome resolves the case; any other outcome moves it to
  DECISION_MADE.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any
from uuid import UUID

from appeal_tracker.application.dtos.appeal import AppealSubmissionRequest, parse_dto
from appeal_tracker.application.ports.appeal_repository import (
    AppealRepositoryProtocol,
)
from appeal_tracker.application.ports.time_authority import TimeAuthorityProtocol
from appeal_tracker.application.services.appeal_case_base import AppealCaseServiceBase
from appeal_tracker.application.services.case_id_allocator import CaseIdAllocator
from appeal_tracker.config.appeal_config import (
    DEFAULT_APPEAL_ENGINE_CONFIG,
    AppealEngineConfig,
)
from appeal_tracker.domain.errors.authorization import AccessDeniedError
from appeal_tracker.domain.errors.case_id import (
    CaseIdAllocationError,
    DuplicateCaseIdError,
)
from appeal_tracker.domain.errors.state_transition import (
    DecisionAlreadyRecordedError,
    NoDecisionRecordedError,
    StatusNotAllowedError,
)
from appeal_tracker.domain.errors.validation import AppealValidationError
from appeal_tracker.domain.models.appeal import (
    REVIEWER_TARGET_STATUSES,
    Appeal,
    AppealStatus,
    Decision,
    DecisionOutcome,
)
from appeal_tracker.domain.models.appeal_view import AppealView
from appeal_tracker.domain.models.principal import Principal, Role
from appeal_tracker.domain.services.appeal_access_policy import AppealOperation


class AppealLifecycleService(AppealCaseServiceBase):
    """Creates appeals and drives them through their lifecycle."""

    def __init__(
        self,
        repository: AppealRepositoryProtocol,
        time_authority: TimeAuthorityProtocol,
        allocator: CaseIdAllocator,
        config: AppealEngineConfig = DEFAULT_APPEAL_ENGINE_CONFIG,
    ) -> None:
        super().__init__(repository, time_authority, config)
        self._allocator = allocator

    # =========================================================================
    # Creation and reads
    # =========================================================================

    async def create_appeal(
        self,
        student: Principal,
        payload: AppealSubmissionRequest | Mapping[str, Any],
    ) -> AppealView:
        """File a new appeal on behalf of the authenticated student.

        Args:
            student: The submitting principal (must be a student).
            payload: Submission body, as a DTO or a raw mapping.

        Returns:
            Student view of the stored appeal.

        Raises:
            AccessDeniedError: Not an active student, or the payload
                names another student.
            AppealValidationError: Malformed payload or missing
                confirmations.
            CaseIdAllocationError: No case id could be claimed.
        """
        log = self._log_operation("create_appeal", principal_id=student.id)
        self._check_access(student, AppealOperation.CREATE, log)

        request = parse_dto(AppealSubmissionRequest, payload, "payload")
        if not request.confirmations_accepted:
            raise AppealValidationError(
                "confirmations",
                "declaration, deadline_check and confirm_all must all be accepted",
            )
        if request.student_id != student.own_student_identifier:
            log.warning("access_denied", reason="student id mismatch")
            raise AccessDeniedError(
                principal_id=student.id,
                role=student.role.value,
                operation=AppealOperation.CREATE.value,
                reason="student id does not match the authenticated student",
            )

        details = request.to_details()
        log.info("create_appeal_started")
        for attempt in range(1, self._config.case_id_persist_attempts + 1):
            allocation = await self._allocator.allocate()
            appeal = Appeal.new(
                case_id=allocation.case_id,
                student_id=student.id,
                details=details,
                submitted_at=self._time.now(),
            )
            try:
                stored = await self._repository.save_new(appeal)
            except DuplicateCaseIdError:
                log.warning(
                    "case_id_claim_conflict",
                    case_id=allocation.case_id,
                    attempt=attempt,
                )
                continue
            log.info(
                "appeal_created",
                case_key=str(stored.case_key),
                case_id=stored.case_id,
                fallback_used=allocation.used_fallback,
            )
            return self._view(stored, student)

        log.error(
            "create_appeal_failed",
            attempts=self._config.case_id_persist_attempts,
        )
        raise CaseIdAllocationError(
            f"case id still taken after {self._config.case_id_persist_attempts} attempts"
        )

    async def get_appeal(self, principal: Principal, case_key: UUID) -> AppealView:
        """Read one appeal, filtered for the requester's role."""
        log = self._log_operation(
            "get_appeal", case_key=str(case_key), principal_id=principal.id
        )
        appeal = await self._load_for(principal, AppealOperation.VIEW, case_key, log)
        return self._view(appeal, principal)

    # =========================================================================
    # Status
    # =========================================================================

    async def transition(
        self,
        principal: Principal,
        case_key: UUID,
        new_status: AppealStatus | str,
        note: str | None = None,
    ) -> AppealView:
        """Change the status of a case.

        Args:
            principal: Admin or reviewer.
            case_key: The case to update.
            new_status: Target status (member or value).
            note: Optional internal note recorded with the change.

        Returns:
            Requester's view of the updated case.

        Raises:
            AppealNotFoundError: Unknown case.
            AccessDeniedError: Role or assignment check failed.
            StatusNotAllowedError: Reviewer requested a reserved status.
            AppealValidationError: Unknown status or blank note.
            ConcurrentModificationError: The case changed concurrently.
        """
        log = self._log_operation(
            "transition", case_key=str(case_key), principal_id=principal.id
        )
        self._check_access(principal, AppealOperation.TRANSITION, log)
        target = self._parse_enum(AppealStatus, new_status, "new_status")
        note_text = self._require_text(note, "note") if note is not None else None

        appeal = await self._load(case_key, log)
        self._check_access(principal, AppealOperation.TRANSITION, log, appeal)

        if principal.role is Role.REVIEWER and target not in REVIEWER_TARGET_STATUSES:
            log.info(
                "transition_rejected",
                from_status=appeal.status.value,
                to_status=target.value,
            )
            raise StatusNotAllowedError(
                case_key=case_key,
                from_status=appeal.status,
                to_status=target,
                allowed=sorted(REVIEWER_TARGET_STATUSES, key=lambda s: s.value),
                role=principal.role.value,
            )

        log.info(
            "transition_started",
            from_status=appeal.status.value,
            to_status=target.value,
        )
        entry = self._entry(
            "Status updated",
            f"Status changed to: {target.value} by {self._actor(principal)}",
            principal,
        )
        notes = appeal.notes
        if note_text is not None:
            notes = notes + (self._note(note_text, principal, is_internal=True),)
        stored = await self._persist(
            appeal, appeal.with_entry(entry, status=target, notes=notes), log
        )
        log.info("transition_completed", version=stored.version)
        return self._view(stored, principal)

    # =========================================================================
    # Decisions
    # =========================================================================

    async def record_decision(
        self,
        principal: Principal,
        case_key: UUID,
        outcome: DecisionOutcome | str,
        reason: str,
    ) -> AppealView:
        """Record the decision on a case that has none yet.

        Raises:
            DecisionAlreadyRecordedError: The case already has a decision.
            AppealValidationError: Unknown outcome or blank reason.
        """
        log = self._log_operation(
            "record_decision", case_key=str(case_key), principal_id=principal.id
        )
        self._check_access(principal, AppealOperation.RECORD_DECISION, log)
        parsed = self._parse_enum(DecisionOutcome, outcome, "outcome")
        reason_text = self._require_text(reason, "reason")

        appeal = await self._load(case_key, log)
        self._check_access(principal, AppealOperation.RECORD_DECISION, log, appeal)
        if appeal.decision is not None:
            log.info("decision_already_recorded", outcome=appeal.decision.outcome.value)
            raise DecisionAlreadyRecordedError(case_key, appeal.decision.outcome)

        now = self._time.now()
        decision = Decision(
            outcome=parsed,
            reason=reason_text,
            decision_date=now,
            decided_by=principal.id,
        )
        entry = self._entry(
            "Decision made",
            f"Decision: {parsed.value} - {reason_text} by {self._actor(principal)}",
            principal,
        )
        stored = await self._persist(
            appeal,
            appeal.with_entry(entry, decision=decision, status=parsed.resulting_status()),
            log,
        )
        log.info("decision_recorded", outcome=parsed.value, status=stored.status.value)
        return self._view(stored, principal)

    async def amend_decision(
        self,
        principal: Principal,
        case_key: UUID,
        outcome: DecisionOutcome | str,
        reason: str,
    ) -> AppealView:
        """Replace an existing decision (admin only).

        Raises:
            NoDecisionRecordedError: The case has no decision to amend.
        """
        log = self._log_operation(
            "amend_decision", case_key=str(case_key), principal_id=principal.id
        )
        self._check_access(principal, AppealOperation.AMEND_DECISION, log)
        parsed = self._parse_enum(DecisionOutcome, outcome, "outcome")
        reason_text = self._require_text(reason, "reason")

        appeal = await self._load(case_key, log)
        self._check_access(principal, AppealOperation.AMEND_DECISION, log, appeal)
        previous = appeal.decision
        if previous is None:
            raise NoDecisionRecordedError(case_key)

        decision = Decision(
            outcome=parsed,
            reason=reason_text,
            decision_date=self._time.now(),
            decided_by=principal.id,
        )
        entry = self._entry(
            "Decision amended",
            f"Decision amended from {previous.outcome.value} to {parsed.value}"
            f" - {reason_text} by {self._actor(principal)}",
            principal,
        )
        stored = await self._persist(
            appeal,
            appeal.with_entry(entry, decision=decision, status=parsed.resulting_status()),
            log,
        )
        log.info(
            "decision_amended",
            previous_outcome=previous.outcome.value,
            outcome=parsed.value,
        )
        return self._view(stored, principal)

    async def request_information(
        self,
        principal: Principal,
        case_key: UUID,
        details: str,
        deadline: datetime | date | None = None,
    ) -> AppealView:
        """Ask the student for more information.

        Moves the case to AWAITING_INFORMATION and, when given, sets the
        response deadline.
        """
        log = self._log_operation(
            "request_information", case_key=str(case_key), principal_id=principal.id
        )
        self._check_access(principal, AppealOperation.REQUEST_INFORMATION, log)
        details_text = self._require_text(details, "details")
        due = self._require_future(deadline, "deadline") if deadline is not None else None

        appeal = await self._load(case_key, log)
        self._check_access(principal, AppealOperation.REQUEST_INFORMATION, log, appeal)

        description = f"Additional information requested: {details_text}"
        if due is not None:
            description += f" - Deadline: {due.date().isoformat()}"
        entry = self._entry(
            "Information requested",
            f"{description} by {self._actor(principal)}",
            principal,
        )
        changes: dict[str, Any] = {"status": AppealStatus.AWAITING_INFORMATION}
        if due is not None:
            changes["deadline"] = due
        stored = await self._persist(appeal, appeal.with_entry(entry, **changes), log)
        log.info("information_requested", has_deadline=due is not None)
        return self._view(stored, principal)
