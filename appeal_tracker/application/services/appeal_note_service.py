"""Appeal note service.

Visibility rules on write:
- Students add notes only to their own case; their notes are public and
  an explicit request for an internal note is refused.
- Staff notes default to internal; staff may choose public.

Notes are never deleted. An admin may retract a note, which leaves a
tombstone (staff still see it, students do not) and one timeline entry.
"""

from __future__ import annotations

from uuid import UUID

from appeal_tracker.application.services.appeal_case_base import AppealCaseServiceBase
from appeal_tracker.domain.errors.appeal import NoteNotFoundError
from appeal_tracker.domain.errors.authorization import AccessDeniedError
from appeal_tracker.domain.errors.state_transition import NoteAlreadyRetractedError
from appeal_tracker.domain.models.appeal_view import AppealView
from appeal_tracker.domain.models.principal import Principal, Role
from appeal_tracker.domain.services.appeal_access_policy import AppealOperation


class AppealNoteService(AppealCaseServiceBase):
    """Adds and retracts notes on appeals."""

    async def add_note(
        self,
        principal: Principal,
        case_key: UUID,
        content: str,
        is_internal: bool | None = None,
    ) -> AppealView:
        """Attach a note to a case.

        Args:
            principal: Any role, within its access scope.
            case_key: The case to annotate.
            content: Note text (non-blank).
            is_internal: Visibility; None picks the role default.

        Returns:
            Requester's view of the updated case.

        Raises:
            AccessDeniedError: Out of scope, or a student asked for an
                internal note.
            AppealValidationError: Blank content.
        """
        log = self._log_operation(
            "add_note", case_key=str(case_key), principal_id=principal.id
        )
        self._check_access(principal, AppealOperation.ADD_NOTE, log)
        text = self._require_text(content, "content")

        if principal.role is Role.STUDENT:
            if is_internal:
                log.warning("access_denied", reason="student internal note")
                raise AccessDeniedError(
                    principal_id=principal.id,
                    role=principal.role.value,
                    operation=AppealOperation.ADD_NOTE.value,
                    reason="students may only add public notes",
                    case_key=case_key,
                )
            internal = False
        else:
            internal = True if is_internal is None else is_internal

        appeal = await self._load(case_key, log)
        self._check_access(principal, AppealOperation.ADD_NOTE, log, appeal)

        note = self._note(text, principal, is_internal=internal)
        entry = self._entry(
            "Note added", f"Note added by {self._actor(principal)}", principal
        )
        stored = await self._persist(
            appeal, appeal.with_entry(entry, notes=appeal.notes + (note,)), log
        )
        log.info("note_added", note_id=str(note.note_id), is_internal=internal)
        return self._view(stored, principal)

    async def retract_note(
        self,
        principal: Principal,
        case_key: UUID,
        note_id: UUID,
        reason: str | None = None,
    ) -> AppealView:
        """Retract a note, leaving a tombstone (admin only).

        Raises:
            NoteNotFoundError: The note is not on this case.
            NoteAlreadyRetractedError: The note is already retracted.
            AppealValidationError: A blank reason was supplied.
        """
        log = self._log_operation(
            "retract_note",
            case_key=str(case_key),
            note_id=str(note_id),
            principal_id=principal.id,
        )
        self._check_access(principal, AppealOperation.RETRACT_NOTE, log)
        reason_text = self._require_text(reason, "reason") if reason is not None else None

        appeal = await self._load(case_key, log)
        self._check_access(principal, AppealOperation.RETRACT_NOTE, log, appeal)

        note = appeal.find_note(note_id)
        if note is None:
            raise NoteNotFoundError(case_key, note_id)
        if note.retracted:
            raise NoteAlreadyRetractedError(case_key, note_id)

        tombstone = note.retract(by=principal.id, at=self._time.now())
        notes = tuple(tombstone if n.note_id == note_id else n for n in appeal.notes)
        description = f"Note {note_id} retracted by {self._actor(principal)}"
        if reason_text is not None:
            description += f" - Reason: {reason_text}"
        entry = self._entry("Note retracted", description, principal)
        stored = await self._persist(appeal, appeal.with_entry(entry, notes=notes), log)
        log.info("note_retracted")
        return self._view(stored, principal)
