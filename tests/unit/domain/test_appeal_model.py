"""Unit tests for the Appeal aggregate and its value objects.

Tests:
- AppealStatus / DecisionOutcome helpers
- Appeal.new() initial state
- with_entry() appends exactly one entry and refreshes updated_at
- AppealNote.retract() tombstones
- Principal validation
"""

from __future__ import annotations

from datetime import timedelta
from uuid import uuid4

import pytest

from appeal_tracker.domain.models.appeal import (
    REVIEWER_TARGET_STATUSES,
    AppealNote,
    AppealStatus,
    DecisionOutcome,
    TimelineEntry,
)
from appeal_tracker.domain.models.principal import Principal, Role
from tests.helpers.appeal_builders import make_appeal, make_details
from tests.helpers.fake_time_authority import DEFAULT_TIME


class TestAppealStatus:
    """Test AppealStatus enum."""

    def test_status_values(self) -> None:
        assert AppealStatus.SUBMITTED.value == "submitted"
        assert AppealStatus.UNDER_REVIEW.value == "under review"
        assert AppealStatus.AWAITING_INFORMATION.value == "awaiting information"
        assert AppealStatus.DECISION_MADE.value == "decision made"
        assert AppealStatus.RESOLVED.value == "resolved"
        assert AppealStatus.REJECTED.value == "rejected"

    def test_terminal_statuses(self) -> None:
        assert AppealStatus.RESOLVED.is_terminal()
        assert AppealStatus.REJECTED.is_terminal()
        assert not AppealStatus.DECISION_MADE.is_terminal()

    def test_reviewer_cannot_target_submitted(self) -> None:
        assert AppealStatus.SUBMITTED not in REVIEWER_TARGET_STATUSES
        assert len(REVIEWER_TARGET_STATUSES) == 5


class TestDecisionOutcome:
    """Test DecisionOutcome.resulting_status()."""

    def test_withdrawn_resolves(self) -> None:
        assert DecisionOutcome.WITHDRAWN.resulting_status() is AppealStatus.RESOLVED

    @pytest.mark.parametrize(
        "outcome",
        [
            DecisionOutcome.UPHELD,
            DecisionOutcome.PARTIALLY_UPHELD,
            DecisionOutcome.REJECTED,
        ],
    )
    def test_other_outcomes_move_to_decision_made(self, outcome: DecisionOutcome) -> None:
        assert outcome.resulting_status() is AppealStatus.DECISION_MADE


class TestAppealNew:
    """Test Appeal.new() factory."""

    def test_new_appeal_is_submitted_with_one_entry(self) -> None:
        appeal = make_appeal()

        assert appeal.status is AppealStatus.SUBMITTED
        assert len(appeal.timeline) == 1
        assert appeal.timeline[0].action == "Appeal submitted"
        assert "Extenuating Circumstances" in appeal.timeline[0].description
        assert appeal.timeline[0].performed_by == "student-1"
        assert appeal.notes == ()
        assert appeal.decision is None
        assert appeal.version == 0
        assert appeal.submitted_at == appeal.updated_at == DEFAULT_TIME

    def test_empty_case_id_rejected(self) -> None:
        with pytest.raises(ValueError, match="case_id"):
            make_appeal(case_id="")


class TestWithEntry:
    """Test Appeal.with_entry()."""

    def test_appends_entry_and_applies_changes(self) -> None:
        appeal = make_appeal()
        later = DEFAULT_TIME + timedelta(hours=1)
        entry = TimelineEntry("Status updated", "moved", "admin-1", later)

        updated = appeal.with_entry(entry, status=AppealStatus.UNDER_REVIEW)

        assert updated.timeline == appeal.timeline + (entry,)
        assert updated.status is AppealStatus.UNDER_REVIEW
        assert updated.updated_at == later
        assert appeal.status is AppealStatus.SUBMITTED  # original untouched

    @pytest.mark.parametrize("field", ["timeline", "version"])
    def test_cannot_replace_timeline_or_version(self, field: str) -> None:
        appeal = make_appeal()
        entry = TimelineEntry("x", "y", "admin-1", DEFAULT_TIME)

        with pytest.raises(ValueError, match="cannot be replaced"):
            appeal.with_entry(entry, **{field: ()})

    def test_find_note(self) -> None:
        note = AppealNote(uuid4(), "hello", "admin-1", "admin", DEFAULT_TIME)
        appeal = make_appeal(notes=(note,))

        assert appeal.find_note(note.note_id) is note
        assert appeal.find_note(uuid4()) is None


class TestAppealNote:
    """Test AppealNote.retract()."""

    def test_retract_returns_tombstone(self) -> None:
        note = AppealNote(uuid4(), "oops", "admin-1", "admin", DEFAULT_TIME, is_internal=True)

        tombstone = note.retract(by="admin-2", at=DEFAULT_TIME)

        assert tombstone.retracted
        assert tombstone.retracted_by == "admin-2"
        assert tombstone.retracted_at == DEFAULT_TIME
        assert tombstone.content == "oops"
        assert tombstone.note_id == note.note_id
        assert not note.retracted


class TestPrincipal:
    """Test Principal value object."""

    def test_empty_id_rejected(self) -> None:
        with pytest.raises(ValueError):
            Principal(id="  ", role=Role.ADMIN)

    def test_name_falls_back_to_id(self) -> None:
        assert Principal(id="a-1", role=Role.ADMIN).name == "a-1"
        assert Principal(id="a-1", role=Role.ADMIN, display_name="Ann").name == "Ann"

    def test_own_student_identifier(self) -> None:
        assert Principal(id="s-1", role=Role.STUDENT).own_student_identifier == "s-1"
        numbered = Principal(id="s-1", role=Role.STUDENT, student_number="S99")
        assert numbered.own_student_identifier == "S99"

    def test_details_are_immutable(self) -> None:
        details = make_details()
        with pytest.raises(AttributeError):
            details.first_name = "Bob"  # type: ignore[misc]
