"""Unit tests for role-filtered appeal projection."""

from __future__ import annotations

from uuid import uuid4

from hypothesis import given
from hypothesis import strategies as st

from appeal_tracker.application.services.appeal_projection import (
    project_appeal,
    visible_notes,
)
from appeal_tracker.domain.models.appeal import AppealNote
from appeal_tracker.domain.models.principal import Role
from tests.helpers.appeal_builders import make_appeal
from tests.helpers.fake_time_authority import DEFAULT_TIME


def _note(content: str, is_internal: bool, retracted: bool = False) -> AppealNote:
    note = AppealNote(uuid4(), content, "admin-1", "admin", DEFAULT_TIME, is_internal)
    return note.retract("admin-1", DEFAULT_TIME) if retracted else note


class TestProjectAppeal:
    def test_student_sees_only_live_public_notes(self) -> None:
        public = _note("public", is_internal=False)
        internal = _note("internal", is_internal=True)
        retracted = _note("gone", is_internal=False, retracted=True)
        appeal = make_appeal(notes=(public, internal, retracted))

        view = project_appeal(appeal, Role.STUDENT)

        assert view.notes == (public,)
        assert view.viewer_role is Role.STUDENT

    def test_staff_see_everything(self) -> None:
        notes = (
            _note("public", False),
            _note("internal", True),
            _note("gone", True, retracted=True),
        )
        appeal = make_appeal(notes=notes)

        assert project_appeal(appeal, Role.ADMIN).notes == notes
        assert project_appeal(appeal, Role.REVIEWER).notes == notes

    def test_timeline_never_filtered(self) -> None:
        appeal = make_appeal(notes=(_note("internal", True),))

        view = project_appeal(appeal, Role.STUDENT)

        assert view.timeline == appeal.timeline
        assert view.case_id == appeal.case_id
        assert view.version == appeal.version


class TestVisibleNotesProperties:
    @given(
        flags=st.lists(st.tuples(st.booleans(), st.booleans()), max_size=20),
    )
    def test_student_view_never_contains_internal_or_retracted(
        self, flags: list[tuple[bool, bool]]
    ) -> None:
        notes = [_note(f"n{i}", internal, retracted) for i, (internal, retracted) in enumerate(flags)]

        visible = visible_notes(notes, Role.STUDENT)

        assert all(not n.is_internal and not n.retracted for n in visible)
        assert len(visible) == sum(1 for i, r in flags if not i and not r)
        assert visible_notes(notes, Role.ADMIN) == tuple(notes)
