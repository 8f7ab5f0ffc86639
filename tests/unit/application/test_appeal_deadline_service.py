"""Unit tests for AppealDeadlineService.

Reference time is Monday 2026-03-02 09:00 UTC.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

import pytest

from appeal_tracker.bootstrap.appeal_services import AppealServices
from appeal_tracker.config.appeal_config import AppealEngineConfig
from appeal_tracker.domain.errors import (
    AccessDeniedError,
    AppealNotFoundError,
    AppealValidationError,
)
from appeal_tracker.domain.models.appeal_view import AppealView
from appeal_tracker.domain.models.principal import Principal, Role
from appeal_tracker.infrastructure.stubs.appeal_repository_stub import (
    AppealRepositoryStub,
)
from tests.helpers.appeal_builders import submission_payload
from tests.helpers.fake_time_authority import FakeTimeAuthority


async def _file(services: AppealServices, student: Principal) -> AppealView:
    return await services.lifecycle.create_appeal(student, submission_payload())


class TestSetDeadline:
    @pytest.mark.asyncio
    async def test_sets_future_deadline(
        self,
        services: AppealServices,
        student: Principal,
        admin: Principal,
        fake_time: FakeTimeAuthority,
    ) -> None:
        view = await _file(services, student)
        due = fake_time.now() + timedelta(days=10)

        updated = await services.deadlines.set_deadline(admin, view.case_key, due)

        assert updated.deadline == due
        assert updated.notes == ()
        assert updated.timeline[-1].action == "Deadline set"
        assert "2026-03-12" in updated.timeline[-1].description

    @pytest.mark.asyncio
    async def test_reason_becomes_internal_note(
        self,
        services: AppealServices,
        student: Principal,
        admin: Principal,
        fake_time: FakeTimeAuthority,
    ) -> None:
        view = await _file(services, student)

        updated = await services.deadlines.set_deadline(
            admin, view.case_key, fake_time.now() + timedelta(days=1), reason="Panel date"
        )

        assert len(updated.notes) == 1
        assert updated.notes[0].is_internal
        assert updated.notes[0].content == "Panel date"
        assert len(updated.timeline) == len(view.timeline) + 1

    @pytest.mark.asyncio
    async def test_naive_datetime_treated_as_utc(
        self, services: AppealServices, student: Principal, admin: Principal
    ) -> None:
        view = await _file(services, student)

        updated = await services.deadlines.set_deadline(
            admin, view.case_key, datetime(2026, 3, 5, 17, 0)
        )

        assert updated.deadline == datetime(2026, 3, 5, 17, 0, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_date_means_start_of_day(
        self, services: AppealServices, student: Principal, admin: Principal
    ) -> None:
        view = await _file(services, student)

        updated = await services.deadlines.set_deadline(admin, view.case_key, date(2026, 3, 9))

        assert updated.deadline == datetime(2026, 3, 9, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "deadline",
        [
            datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc),
            datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc),
            date(2026, 3, 2),
        ],
    )
    async def test_past_or_present_rejected_without_mutation(
        self,
        services: AppealServices,
        student: Principal,
        admin: Principal,
        repository: AppealRepositoryStub,
        deadline: datetime | date,
    ) -> None:
        view = await _file(services, student)

        with pytest.raises(AppealValidationError) as exc_info:
            await services.deadlines.set_deadline(admin, view.case_key, deadline)

        assert exc_info.value.field == "deadline"
        stored = await repository.get(view.case_key)
        assert stored is not None
        assert stored.version == view.version

    @pytest.mark.asyncio
    async def test_reviewer_refused(
        self,
        services: AppealServices,
        student: Principal,
        reviewer: Principal,
        fake_time: FakeTimeAuthority,
    ) -> None:
        view = await _file(services, student)

        with pytest.raises(AccessDeniedError):
            await services.deadlines.set_deadline(
                reviewer, view.case_key, fake_time.now() + timedelta(days=1)
            )


class TestClearDeadline:
    @pytest.mark.asyncio
    async def test_clears_deadline(
        self,
        services: AppealServices,
        student: Principal,
        admin: Principal,
        fake_time: FakeTimeAuthority,
    ) -> None:
        view = await _file(services, student)
        await services.deadlines.set_deadline(
            admin, view.case_key, fake_time.now() + timedelta(days=2)
        )

        cleared = await services.deadlines.clear_deadline(admin, view.case_key, reason="Agreed")

        assert cleared.deadline is None
        assert cleared.timeline[-1].action == "Deadline cleared"
        assert cleared.notes[-1].content == "Agreed"

    @pytest.mark.asyncio
    async def test_nothing_to_clear(
        self, services: AppealServices, student: Principal, admin: Principal
    ) -> None:
        view = await _file(services, student)

        with pytest.raises(AppealValidationError, match="no deadline"):
            await services.deadlines.clear_deadline(admin, view.case_key)


class TestBulkSetDeadline:
    @pytest.mark.asyncio
    async def test_partial_failure(
        self,
        services: AppealServices,
        student: Principal,
        admin: Principal,
        fake_time: FakeTimeAuthority,
    ) -> None:
        view = await _file(services, student)
        missing = uuid4()
        due = fake_time.now() + timedelta(days=4)

        result = await services.deadlines.bulk_set_deadline(
            admin, [view.case_key, missing], due, reason="Batch"
        )

        assert result.succeeded[view.case_key].deadline == due
        assert isinstance(result.failed[missing].error, AppealNotFoundError)
        assert result.operation == "bulk_set_deadline"

    @pytest.mark.asyncio
    async def test_past_deadline_rejected_upfront(
        self,
        services: AppealServices,
        admin: Principal,
        fake_time: FakeTimeAuthority,
    ) -> None:
        with pytest.raises(AppealValidationError):
            await services.deadlines.bulk_set_deadline(
                admin, [uuid4()], fake_time.now() - timedelta(hours=1)
            )


class TestDeadlineOverview:
    @pytest.mark.asyncio
    async def test_entries_are_admin_views(
        self,
        services: AppealServices,
        student: Principal,
        admin: Principal,
        fake_time: FakeTimeAuthority,
    ) -> None:
        view = await _file(services, student)
        await services.deadlines.set_deadline(
            admin, view.case_key, fake_time.now() + timedelta(days=2), reason="chase GP"
        )

        buckets = await services.deadlines.deadline_overview(admin)

        (entry,) = buckets.this_week
        assert isinstance(entry, AppealView)
        assert entry.viewer_role is Role.ADMIN
        assert [note.content for note in entry.notes] == ["chase GP"]

    @pytest.mark.asyncio
    async def test_buckets_outstanding_cases(
        self,
        services: AppealServices,
        student: Principal,
        admin: Principal,
        fake_time: FakeTimeAuthority,
    ) -> None:
        soon = await _file(services, student)
        later = await _file(services, student)
        closed = await _file(services, student)
        await _file(services, student)  # no deadline
        now = fake_time.now()
        await services.deadlines.set_deadline(admin, soon.case_key, now + timedelta(days=1))
        await services.deadlines.set_deadline(admin, later.case_key, now + timedelta(days=20))
        await services.deadlines.set_deadline(admin, closed.case_key, now + timedelta(days=1))
        await services.lifecycle.transition(admin, closed.case_key, "resolved")

        fake_time.advance(delta=timedelta(days=1))
        buckets = await services.deadlines.deadline_overview(admin)

        assert [a.case_key for a in buckets.today] == [soon.case_key]
        assert [a.case_key for a in buckets.upcoming] == [later.case_key]
        assert buckets.total == 2
        assert buckets.horizon_days == 7

    @pytest.mark.asyncio
    async def test_overdue_after_time_passes(
        self,
        services: AppealServices,
        student: Principal,
        admin: Principal,
        fake_time: FakeTimeAuthority,
    ) -> None:
        view = await _file(services, student)
        await services.deadlines.set_deadline(
            admin, view.case_key, fake_time.now() + timedelta(days=1)
        )

        fake_time.advance(delta=timedelta(days=3))
        buckets = await services.deadlines.deadline_overview(admin, horizon_days=3)

        assert [a.case_key for a in buckets.overdue] == [view.case_key]
        assert buckets.horizon_days == 3

    @pytest.mark.asyncio
    async def test_negative_horizon_rejected(
        self, services: AppealServices, admin: Principal
    ) -> None:
        with pytest.raises(AppealValidationError):
            await services.deadlines.deadline_overview(admin, horizon_days=-2)

    @pytest.mark.asyncio
    async def test_admin_only(self, services: AppealServices, reviewer: Principal) -> None:
        with pytest.raises(AccessDeniedError):
            await services.deadlines.deadline_overview(reviewer)


class TestConfiguredHorizon:
    @pytest.fixture
    def engine_config(self) -> AppealEngineConfig:
        return AppealEngineConfig(deadline_horizon_days=30)

    @pytest.mark.asyncio
    async def test_horizon_defaults_to_config(
        self,
        services: AppealServices,
        student: Principal,
        admin: Principal,
        fake_time: FakeTimeAuthority,
    ) -> None:
        view = await _file(services, student)
        await services.deadlines.set_deadline(
            admin, view.case_key, fake_time.now() + timedelta(days=20)
        )

        buckets = await services.deadlines.deadline_overview(admin)

        assert [a.case_key for a in buckets.this_week] == [view.case_key]
