"""Unit tests for appeal service bootstrap wiring."""

from __future__ import annotations

import os
from collections.abc import Iterator
from unittest.mock import patch

import pytest
import structlog

from appeal_tracker.bootstrap import appeal_services as bootstrap
from appeal_tracker.bootstrap.logging import configure_structlog
from appeal_tracker.config.appeal_config import (
    PERMISSIVE_REVIEWER_CONFIG,
    AppealEngineConfig,
)
from appeal_tracker.domain.models.principal import Role
from appeal_tracker.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)
from appeal_tracker.infrastructure.stubs.appeal_repository_stub import (
    AppealRepositoryStub,
)
from tests.helpers.appeal_builders import make_principal, submission_payload
from tests.helpers.fake_time_authority import FakeTimeAuthority


@pytest.fixture(autouse=True)
def _reset() -> Iterator[None]:
    bootstrap.reset_appeal_dependencies()
    yield
    bootstrap.reset_appeal_dependencies()


class TestDefaults:
    def test_defaults_are_lazy_singletons(self) -> None:
        repository = bootstrap.get_appeal_repository()

        assert isinstance(repository, AppealRepositoryStub)
        assert bootstrap.get_appeal_repository() is repository
        assert isinstance(bootstrap.get_time_authority(), SystemTimeAuthority)
        assert bootstrap.get_appeal_services() is bootstrap.get_appeal_services()

    def test_config_read_from_environment(self) -> None:
        with patch.dict(os.environ, {"APPEAL_CASE_ID_PREFIX": "UOA"}, clear=True):
            config = bootstrap.get_appeal_engine_config()

        assert config.case_id_prefix == "UOA"

    def test_reset_drops_singletons(self) -> None:
        services = bootstrap.get_appeal_services()

        bootstrap.reset_appeal_dependencies()

        assert bootstrap.get_appeal_services() is not services


class TestOverrides:
    def test_setters_rebuild_services(self) -> None:
        first = bootstrap.get_appeal_services()
        repository = AppealRepositoryStub()

        bootstrap.set_appeal_repository(repository)
        bootstrap.set_time_authority(FakeTimeAuthority())
        bootstrap.set_appeal_engine_config(PERMISSIVE_REVIEWER_CONFIG)

        assert bootstrap.get_appeal_services() is not first
        assert bootstrap.get_appeal_repository() is repository
        assert bootstrap.get_appeal_engine_config() is PERMISSIVE_REVIEWER_CONFIG

    @pytest.mark.asyncio
    async def test_wired_services_share_store_and_clock(self) -> None:
        repository = AppealRepositoryStub()
        fake_time = FakeTimeAuthority()
        bootstrap.set_appeal_repository(repository)
        bootstrap.set_time_authority(fake_time)
        bootstrap.set_appeal_engine_config(AppealEngineConfig(case_id_prefix="UOA"))
        services = bootstrap.get_appeal_services()
        student = make_principal(Role.STUDENT, student_number="S1234567")

        view = await services.lifecycle.create_appeal(student, submission_payload())

        assert view.case_id.startswith("UOA-2026-")
        assert repository.count() == 1
        assert view.submitted_at == fake_time.now()


class TestLoggingBootstrap:
    def test_configures_renderer(self) -> None:
        try:
            configure_structlog("development")
            processors = structlog.get_config()["processors"]
            assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
        finally:
            structlog.reset_defaults()
