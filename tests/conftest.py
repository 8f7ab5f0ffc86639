"""
Pytest configuration and shared fixtures for appeal tracker tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async function mocking
- Time-dependent tests use FakeTimeAuthority
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from __future__ import annotations

import pytest

from appeal_tracker.bootstrap.appeal_services import (
    AppealServices,
    build_appeal_services,
)
from appeal_tracker.config.appeal_config import (
    DEFAULT_APPEAL_ENGINE_CONFIG,
    AppealEngineConfig,
)
from appeal_tracker.domain.models.principal import Principal, Role
from appeal_tracker.infrastructure.stubs.appeal_repository_stub import (
    AppealRepositoryStub,
)
from tests.helpers.appeal_builders import (
    DEFAULT_STUDENT_NUMBER,
    SequenceCodeSource,
    make_principal,
)
from tests.helpers.fake_time_authority import FakeTimeAuthority


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from appeal_tracker import __version__

    return __version__


@pytest.fixture
def fake_time() -> FakeTimeAuthority:
    """Frozen clock at 2026-03-02T09:00:00Z."""
    return FakeTimeAuthority()


@pytest.fixture
def repository() -> AppealRepositoryStub:
    return AppealRepositoryStub()


@pytest.fixture
def engine_config() -> AppealEngineConfig:
    """Engine configuration; override in a test module to change policy."""
    return DEFAULT_APPEAL_ENGINE_CONFIG


@pytest.fixture
def code_source() -> SequenceCodeSource:
    """Distinct codes, one per allocation."""
    return SequenceCodeSource(f"{n:06d}" for n in range(100001, 100101))


@pytest.fixture
def services(
    repository: AppealRepositoryStub,
    fake_time: FakeTimeAuthority,
    engine_config: AppealEngineConfig,
    code_source: SequenceCodeSource,
) -> AppealServices:
    return build_appeal_services(repository, fake_time, engine_config, code_source)


@pytest.fixture
def student() -> Principal:
    return make_principal(
        Role.STUDENT,
        "student-ada",
        display_name="Ada Lovelace",
        student_number=DEFAULT_STUDENT_NUMBER,
    )


@pytest.fixture
def other_student() -> Principal:
    return make_principal(Role.STUDENT, "student-bob", student_number="S7654321")


@pytest.fixture
def admin() -> Principal:
    return make_principal(Role.ADMIN, "admin-grace", display_name="Grace Hopper")


@pytest.fixture
def reviewer() -> Principal:
    return make_principal(Role.REVIEWER, "reviewer-alan", display_name="Alan Turing")


@pytest.fixture
def other_reviewer() -> Principal:
    return make_principal(Role.REVIEWER, "reviewer-edsger")
