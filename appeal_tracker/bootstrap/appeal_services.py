"""Bootstrap wiring for appeal tracker dependencies.

Singletons are created lazily on first use. Tests replace collaborators
with the set_* functions and restore defaults with
reset_appeal_dependencies().
"""

from __future__ import annotations

from dataclasses import dataclass

from structlog import get_logger

from appeal_tracker.application.ports.appeal_repository import (
    AppealRepositoryProtocol,
)
from appeal_tracker.application.ports.time_authority import TimeAuthorityProtocol
from appeal_tracker.application.services.appeal_assignment_service import (
    AppealAssignmentService,
)
from appeal_tracker.application.services.appeal_deadline_service import (
    AppealDeadlineService,
)
from appeal_tracker.application.services.appeal_lifecycle_service import (
    AppealLifecycleService,
)
from appeal_tracker.application.services.appeal_note_service import AppealNoteService
from appeal_tracker.application.services.case_id_allocator import (
    CaseIdAllocator,
    CodeSource,
)
from appeal_tracker.config.appeal_config import AppealEngineConfig
from appeal_tracker.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)
from appeal_tracker.infrastructure.stubs.appeal_repository_stub import (
    AppealRepositoryStub,
)

logger = get_logger()

_appeal_repository: AppealRepositoryProtocol | None = None
_time_authority: TimeAuthorityProtocol | None = None
_appeal_engine_config: AppealEngineConfig | None = None
_appeal_services: AppealServices | None = None


@dataclass(frozen=True)
class AppealServices:
    """The appeal services sharing one store, clock and config."""

    lifecycle: AppealLifecycleService
    notes: AppealNoteService
    assignments: AppealAssignmentService
    deadlines: AppealDeadlineService
    allocator: CaseIdAllocator


def build_appeal_services(
    repository: AppealRepositoryProtocol,
    time_authority: TimeAuthorityProtocol,
    config: AppealEngineConfig,
    code_source: CodeSource | None = None,
) -> AppealServices:
    """Wire every appeal service around the given collaborators."""
    allocator = CaseIdAllocator(repository, time_authority, config, code_source)
    return AppealServices(
        lifecycle=AppealLifecycleService(repository, time_authority, allocator, config),
        notes=AppealNoteService(repository, time_authority, config),
        assignments=AppealAssignmentService(repository, time_authority, config),
        deadlines=AppealDeadlineService(repository, time_authority, config),
        allocator=allocator,
    )


def get_appeal_engine_config() -> AppealEngineConfig:
    """Get appeal engine configuration."""
    global _appeal_engine_config
    if _appeal_engine_config is None:
        _appeal_engine_config = AppealEngineConfig.from_environment()
    return _appeal_engine_config


def get_appeal_repository() -> AppealRepositoryProtocol:
    """Get appeal repository instance.

    Only the in-memory store ships with the engine; a persistent store
    is injected with set_appeal_repository().
    """
    global _appeal_repository
    if _appeal_repository is None:
        logger.warning(
            "appeal_repository_initialized",
            repository_type="InMemoryStub",
            message="No repository injected - using in-memory stub (data will not persist)",
        )
        _appeal_repository = AppealRepositoryStub()
    return _appeal_repository


def get_time_authority() -> TimeAuthorityProtocol:
    """Get time authority instance."""
    global _time_authority
    if _time_authority is None:
        _time_authority = SystemTimeAuthority()
    return _time_authority


def get_appeal_services() -> AppealServices:
    """Get the wired appeal services."""
    global _appeal_services
    if _appeal_services is None:
        config = get_appeal_engine_config()
        _appeal_services = build_appeal_services(
            repository=get_appeal_repository(),
            time_authority=get_time_authority(),
            config=config,
        )
        logger.info(
            "appeal_services_initialized",
            allow_unassigned_reviewer_access=config.allow_unassigned_reviewer_access,
            case_id_prefix=config.case_id_prefix,
        )
    return _appeal_services


def set_appeal_repository(repository: AppealRepositoryProtocol) -> None:
    """Set custom appeal repository (persistent store or test double)."""
    global _appeal_repository, _appeal_services
    _appeal_repository = repository
    _appeal_services = None


def set_time_authority(time_authority: TimeAuthorityProtocol) -> None:
    """Set custom time authority for testing."""
    global _time_authority, _appeal_services
    _time_authority = time_authority
    _appeal_services = None


def set_appeal_engine_config(config: AppealEngineConfig) -> None:
    """Set custom engine configuration."""
    global _appeal_engine_config, _appeal_services
    _appeal_engine_config = config
    _appeal_services = None


def reset_appeal_dependencies() -> None:
    """Reset appeal dependency singletons."""
    global _appeal_repository
    global _time_authority
    global _appeal_engine_config
    global _appeal_services

    _appeal_repository = None
    _time_authority = None
    _appeal_engine_config = None
    _appeal_services = None
