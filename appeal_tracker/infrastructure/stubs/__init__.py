"""Infrastructure stubs for development and testing.

Available stubs:
- AppealRepositoryStub: In-memory appeal store with compare-and-swap writes

WARNING: These stubs are NOT for production use.
"""

from appeal_tracker.infrastructure.stubs.appeal_repository_stub import (
    AppealRepositoryStub,
)

__all__: list[str] = ["AppealRepositoryStub"]
