"""Application ports - Abstract interfaces for infrastructure adapters.

Ports enable dependency inversion and make the application layer testable.

Available ports:
- AppealRepositoryProtocol: Appeal storage with compare-and-swap writes
- TimeAuthorityProtocol: Injectable source of "now"
"""

from appeal_tracker.application.ports.appeal_repository import (
    AppealRepositoryProtocol,
)
from appeal_tracker.application.ports.time_authority import TimeAuthorityProtocol

__all__: list[str] = ["AppealRepositoryProtocol", "TimeAuthorityProtocol"]
