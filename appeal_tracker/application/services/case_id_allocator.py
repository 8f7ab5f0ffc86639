"""Case identifier allocator.

Produces human-readable case ids of the form <prefix>-<year>-<6 digits>,
e.g. APL-2026-004217.

Allocation runs a bounded loop:
1. Draw a 6-digit code from the code source and probe the store.
2. Return the first candidate that is not taken.
3. After max_attempts collisions, derive the code from the last six
   digits of the epoch milliseconds and flag the allocation with
   CaseIdRetryExhaustedError as its fallback_reason.

The store's unique claim in save_new() remains the final arbiter: a
probe can race with another creation, which the lifecycle service
handles by allocating again.
"""

from __future__ import annotations

import re
import secrets
from collections.abc import Callable
from dataclasses import dataclass

from appeal_tracker.application.ports.appeal_repository import (
    AppealRepositoryProtocol,
)
from appeal_tracker.application.ports.time_authority import TimeAuthorityProtocol
from appeal_tracker.application.services.base import LoggingMixin
from appeal_tracker.config.appeal_config import (
    DEFAULT_APPEAL_ENGINE_CONFIG,
    AppealEngineConfig,
)
from appeal_tracker.domain.errors.case_id import (
    CaseIdAllocationError,
    CaseIdRetryExhaustedError,
)

CodeSource = Callable[[], str]

CODE_DIGITS = 6


def random_case_code() -> str:
    """Uniformly random zero-padded 6-digit code."""
    return f"{secrets.randbelow(10**CODE_DIGITS):0{CODE_DIGITS}d}"


@dataclass(frozen=True)
class CaseIdAllocation:
    """Result of one allocation.

    Attributes:
        case_id: The allocated identifier.
        attempts: Random candidates drawn.
        fallback_reason: Set when the timestamp fallback was used.
    """

    case_id: str
    attempts: int
    fallback_reason: CaseIdRetryExhaustedError | None = None

    @property
    def used_fallback(self) -> bool:
        return self.fallback_reason is not None


class CaseIdAllocator(LoggingMixin):
    """Allocates unique case ids against the appeal store."""

    def __init__(
        self,
        repository: AppealRepositoryProtocol,
        time_authority: TimeAuthorityProtocol,
        config: AppealEngineConfig = DEFAULT_APPEAL_ENGINE_CONFIG,
        code_source: CodeSource | None = None,
    ) -> None:
        self._repository = repository
        self._time = time_authority
        self._config = config
        self._code_source = code_source or random_case_code
        self._pattern = re.compile(
            rf"^{re.escape(config.case_id_prefix)}-\d{{4}}-\d{{{CODE_DIGITS}}}$"
        )
        self._init_logger()

    def format_case_id(self, year: int, code: str) -> str:
        """Build and validate a case id.

        Raises:
            CaseIdAllocationError: If the result is not well-formed.
        """
        case_id = f"{self._config.case_id_prefix}-{year:04d}-{code}"
        if not self._pattern.match(case_id):
            raise CaseIdAllocationError(f"malformed candidate {case_id!r}")
        return case_id

    async def allocate(self) -> CaseIdAllocation:
        """Allocate a case id that is not currently taken.

        Returns:
            CaseIdAllocation; fallback_reason is set on the fallback path.

        Raises:
            CaseIdAllocationError: If a candidate is malformed.
        """
        log = self._log_operation("allocate_case_id")
        year = self._time.now().year
        max_attempts = self._config.case_id_max_attempts

        for attempt in range(1, max_attempts + 1):
            candidate = self.format_case_id(year, self._code_source())
            if not await self._repository.exists_case_id(candidate):
                log.debug("case_id_allocated", case_id=candidate, attempts=attempt)
                return CaseIdAllocation(case_id=candidate, attempts=attempt)
            log.debug("case_id_collision", case_id=candidate, attempt=attempt)

        code = f"{self._time.epoch_millis() % 10**CODE_DIGITS:0{CODE_DIGITS}d}"
        fallback = self.format_case_id(year, code)
        reason = CaseIdRetryExhaustedError(attempts=max_attempts, fallback_case_id=fallback)
        log.warning("case_id_fallback_used", case_id=fallback, attempts=max_attempts)
        return CaseIdAllocation(
            case_id=fallback, attempts=max_attempts, fallback_reason=reason
        )
