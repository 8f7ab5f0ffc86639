"""Clock port for the appeal services.

Services never call datetime.now(). Timeline timestamps, deadline
checks, deadline buckets, the case id year and the fallback case id
digits all read the injected clock, which is SystemTimeAuthority in
production and FakeTimeAuthority (tests/helpers) in tests.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Source of "now" for the engine."""

    @abstractmethod
    def now(self) -> datetime:
        """Current moment as a timezone-aware UTC datetime."""
        ...

    def epoch_millis(self) -> int:
        """Milliseconds since the Unix epoch, used by the case id fallback."""
        return int(self.now().timestamp() * 1000)
