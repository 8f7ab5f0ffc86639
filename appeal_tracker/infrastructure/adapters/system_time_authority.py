"""System clock implementation of TimeAuthorityProtocol."""

from datetime import datetime, timezone

from appeal_tracker.application.ports.time_authority import TimeAuthorityProtocol


class SystemTimeAuthority(TimeAuthorityProtocol):
    """Time authority backed by the host's wall clock (UTC)."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
