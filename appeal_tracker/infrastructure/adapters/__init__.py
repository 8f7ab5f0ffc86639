"""Infrastructure adapters - production implementations of application ports."""

from appeal_tracker.infrastructure.adapters.system_time_authority import (
    SystemTimeAuthority,
)

__all__: list[str] = ["SystemTimeAuthority"]
