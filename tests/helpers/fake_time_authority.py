"""Frozen clock for appeal tests.

Case id years, fallback digits, timeline timestamps and deadline
buckets all read "now" from the injected time authority, so a frozen
clock makes every one of them deterministic.

    fake_time = FakeTimeAuthority()            # Monday 2026-03-02 09:00 UTC
    fake_time.advance(delta=timedelta(days=2)) # deadlines move toward overdue
    fake_time.set_time(datetime(2031, 1, 1))   # naive values are read as UTC

The `fake_time` fixture in tests/conftest.py provides one per test.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from appeal_tracker.application.ports.time_authority import TimeAuthorityProtocol

DEFAULT_TIME = datetime(2026, 3, 2, 9, 0, 0, tzinfo=timezone.utc)


def _as_utc(moment: datetime) -> datetime:
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=timezone.utc)


class FakeTimeAuthority(TimeAuthorityProtocol):
    """Clock that only moves when a test moves it."""

    def __init__(self, frozen_at: datetime | None = None) -> None:
        self._current_time = _as_utc(frozen_at or DEFAULT_TIME)

    def now(self) -> datetime:
        return self._current_time

    def advance(
        self,
        seconds: float | None = None,
        delta: timedelta | None = None,
    ) -> None:
        """Move the clock forward.

        Args:
            seconds: Amount in seconds.
            delta: Amount as a timedelta; wins over seconds.

        Raises:
            ValueError: Nothing to advance by, or a backwards step.
        """
        if delta is None:
            if seconds is None:
                raise ValueError("advance() needs seconds or delta")
            delta = timedelta(seconds=seconds)
        if delta < timedelta(0):
            raise ValueError(f"clock only moves forward, got {delta}; use set_time()")
        self._current_time += delta

    def set_time(self, moment: datetime) -> None:
        """Jump to an explicit moment, backwards included."""
        self._current_time = _as_utc(moment)

    @property
    def current_time(self) -> datetime:
        return self._current_time

    def __repr__(self) -> str:
        return f"FakeTimeAuthority(current_time={self._current_time.isoformat()})"
