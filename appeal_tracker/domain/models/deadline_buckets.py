"""Deadline bucket model for operational triage.

Outstanding cases with a deadline are grouped relative to "today"
(UTC date) so staff can see what is overdue and what is coming up.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Generic, TypeVar

from appeal_tracker.domain.models.appeal import Appeal
from appeal_tracker.domain.models.appeal_view import AppealView

# Stored aggregates inside the domain, role-filtered views at the service edge
CaseT = TypeVar("CaseT", Appeal, AppealView)


class DeadlineBucket(Enum):
    """Time-relative group a deadline falls into.

    Buckets:
        OVERDUE: Deadline date before today.
        TODAY: Deadline date is today.
        TOMORROW: Deadline date is tomorrow.
        THIS_WEEK: After tomorrow, up to today + horizon days.
        UPCOMING: Beyond both tomorrow and the horizon.
    """

    OVERDUE = "overdue"
    TODAY = "today"
    TOMORROW = "tomorrow"
    THIS_WEEK = "this_week"
    UPCOMING = "upcoming"


@dataclass(frozen=True)
class DeadlineBuckets(Generic[CaseT]):
    """Cases partitioned by deadline bucket.

    Attributes:
        reference_date: The UTC date treated as "today".
        horizon_days: Days ahead that count as this week.
        buckets: Cases per bucket, ordered by deadline then case_id.
    """

    reference_date: date
    horizon_days: int
    buckets: dict[DeadlineBucket, tuple[CaseT, ...]] = field(default_factory=dict)

    def get(self, bucket: DeadlineBucket) -> tuple[CaseT, ...]:
        """Cases in one bucket (empty tuple if none)."""
        return self.buckets.get(bucket, ())

    @property
    def overdue(self) -> tuple[CaseT, ...]:
        return self.get(DeadlineBucket.OVERDUE)

    @property
    def today(self) -> tuple[CaseT, ...]:
        return self.get(DeadlineBucket.TODAY)

    @property
    def tomorrow(self) -> tuple[CaseT, ...]:
        return self.get(DeadlineBucket.TOMORROW)

    @property
    def this_week(self) -> tuple[CaseT, ...]:
        return self.get(DeadlineBucket.THIS_WEEK)

    @property
    def upcoming(self) -> tuple[CaseT, ...]:
        return self.get(DeadlineBucket.UPCOMING)

    def counts(self) -> dict[str, int]:
        """Number of cases per bucket, keyed by bucket value."""
        return {bucket.value: len(self.get(bucket)) for bucket in DeadlineBucket}

    @property
    def total(self) -> int:
        return sum(len(cases) for cases in self.buckets.values())
