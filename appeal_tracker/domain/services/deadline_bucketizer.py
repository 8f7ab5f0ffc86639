"""Deadline bucketing domain service.

Pure classification of deadline-bearing cases into time-relative
buckets. Both "now" and each deadline are truncated to their UTC date
before comparison, so a deadline later today is TODAY, not upcoming.

Bucket boundaries, with today = now.date():
- OVERDUE:   deadline < today
- TODAY:     deadline == today
- TOMORROW:  deadline == today + 1
- THIS_WEEK: today + 1 < deadline <= today + horizon_days
- UPCOMING:  deadline beyond both tomorrow and the horizon

Every case with a deadline lands in exactly one bucket; cases without
a deadline land in none.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta, timezone

from appeal_tracker.domain.errors.validation import AppealValidationError
from appeal_tracker.domain.models.deadline_buckets import (
    CaseT,
    DeadlineBucket,
    DeadlineBuckets,
)


def utc_date(moment: datetime) -> date:
    """Truncate a datetime to its UTC calendar date.

    Naive datetimes are assumed to already be UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).date()


def classify_deadline(deadline: datetime, today: date, horizon_days: int) -> DeadlineBucket:
    """Classify one deadline relative to today.

    Args:
        deadline: The deadline to classify.
        today: Reference UTC date.
        horizon_days: Days ahead that count as this week.

    Returns:
        The single bucket the deadline belongs to.
    """
    due = utc_date(deadline)
    if due < today:
        return DeadlineBucket.OVERDUE
    if due == today:
        return DeadlineBucket.TODAY
    if due == today + timedelta(days=1):
        return DeadlineBucket.TOMORROW
    if due <= today + timedelta(days=horizon_days):
        return DeadlineBucket.THIS_WEEK
    return DeadlineBucket.UPCOMING


def _deadline_order(appeal: CaseT) -> tuple[datetime, str]:
    assert appeal.deadline is not None
    return appeal.deadline, appeal.case_id


def bucketize(
    appeals: Iterable[CaseT],
    horizon_days: int,
    now: datetime,
) -> DeadlineBuckets[CaseT]:
    """Partition cases with deadlines into time-relative buckets.

    Deterministic: the same inputs always give the same buckets, each
    ordered by deadline and then case_id.

    Args:
        appeals: Cases to classify; those without a deadline are skipped.
        horizon_days: Days ahead that count as this week (>= 0).
        now: Reference time.

    Returns:
        DeadlineBuckets holding every bucket, empty ones included.

    Raises:
        AppealValidationError: If horizon_days is negative.
    """
    if horizon_days < 0:
        raise AppealValidationError(
            "horizon_days", f"must be non-negative, got {horizon_days}"
        )

    today = utc_date(now)
    grouped: dict[DeadlineBucket, list[CaseT]] = {b: [] for b in DeadlineBucket}
    for appeal in appeals:
        if appeal.deadline is None:
            continue
        grouped[classify_deadline(appeal.deadline, today, horizon_days)].append(appeal)

    return DeadlineBuckets(
        reference_date=today,
        horizon_days=horizon_days,
        buckets={
            bucket: tuple(sorted(cases, key=_deadline_order))
            for bucket, cases in grouped.items()
        },
    )
