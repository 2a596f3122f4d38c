from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Optional, Union

from taskmind.models import DueDateStatus

DateLike = Union[date, datetime]

_DAY_MS = 86_400_000
_HOUR_MS = 3_600_000


def _to_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def _align(due: datetime, now: datetime) -> tuple:
    # mixed naive/aware inputs are compared in local time
    if due.tzinfo is None and now.tzinfo is None:
        return due, now
    if due.tzinfo is not None and now.tzinfo is not None:
        return due, now.astimezone(due.tzinfo)
    if due.tzinfo is not None:
        due = due.astimezone().replace(tzinfo=None)
    else:
        now = now.astimezone().replace(tzinfo=None)
    return due, now


def start_of_day(value: DateLike) -> datetime:
    """Midnight at the start of ``value``'s calendar day (tzinfo is kept)."""
    dt = _to_datetime(value)
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def _diff_ms(later: datetime, earlier: datetime) -> float:
    return (later - earlier) / timedelta(milliseconds=1)


def days_between(target: DateLike, today: DateLike) -> int:
    """Whole days from the start of ``today`` to ``target``, rounded up."""
    target_dt, today_dt = _align(_to_datetime(target), _to_datetime(today))
    return math.ceil(_diff_ms(target_dt, start_of_day(today_dt)) / _DAY_MS)


def classify(due: DateLike, now: Optional[datetime] = None) -> DueDateStatus:
    """Map a due timestamp to an urgency bucket relative to ``now``.

    Day distances count midnight boundaries crossed between ``now`` and
    ``due``; hour distances are rounded up.

    Buckets are checked in order and the first match wins:

      overdue        due is in the past                      (high)
      due-soon       same calendar day, 0 < delta <= 2h      (high)
      due-today      same calendar day                       (medium)
      due-tomorrow   next calendar day                       (medium)
      due-this-week  up to seven calendar days ahead         (low)
      future         anything later                          (low)

    ``now`` defaults to the wall clock; pass it explicitly for repeatable
    results. Callers that refresh a view re-invoke this on their own timer.
    """
    due_dt = _to_datetime(due)
    if now is None:
        now = datetime.now(due_dt.tzinfo)
    due_dt, now = _align(due_dt, now)

    diff_ms = _diff_ms(due_dt, now)
    diff_days = (due_dt.date() - now.date()).days
    diff_hours = math.ceil(diff_ms / _HOUR_MS)

    if diff_ms < 0:
        overdue_days = abs(diff_days)
        label = "Overdue today" if overdue_days == 0 else f"{overdue_days}d overdue"
        return DueDateStatus(status="overdue", urgency="high", label=label)

    if diff_days == 0:
        # a deadline landing exactly on "now" reads as today, not soon
        if 0 < diff_hours <= 2:
            return DueDateStatus(status="due-soon", urgency="high", label="Due soon")
        return DueDateStatus(status="due-today", urgency="medium", label="Due today")

    if diff_days == 1:
        return DueDateStatus(status="due-tomorrow", urgency="medium", label="Due tomorrow")

    if diff_days <= 7:
        return DueDateStatus(
            status="due-this-week", urgency="low", label=f"{diff_days} days left"
        )

    return DueDateStatus(status="future", urgency="low", label=due_dt.strftime("%x"))
