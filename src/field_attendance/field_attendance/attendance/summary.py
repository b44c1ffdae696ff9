from __future__ import annotations

from datetime import date, datetime
from typing import Iterable

from ..common.datetime_utils import days_left_in_month, end_of_day, start_of_day
from .model import AttendanceEvent, AttendanceSummary


def summarize_attendance(
    events: Iterable[AttendanceEvent],
    *,
    start_date: date,
    end_date: date,
    holidays: frozenset[date],
    now: datetime,
) -> AttendanceSummary:
    """Present/absent day counts for ``[start_date, end_date]``.

    absent = max(0, work_days - present_days - days_left_in_current_month + future_holidays)

    The remaining days of the *current* month are subtracted whatever the queried range is,
    so the result depends on ``now``.
    """
    range_end = end_of_day(end_date)

    present_days = len({e.event_date for e in events})
    total_days = (end_date - start_date).days + 1
    work_days = total_days - len(holidays)

    future_holidays = sum(1 for h in holidays if now < start_of_day(h) <= range_end)

    absent_days = work_days - present_days - days_left_in_month(now) + future_holidays
    return AttendanceSummary(
        holidays=len(holidays),
        present_days=present_days,
        work_days=work_days,
        absent_days=max(0, absent_days),
        future_holidays=future_holidays,
    )
