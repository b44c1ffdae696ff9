from datetime import date, datetime, timedelta

from src.field_attendance.field_attendance.attendance.summary import summarize_attendance
from tests.fakes import make_event

SEPTEMBER_HOLIDAYS = frozenset({date(2026, 9, 5), date(2026, 9, 15), date(2026, 9, 20), date(2026, 9, 25)})


def _events_on(days):
    return [make_event(i + 1, 1, datetime.combine(d, datetime.min.time()) + timedelta(hours=9)) for i, d in enumerate(days)]


def test_summary_at_end_of_month():
    present = [date(2026, 9, d) for d in range(1, 21)]

    summary = summarize_attendance(
        _events_on(present),
        start_date=date(2026, 9, 1),
        end_date=date(2026, 9, 30),
        holidays=SEPTEMBER_HOLIDAYS,
        now=datetime(2026, 9, 30, 12, 0),
    )

    assert summary.holidays == 4
    assert summary.work_days == 26
    assert summary.present_days == 20
    assert summary.future_holidays == 0
    assert summary.absent_days == 6


def test_summary_mid_month_counts_future_holidays():
    present = [date(2026, 9, d) for d in (1, 2, 3, 4, 8)]

    summary = summarize_attendance(
        _events_on(present),
        start_date=date(2026, 9, 1),
        end_date=date(2026, 9, 30),
        holidays=SEPTEMBER_HOLIDAYS,
        now=datetime(2026, 9, 10, 12, 0),
    )

    assert summary.future_holidays == 3
    assert summary.absent_days == 4


def test_summary_counts_distinct_days_not_events():
    day = date(2026, 9, 1)
    events = _events_on([day, day, day])

    summary = summarize_attendance(
        events,
        start_date=day,
        end_date=day,
        holidays=frozenset(),
        now=datetime(2026, 9, 30, 23, 0),
    )

    assert summary.present_days == 1
    assert summary.work_days == 1
    assert summary.absent_days == 0


def test_summary_absent_never_negative():
    summary = summarize_attendance(
        [],
        start_date=date(2026, 9, 1),
        end_date=date(2026, 9, 3),
        holidays=frozenset(),
        now=datetime(2026, 9, 2, 8, 0),
    )

    assert summary.work_days == 3
    assert summary.absent_days == 0
    assert summary.to_dict() == {"holidays": 0, "present": 0, "absent": 0, "futureHolidays": 0, "workDays": 3}
