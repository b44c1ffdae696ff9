from datetime import date, datetime

import pytest

from src.field_attendance.field_attendance.common.datetime_utils import (
    day_bounds,
    days_left_in_month,
    end_of_day,
    month_dates,
    parse_holidays,
    parse_iso_date,
)
from src.field_attendance.field_attendance.core.exceptions import ValidationError


def test_parse_iso_date_rejects_garbage():
    assert parse_iso_date(" 2026-02-10 ") == date(2026, 2, 10)
    with pytest.raises(ValidationError):
        parse_iso_date("10/02/2026", "startDate")
    with pytest.raises(ValidationError):
        parse_iso_date(None)


def test_day_bounds_are_half_open():
    start, end = day_bounds(date(2026, 2, 28))
    assert start == datetime(2026, 2, 28)
    assert end == datetime(2026, 3, 1)


def test_end_of_day_keeps_millisecond_precision():
    assert end_of_day(date(2026, 2, 10)) == datetime(2026, 2, 10, 23, 59, 59, 999000)


def test_parse_holidays_ignores_blanks_and_dedupes():
    holidays = parse_holidays("2026-09-05, ,2026-09-15,2026-09-05,")
    assert holidays == frozenset({date(2026, 9, 5), date(2026, 9, 15)})
    assert parse_holidays("") == frozenset()
    assert parse_holidays(None) == frozenset()


def test_parse_holidays_rejects_malformed_item():
    with pytest.raises(ValidationError):
        parse_holidays("2026-09-05,tomorrow")


@pytest.mark.parametrize(
    "now, expected",
    [
        (datetime(2026, 9, 10, 12, 0), 20),
        (datetime(2026, 9, 29, 0, 0), 1),
        (datetime(2026, 9, 30, 0, 0), 0),
        (datetime(2026, 9, 30, 12, 0), 0),
        (datetime(2026, 2, 1, 0, 0), 27),
    ],
)
def test_days_left_in_month(now, expected):
    assert days_left_in_month(now) == expected


def test_month_dates_covers_leap_february():
    dates = month_dates(datetime(2028, 2, 14, 9, 0))
    assert dates[0] == date(2028, 2, 1)
    assert dates[-1] == date(2028, 2, 29)
    assert len(dates) == 29
