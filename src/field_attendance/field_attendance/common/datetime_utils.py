from __future__ import annotations

import calendar
import math
from datetime import date, datetime, time, timedelta, timezone

from ..core.exceptions import ValidationError

# Last representable millisecond of a day; MySQL DATETIME(3) keeps milliseconds only.
END_OF_DAY = time(23, 59, 59, 999000)


def parse_iso_date(value: str, field_name: str = "date") -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(str(value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")


def now_utc() -> datetime:
    """Current UTC time as a naive datetime.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, END_OF_DAY)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Half-open UTC bounds ``[00:00, next day 00:00)`` of a calendar day."""
    start = start_of_day(day)
    return start, start + timedelta(days=1)


def parse_holidays(value: str | None) -> frozenset[date]:
    """Parse a comma-separated list of YYYY-MM-DD dates.

    Blank items are ignored; any other malformed item raises ValidationError.
    """
    if not value:
        return frozenset()
    items = [part.strip() for part in value.split(",")]
    return frozenset(parse_iso_date(item, "holiday") for item in items if item)


def days_left_in_month(now: datetime) -> int:
    """Whole days (rounded up) from ``now`` until midnight of the month's last day."""
    last_day = calendar.monthrange(now.year, now.month)[1]
    last_midnight = datetime(now.year, now.month, last_day)
    remaining = (last_midnight - now).total_seconds() / 86400
    return max(0, math.ceil(remaining))


def month_dates(now: datetime) -> list[date]:
    """All calendar dates of the month containing ``now``."""
    last_day = calendar.monthrange(now.year, now.month)[1]
    return [date(now.year, now.month, d) for d in range(1, last_day + 1)]
