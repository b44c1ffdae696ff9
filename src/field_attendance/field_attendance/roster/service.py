from __future__ import annotations

from collections import Counter
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import month_dates, now_utc
from ..common.validators import require_non_empty
from ..core.enums import Purpose, Role
from ..core.exceptions import ValidationError
from ..attendance.repository import AttendanceRepository
from ..users.model import User
from ..users.repository import UserRepository
from .model import RegionMonthMatrix, RosterExclusions, VisitCount


def _dedupe_by_email(users: Iterable[User]) -> list[User]:
    seen: set[str] = set()
    out: list[User] = []
    for u in users:
        key = u.email.strip().lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(u)
    return out


class RosterService:
    """Cross-user, read-only snapshots of one day's attendance.

    Nothing is locked: an event written while a scan runs may or may not be counted.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        exclusions: Optional[RosterExclusions] = None,
    ):
        self._attendance = attendance
        self._users = users
        self._exclusions = exclusions or RosterExclusions()

    @staticmethod
    def _today(today: date | None) -> date:
        return today or now_utc().date()

    def _user_ids_with_purpose(self, day: date, purpose: Purpose) -> set[int]:
        events = self._attendance.list_for_dates(start_date=day, end_date=day)
        return {e.user_id for e in events if e.purpose == purpose.value}

    def _eligible_roster(self) -> list[User]:
        return [u for u in self._users.list_active_by_role(Role.USER) if not self._exclusions.excludes_region(u.region)]

    def _users_missing(self, day: date, purpose: Purpose) -> list[User]:
        accounted = self._user_ids_with_purpose(day, purpose) | self._user_ids_with_purpose(day, Purpose.ON_LEAVE)
        missing = (
            u
            for u in self._eligible_roster()
            if u.user_id not in accounted and not self._exclusions.excludes_email(u.email)
        )
        return _dedupe_by_email(missing)

    def users_without_check_in(self, today: date | None = None) -> list[User]:
        return self._users_missing(self._today(today), Purpose.CHECK_IN)

    def users_without_check_out(self, today: date | None = None) -> list[User]:
        return self._users_missing(self._today(today), Purpose.CHECK_OUT)

    def users_on_leave(self, today: date | None = None) -> list[User]:
        ids = self._user_ids_with_purpose(self._today(today), Purpose.ON_LEAVE)
        users = sorted(self._users.get_many(ids), key=lambda u: u.user_id)
        return _dedupe_by_email(users)

    def users_without_any_attendance(self, today: date | None = None) -> list[User]:
        day = self._today(today)
        present = {e.user_id for e in self._attendance.list_for_dates(start_date=day, end_date=day)}
        return [u for u in self._eligible_roster() if u.user_id not in present]

    def user_visit_counts(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        *,
        now: datetime | None = None,
    ) -> list[VisitCount]:
        """Visits (events whose purpose is not reserved) per user per day, oldest day first.

        With no dates the range is today; with only ``start_date`` it is that single day.
        """
        start_date = start_date or (now or now_utc()).date()
        end_date = end_date or start_date
        if end_date < start_date:
            raise ValidationError("endDate must not be before startDate")

        events = self._attendance.list_for_dates(start_date=start_date, end_date=end_date)
        counts = Counter((e.user_id, e.event_date) for e in events if e.is_visit)
        users = {u.user_id: u for u in self._users.get_many({uid for uid, _ in counts})}

        rows = [
            VisitCount(visit_date=day, user=users[uid], visits=n)
            for (uid, day), n in counts.items()
            if uid in users
        ]
        rows.sort(key=lambda r: (r.visit_date, r.user.full_name.lower(), r.user.user_id))
        return rows

    def region_month_matrix(self, region: str, *, now: datetime | None = None) -> RegionMonthMatrix:
        """Event counts per day of the current month for every field user of ``region``."""
        region = require_non_empty(region, "State")
        dates = month_dates(now or now_utc())
        users: Sequence[User] = self._users.list_active_by_role(Role.USER, region=region)

        events = self._attendance.list_for_dates(start_date=dates[0], end_date=dates[-1])
        wanted = {u.user_id for u in users}
        counts = Counter((e.user_id, e.event_date) for e in events if e.user_id in wanted)

        rows = []
        for u in users:
            by_date = [
                {"date": d.isoformat(), "count": counts[(u.user_id, d)]}
                for d in dates
                if counts[(u.user_id, d)]
            ]
            rows.append({"userId": u.user_id, "fullName": u.full_name, "email": u.email, "attendanceByDate": by_date})
        return RegionMonthMatrix(dates=dates, rows=rows)
