from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Protocol, Sequence

from .model import AttendanceEvent, NewAttendanceEvent


class AttendanceRepository(Protocol):
    """Append-only event log. Every list is ordered by ascending timestamp."""

    def add_event(self, new_event: NewAttendanceEvent) -> AttendanceEvent:
        raise NotImplementedError

    def list_for_user(self, user_id: int) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def list_for_user_between(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[AttendanceEvent]:
        """Events with ``start <= timestamp < end``."""

        raise NotImplementedError

    def list_for_user_through(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[AttendanceEvent]:
        """Events with ``start <= timestamp <= end``."""

        raise NotImplementedError

    def list_through(
        self,
        *,
        start: datetime,
        end: datetime,
        user_ids: Optional[Iterable[int]] = None,
    ) -> Sequence[AttendanceEvent]:
        """Events of many users with ``start <= timestamp <= end``; all users when ``user_ids`` is None."""

        raise NotImplementedError

    def list_for_dates(self, *, start_date: date, end_date: date) -> Sequence[AttendanceEvent]:
        """Events of all users whose stored ``event_date`` is within ``[start_date, end_date]``."""

        raise NotImplementedError
