from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.geo import GeoPoint
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceEvent, NewAttendanceEvent
from .repository import AttendanceRepository

_SELECT = """
    SELECT event_id, user_id, event_time, event_date, lat, lng, location_name,
           purpose, sub_purpose, image_url, feedback
    FROM attendance_events
"""


def _to_event(r: dict) -> AttendanceEvent:
    return AttendanceEvent(
        event_id=int(r["event_id"]),
        user_id=int(r["user_id"]),
        timestamp=r["event_time"],
        event_date=r["event_date"],
        location=GeoPoint(lat=float(r["lat"]), lng=float(r["lng"])),
        location_name=r["location_name"],
        purpose=r["purpose"],
        image_url=r["image_url"],
        sub_purpose=r.get("sub_purpose"),
        feedback=r.get("feedback"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _query(self, where: str, params: tuple) -> Sequence[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE {where} ORDER BY event_time ASC, event_id ASC", params)
            return [_to_event(r) for r in fetchall(cur)]

    def add_event(self, new_event: NewAttendanceEvent) -> AttendanceEvent:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_events(
                    user_id, event_time, event_date, lat, lng, location_name,
                    purpose, sub_purpose, image_url, feedback
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(new_event.user_id),
                    new_event.timestamp,
                    new_event.event_date,
                    new_event.location.lat,
                    new_event.location.lng,
                    new_event.location_name,
                    new_event.purpose,
                    new_event.sub_purpose,
                    new_event.image_url,
                    new_event.feedback,
                ),
            )
            event_id = int(cur.lastrowid)

        return AttendanceEvent(
            event_id=event_id,
            user_id=new_event.user_id,
            timestamp=new_event.timestamp,
            event_date=new_event.event_date,
            location=new_event.location,
            location_name=new_event.location_name,
            purpose=new_event.purpose,
            image_url=new_event.image_url,
            sub_purpose=new_event.sub_purpose,
            feedback=new_event.feedback,
        )

    def list_for_user(self, user_id: int) -> Sequence[AttendanceEvent]:
        return self._query("user_id=%s", (int(user_id),))

    def list_for_user_between(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[AttendanceEvent]:
        return self._query("user_id=%s AND event_time >= %s AND event_time < %s", (int(user_id), start, end))

    def list_for_user_through(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[AttendanceEvent]:
        return self._query("user_id=%s AND event_time BETWEEN %s AND %s", (int(user_id), start, end))

    def list_through(
        self,
        *,
        start: datetime,
        end: datetime,
        user_ids: Optional[Iterable[int]] = None,
    ) -> Sequence[AttendanceEvent]:
        clauses = ["event_time BETWEEN %s AND %s"]
        params: list[object] = [start, end]

        if user_ids is not None:
            ids = sorted({int(i) for i in user_ids})
            if not ids:
                return []
            clauses.append(f"user_id IN ({','.join(['%s'] * len(ids))})")
            params.extend(ids)

        return self._query(" AND ".join(clauses), tuple(params))

    def list_for_dates(self, *, start_date: date, end_date: date) -> Sequence[AttendanceEvent]:
        return self._query("event_date BETWEEN %s AND %s", (start_date, end_date))
