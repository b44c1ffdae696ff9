"""In-memory stand-ins for the repositories and outbound clients."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional

from src.field_attendance.field_attendance.attendance.model import AttendanceEvent, NewAttendanceEvent
from src.field_attendance.field_attendance.common.geo import GeoPoint
from src.field_attendance.field_attendance.core.constants import UNKNOWN_LOCATION
from src.field_attendance.field_attendance.core.enums import Role
from src.field_attendance.field_attendance.core.exceptions import PersistenceError, UpstreamError
from src.field_attendance.field_attendance.distance.model import DistanceSummary
from src.field_attendance.field_attendance.integrations.mapping import MatrixElement
from src.field_attendance.field_attendance.users.model import User


class InMemoryUsers:
    def __init__(self, users: Iterable[User] = ()):
        self.users_by_id: dict[int, User] = {u.user_id: u for u in users}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users_by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        for u in self.users_by_id.values():
            if u.email == email.strip().lower():
                return u
        return None

    def get_many(self, user_ids):
        return [self.users_by_id[i] for i in sorted(set(user_ids)) if i in self.users_by_id]

    def list_all(self):
        return sorted(self.users_by_id.values(), key=lambda u: u.full_name)

    def list_active_by_role(self, role: Role, *, region: Optional[str] = None):
        out = [u for u in self.users_by_id.values() if u.role == role and u.is_active]
        if region is not None:
            out = [u for u in out if (u.region or "").lower() == region.strip().lower()]
        return sorted(out, key=lambda u: u.user_id)

    def create_user(self, *, email, password_hash, full_name, role, phone_number=None, reporting_manager=None, region=None) -> int:
        user_id = max(self.users_by_id, default=0) + 1
        self.users_by_id[user_id] = User(
            user_id=user_id,
            email=email,
            password_hash=password_hash,
            full_name=full_name,
            role=role,
            phone_number=phone_number,
            reporting_manager=reporting_manager,
            region=region,
        )
        return user_id


class InMemoryAttendance:
    def __init__(self, events: Iterable[AttendanceEvent] = (), *, fail_writes: bool = False):
        self.events: list[AttendanceEvent] = list(events)
        self.fail_writes = fail_writes

    def add_event(self, new_event: NewAttendanceEvent) -> AttendanceEvent:
        if self.fail_writes:
            raise PersistenceError("Database operation failed")
        event = AttendanceEvent(event_id=len(self.events) + 1, **vars(new_event))
        self.events.append(event)
        return event

    @staticmethod
    def _sorted(events):
        return sorted(events, key=lambda e: (e.timestamp, e.event_id))

    def list_for_user(self, user_id: int):
        return self._sorted(e for e in self.events if e.user_id == user_id)

    def list_for_user_between(self, *, user_id: int, start: datetime, end: datetime):
        return self._sorted(e for e in self.events if e.user_id == user_id and start <= e.timestamp < end)

    def list_for_user_through(self, *, user_id: int, start: datetime, end: datetime):
        return self._sorted(e for e in self.events if e.user_id == user_id and start <= e.timestamp <= end)

    def list_through(self, *, start: datetime, end: datetime, user_ids=None):
        wanted = None if user_ids is None else set(user_ids)
        return self._sorted(
            e for e in self.events if start <= e.timestamp <= end and (wanted is None or e.user_id in wanted)
        )

    def list_for_dates(self, *, start_date: date, end_date: date):
        return self._sorted(e for e in self.events if start_date <= e.event_date <= end_date)


class InMemoryDistances:
    def __init__(self):
        self.by_key: dict[tuple[int, date], DistanceSummary] = {}

    def upsert_daily(self, summary: DistanceSummary) -> DistanceSummary:
        self.by_key[(summary.user_id, summary.travel_date)] = summary
        return summary

    def get_daily(self, *, user_id: int, travel_date: date):
        return self.by_key.get((user_id, travel_date))


class FakeMapping:
    def __init__(self, *, address: str = "221B Baker Street", elements=None, fail: bool = False):
        self.address = address
        self.elements = elements
        self.fail = fail
        self.geocode_calls: list[tuple[float, float]] = []
        self.matrix_calls: list[tuple[list, list]] = []

    def reverse_geocode(self, lat: float, lng: float) -> str:
        self.geocode_calls.append((lat, lng))
        return self.address or UNKNOWN_LOCATION

    def pairwise_distances(self, origins, destinations):
        self.matrix_calls.append((list(origins), list(destinations)))
        if self.fail:
            raise UpstreamError("Error calculating distances")
        if self.elements is not None:
            return list(self.elements)
        return [MatrixElement(status="OK", distance_text=f"{i + 1}.0 km") for i in range(len(origins))]


class FakeMediaStore:
    def __init__(self, *, fail: bool = False):
        self.fail = fail
        self.uploads: list[bytes] = []

    def upload(self, data: bytes) -> str:
        if self.fail:
            raise UpstreamError("Image upload failed")
        self.uploads.append(data)
        return f"https://media.example.com/evidence/{len(self.uploads)}.jpg"


def make_user(user_id: int, **overrides) -> User:
    base = User(
        user_id=user_id,
        email=f"user{user_id}@example.com",
        password_hash="not-a-real-hash",
        full_name=f"User {user_id}",
        role=Role.USER,
        region="Karnataka",
    )
    return replace(base, **overrides)


def make_event(event_id: int, user_id: int, timestamp: datetime, purpose: str = "Site Visit", **overrides) -> AttendanceEvent:
    base = AttendanceEvent(
        event_id=event_id,
        user_id=user_id,
        timestamp=timestamp,
        event_date=timestamp.date(),
        location=GeoPoint(lat=12.97 + event_id / 100, lng=77.59),
        location_name="Somewhere",
        purpose=purpose,
        image_url=f"https://media.example.com/{event_id}.jpg",
    )
    return replace(base, **overrides)

