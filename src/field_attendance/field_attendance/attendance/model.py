from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.geo import GeoPoint
from ..core.enums import Purpose


@dataclass(frozen=True)
class NewAttendanceEvent:
    """Validated submission, ready to be appended to the event log."""

    user_id: int
    timestamp: datetime
    event_date: date
    location: GeoPoint
    location_name: str
    purpose: str
    image_url: str
    sub_purpose: Optional[str] = None
    feedback: Optional[str] = None


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one geotagged, photo-evidenced submission.

    Created once, never mutated. ``event_date`` is the UTC calendar date of ``timestamp``.
    """

    event_id: int
    user_id: int
    timestamp: datetime
    event_date: date
    location: GeoPoint
    location_name: str
    purpose: str
    image_url: str
    sub_purpose: Optional[str] = None
    feedback: Optional[str] = None

    @property
    def is_visit(self) -> bool:
        return not Purpose.is_reserved(self.purpose)

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "userId": self.user_id,
            "timestamp": self.timestamp.isoformat(timespec="milliseconds") + "Z",
            "date": self.event_date.isoformat(),
            "location": self.location.to_dict(),
            "locationName": self.location_name,
            "purpose": self.purpose,
            "subPurpose": self.sub_purpose,
            "image": self.image_url,
            "feedback": self.feedback,
        }


@dataclass(frozen=True)
class EventWithDistance:
    """Read-model: an event plus the travel distance from the previous event of its day."""

    event: AttendanceEvent
    distance_from_previous: Optional[str] = None

    def to_dict(self) -> dict:
        data = self.event.to_dict()
        if self.distance_from_previous is not None:
            data["distanceFromPrevious"] = self.distance_from_previous
        return data


@dataclass(frozen=True)
class AttendanceSummary:
    """Derived per query, never persisted."""

    holidays: int
    present_days: int
    work_days: int
    absent_days: int
    future_holidays: int

    def to_dict(self) -> dict:
        return {
            "holidays": self.holidays,
            "present": self.present_days,
            "absent": self.absent_days,
            "futureHolidays": self.future_holidays,
            "workDays": self.work_days,
        }
