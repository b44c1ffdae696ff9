from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Iterable, Optional, Sequence

from ..common.datetime_utils import day_bounds, end_of_day, now_utc, parse_holidays, start_of_day
from ..common.geo import GeoPoint
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_MAX_IMAGE_KB
from ..core.exceptions import NotFoundError, PersistenceError, ValidationError
from ..distance.service import DistanceService
from ..integrations.imaging import compress_to_target_size
from ..integrations.mapping import MappingService
from ..integrations.media_store import MediaStore
from ..users.repository import UserRepository
from .model import AttendanceEvent, AttendanceSummary, EventWithDistance, NewAttendanceEvent
from .repository import AttendanceRepository
from .summary import summarize_attendance

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        distances: DistanceService,
        media: MediaStore,
        mapping: MappingService,
        *,
        max_image_kb: int = DEFAULT_MAX_IMAGE_KB,
    ):
        self._attendance = attendance
        self._users = users
        self._distances = distances
        self._media = media
        self._mapping = mapping
        self._max_image_kb = int(max_image_kb)

    def record_event(
        self,
        user_id: int,
        *,
        purpose: str,
        location: Any,
        image: bytes,
        sub_purpose: Optional[str] = None,
        feedback: Optional[str] = None,
        now: datetime | None = None,
    ) -> AttendanceEvent:
        """Upload the evidence photo, resolve the address and append one event.

        Upload failure is fatal (UpstreamError). Geocoding failure only degrades the
        location name. If the write fails after the upload, the photo stays orphaned.
        """
        if not image:
            raise ValidationError("Image is required")
        if location is None or location == "":
            raise ValidationError("Location is required")
        purpose = require_non_empty(purpose, "Purpose of visit")
        point = GeoPoint.parse(location)

        compressed = compress_to_target_size(image, self._max_image_kb)
        image_url = self._media.upload(compressed)

        location_name = self._mapping.reverse_geocode(point.lat, point.lng)

        now = now or now_utc()
        # event_time is DATETIME(3); derive the date from the stored precision
        now = now.replace(microsecond=now.microsecond // 1000 * 1000)
        new_event = NewAttendanceEvent(
            user_id=int(user_id),
            timestamp=now,
            event_date=now.date(),
            location=point,
            location_name=location_name,
            purpose=purpose,
            image_url=image_url,
            sub_purpose=(sub_purpose or "").strip() or None,
            feedback=(feedback or "").strip() or None,
        )
        try:
            return self._attendance.add_event(new_event)
        except PersistenceError:
            logger.error("Attendance save failed for user=%s; uploaded image orphaned: %s", user_id, image_url)
            raise

    def get_events_for_day(self, user_id: int, day: date) -> Sequence[AttendanceEvent]:
        start, end = day_bounds(day)
        return self.get_events_between(user_id, start, end)

    def get_events_between(self, user_id: int, start: datetime, end: datetime) -> Sequence[AttendanceEvent]:
        """Half-open ``[start, end)``; used by the by-date queries."""
        return self._attendance.list_for_user_between(user_id=int(user_id), start=start, end=end)

    def get_events_through(self, user_id: int, start_date: date, end_date: date) -> Sequence[AttendanceEvent]:
        """Closed ``[start_date 00:00, end_date 23:59:59.999]``; used by range and summary queries."""
        return self._attendance.list_for_user_through(
            user_id=int(user_id),
            start=start_of_day(start_date),
            end=end_of_day(end_date),
        )

    def get_all_events(self, user_id: int) -> Sequence[AttendanceEvent]:
        return self._attendance.list_for_user(int(user_id))

    def get_events_by_email(self, email: str) -> list[dict]:
        email = require_non_empty(email, "Email").lower()
        user = self._users.get_by_email(email)
        if not user:
            raise NotFoundError("User not found")
        return [dict(e.to_dict(), user=user.profile()) for e in self._attendance.list_for_user(user.user_id)]

    def get_region_events(self, region: str, start_date: date, end_date: Optional[date] = None) -> list[dict]:
        """Events of every user in ``region`` over a closed date range, joined with the profile."""
        region = require_non_empty(region, "State")
        end_date = end_date or start_date
        if end_date < start_date:
            raise ValidationError("endDate must not be before startDate")

        users = {u.user_id: u for u in self._users.list_all() if (u.region or "").lower() == region.lower()}
        if not users:
            return []

        events = self._attendance.list_through(
            start=start_of_day(start_date),
            end=end_of_day(end_date),
            user_ids=users.keys(),
        )
        return [dict(e.to_dict(), user=users[e.user_id].profile()) for e in events if e.user_id in users]

    def compute_summary(
        self,
        user_id: int,
        start_date: date,
        end_date: date,
        holidays: str | Iterable[date] | None = None,
        *,
        now: datetime | None = None,
    ) -> AttendanceSummary:
        if end_date < start_date:
            raise ValidationError("endDate must not be before startDate")
        if holidays is None or isinstance(holidays, str):
            holiday_set = parse_holidays(holidays)
        else:
            holiday_set = frozenset(holidays)

        events = self.get_events_through(user_id, start_date, end_date)
        return summarize_attendance(
            events,
            start_date=start_date,
            end_date=end_date,
            holidays=holiday_set,
            now=now or now_utc(),
        )

    def attach_distances(self, events: Sequence[AttendanceEvent]) -> list[EventWithDistance]:
        """Annotate every event but the first with the distance from its predecessor."""
        if len(events) < 2:
            return [EventWithDistance(event=e) for e in events]

        legs = self._distances.compute_leg_distances([e.location for e in events])
        annotated = [EventWithDistance(event=events[0])]
        for event, distance in zip(events[1:], legs):
            annotated.append(EventWithDistance(event=event, distance_from_previous=distance))
        return annotated

    def get_events_with_distances(self, user_id: int, day: date) -> list[EventWithDistance]:
        return self.attach_distances(self.get_events_for_day(user_id, day))

    def is_first_entry_today(self, user_id: int, *, now: datetime | None = None) -> bool:
        today = (now or now_utc()).date()
        return len(self.get_events_for_day(user_id, today)) == 0
