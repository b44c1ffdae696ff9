from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class DistanceLeg:
    """Travel between two consecutive events of one day."""

    from_location: str
    to_location: str
    distance_km: float
    transit_time: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "from": self.from_location,
            "to": self.to_location,
            "distanceKm": self.distance_km,
            "transitTime": self.transit_time,
        }


@dataclass(frozen=True)
class DistanceSummary:
    """At most one per user per day; re-saving a day replaces it."""

    user_id: int
    travel_date: date
    total_distance_km: float
    legs: tuple[DistanceLeg, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "date": self.travel_date.isoformat(),
            "totalDistance": self.total_distance_km,
            "pointToPointDistances": [leg.to_dict() for leg in self.legs],
        }
