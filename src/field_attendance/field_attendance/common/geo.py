from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .validators import parse_coordinates


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float

    @classmethod
    def parse(cls, value: Any) -> "GeoPoint":
        lat, lng = parse_coordinates(value)
        return cls(lat=lat, lng=lng)

    def as_latlng(self) -> str:
        return f"{self.lat},{self.lng}"

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng}
