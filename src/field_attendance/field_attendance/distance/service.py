from __future__ import annotations

import logging
import math
from datetime import date
from typing import Any, Iterable, Optional, Sequence

from ..common.geo import GeoPoint
from ..core.constants import ZERO_DISTANCE
from ..core.exceptions import NotFoundError
from ..integrations.mapping import MappingService
from .model import DistanceLeg, DistanceSummary
from .repository import DistanceRepository
from .units import normalize_distance_km

logger = logging.getLogger(__name__)


class DistanceService:
    """Leg distances for a day's events and the per-user daily distance record."""

    def __init__(self, distances: DistanceRepository, mapping: MappingService):
        self._distances = distances
        self._mapping = mapping

    def compute_leg_distances(self, points: Sequence[GeoPoint]) -> list[str]:
        """One distance string per consecutive pair: ``n`` points give ``n - 1`` legs.

        The provider is called once for the whole sequence. Rows that are not OK, missing
        or malformed become ``"0 m"``; only a failure of the whole call raises.
        """
        if len(points) < 2:
            return []

        origins = list(points[:-1])
        destinations = list(points[1:])
        elements = self._mapping.pairwise_distances(origins, destinations)

        distances: list[str] = []
        for i in range(len(origins)):
            element = elements[i] if i < len(elements) else None
            if element is not None and element.ok:
                distances.append(str(element.distance_text))
            else:
                logger.warning(
                    "No distance for leg %d (%s -> %s): %s",
                    i,
                    origins[i].as_latlng(),
                    destinations[i].as_latlng(),
                    element.status if element else "MISSING",
                )
                distances.append(ZERO_DISTANCE)
        return distances

    def save_daily_distance(
        self,
        *,
        user_id: int,
        travel_date: date,
        total_distance: Any,
        legs: Optional[Iterable[Any]] = None,
    ) -> DistanceSummary:
        total_km = normalize_distance_km(total_distance)
        summary = DistanceSummary(
            user_id=int(user_id),
            travel_date=travel_date,
            total_distance_km=total_km,
            legs=tuple(self._valid_legs(legs or [])),
        )
        saved = self._distances.upsert_daily(summary)
        logger.info(
            "Saved daily distance user=%s date=%s total_km=%.3f legs=%d",
            user_id,
            travel_date.isoformat(),
            total_km,
            len(summary.legs),
        )
        return saved

    def get_daily_distance(self, *, user_id: int, travel_date: date) -> DistanceSummary:
        summary = self._distances.get_daily(user_id=int(user_id), travel_date=travel_date)
        if not summary:
            raise NotFoundError("No distance recorded for this date")
        return summary

    @staticmethod
    def _valid_legs(raw_legs: Iterable[Any]) -> list[DistanceLeg]:
        valid: list[DistanceLeg] = []
        for index, raw in enumerate(raw_legs):
            leg = _parse_leg(raw)
            if leg is None:
                logger.info("Dropping invalid distance leg #%d: %r", index, raw)
                continue
            valid.append(leg)
        return valid


def _parse_leg(raw: Any) -> Optional[DistanceLeg]:
    if not isinstance(raw, dict):
        return None

    origin = raw.get("from")
    destination = raw.get("to")
    if not origin or not destination:
        return None

    distance = raw.get("distance", raw.get("distanceKm"))
    if distance is None or isinstance(distance, bool):
        return None
    try:
        distance_km = float(distance)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(distance_km):
        return None

    transit_time = raw.get("transitTime")
    return DistanceLeg(
        from_location=str(origin),
        to_location=str(destination),
        distance_km=distance_km,
        transit_time=str(transit_time) if transit_time is not None else None,
    )
