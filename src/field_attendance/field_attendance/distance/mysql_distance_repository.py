from __future__ import annotations

import json
from datetime import date
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, load_json_column
from .model import DistanceLeg, DistanceSummary
from .repository import DistanceRepository


class MySQLDistanceRepository(DistanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert_daily(self, summary: DistanceSummary) -> DistanceSummary:
        legs_json = json.dumps([leg.to_dict() for leg in summary.legs])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO daily_distances(user_id, travel_date, total_distance_km, legs)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE total_distance_km=VALUES(total_distance_km), legs=VALUES(legs)
                """,
                (int(summary.user_id), summary.travel_date, float(summary.total_distance_km), legs_json),
            )
        return summary

    def get_daily(self, *, user_id: int, travel_date: date) -> Optional[DistanceSummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, travel_date, total_distance_km, legs
                FROM daily_distances
                WHERE user_id=%s AND travel_date=%s
                """,
                (int(user_id), travel_date),
            )
            r = fetchone(cur)
            if not r:
                return None
            legs = load_json_column(r.get("legs"), [])
            return DistanceSummary(
                user_id=int(r["user_id"]),
                travel_date=r["travel_date"],
                total_distance_km=float(r["total_distance_km"]),
                legs=tuple(
                    DistanceLeg(
                        from_location=leg["from"],
                        to_location=leg["to"],
                        distance_km=float(leg["distanceKm"]),
                        transit_time=leg.get("transitTime"),
                    )
                    for leg in legs
                ),
            )
