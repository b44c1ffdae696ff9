from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import DistanceSummary


class DistanceRepository(Protocol):
    def upsert_daily(self, summary: DistanceSummary) -> DistanceSummary:
        """Insert or replace the summary keyed by ``(user_id, travel_date)``.

        Must be a single atomic statement; never read-then-write.
        """

        raise NotImplementedError

    def get_daily(self, *, user_id: int, travel_date: date) -> Optional[DistanceSummary]:
        raise NotImplementedError
