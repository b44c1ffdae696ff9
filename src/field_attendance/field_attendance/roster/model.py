from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from ..users.model import User


@dataclass(frozen=True)
class RosterExclusions:
    """Identities and regions left out of attendance-completeness checks.

    Both sets are compared case-insensitively.
    """

    emails: frozenset[str] = field(default_factory=frozenset)
    regions: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, *, emails: Iterable[str] = (), regions: Iterable[str] = ()) -> "RosterExclusions":
        return cls(
            emails=frozenset(e.strip().lower() for e in emails if e and e.strip()),
            regions=frozenset(r.strip().lower() for r in regions if r and r.strip()),
        )

    def excludes_email(self, email: str) -> bool:
        return email.strip().lower() in self.emails

    def excludes_region(self, region: str | None) -> bool:
        return (region or "").strip().lower() in self.regions


@dataclass(frozen=True)
class VisitCount:
    """Number of non-reserved-purpose events a user logged on one day."""

    visit_date: date
    user: User
    visits: int

    def to_dict(self) -> dict:
        return dict(self.user.profile(), date=self.visit_date.isoformat(), visitCount=self.visits)


@dataclass(frozen=True)
class RegionMonthMatrix:
    """Per-user event counts for every date of one month in one region."""

    dates: list[date]
    rows: list[dict]

    def to_dict(self) -> dict:
        return {"dates": [d.isoformat() for d in self.dates], "engineers": self.rows}
