from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization and roster eligibility."""

    ADMIN = "admin"
    USER = "user"


class Purpose(str, Enum):
    """Reserved purposes of an attendance event.

    Any other purpose string is a free-form site visit.
    """

    CHECK_IN = "Check In"
    CHECK_OUT = "Check Out"
    ON_LEAVE = "On Leave"

    @classmethod
    def is_reserved(cls, value: str) -> bool:
        return value in {p.value for p in cls}
