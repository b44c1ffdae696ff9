"""Parsing of the distance strings produced by the mapping provider and clients.

Accepted totals: ``"X km Y m"``, ``"X km"``, ``"Y m"`` or a bare number. Bare numbers,
numeric or string, are taken as meters.
"""
from __future__ import annotations

import math
import re
from typing import Any

from ..core.exceptions import ValidationError

_LEADING_NUMBER = re.compile(r"^\s*([-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?)")


def leading_number(text: str) -> float:
    """Numeric prefix of ``text`` (``"200 m"`` -> 200.0); NaN when there is none."""
    match = _LEADING_NUMBER.match(text)
    return float(match.group(1)) if match else math.nan


def normalize_distance_km(raw: Any) -> float:
    if raw is None or isinstance(raw, bool):
        raise ValidationError("Total distance must be a number")

    if isinstance(raw, (int, float)):
        km = float(raw) / 1000
    else:
        text = str(raw).strip().replace(",", "")
        if "km" in text:
            parts = text.split(" km ")
            km = leading_number(parts[0])
            if len(parts) > 1:
                km += leading_number(parts[1]) / 1000
        elif "m" in text:
            km = leading_number(text) / 1000
        else:
            try:
                km = float(text) / 1000
            except ValueError:
                km = math.nan

    if not math.isfinite(km):
        raise ValidationError("Total distance must be a number")
    if km < 0:
        raise ValidationError("Total distance cannot be negative")
    return km
