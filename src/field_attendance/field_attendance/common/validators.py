from __future__ import annotations

import json
import math
from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: str | None, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str | None, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: str | None) -> str:
    email = require_non_empty(value, "Email").lower()
    local, _, domain = email.partition("@")
    if not local or "." not in domain:
        raise ValidationError("Email is not valid")
    return email


def parse_finite_float(value: Any, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be a finite number")
    return number


def parse_coordinates(value: Any) -> tuple[float, float]:
    """Accept ``{"lat": .., "lng": ..}`` as a mapping or a JSON string."""
    if isinstance(value, (str, bytes)):
        try:
            value = json.loads(value)
        except ValueError:
            raise ValidationError("Location must be a JSON object with lat and lng")
    if not isinstance(value, dict) or "lat" not in value or "lng" not in value:
        raise ValidationError("Location must contain lat and lng")

    lat = parse_finite_float(value["lat"], "Latitude")
    lng = parse_finite_float(value["lng"], "Longitude")
    if not -90 <= lat <= 90 or not -180 <= lng <= 180:
        raise ValidationError("Location is out of range")
    return lat, lng
