from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.datetime_utils import parse_iso_date
from ..common.http import date_arg, json_body, make_auth_decorators
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    login_required, _ = make_auth_decorators(container.auth_service)

    @app.route("/api/distance", methods=["POST"], endpoint="distance_save")
    @login_required
    def save_daily_distance():
        data = json_body()
        legs = data.get("pointToPointDistances")
        if legs is not None and not isinstance(legs, list):
            raise ValidationError("pointToPointDistances must be a list")

        summary = container.distance_service.save_daily_distance(
            user_id=g.current_user.user_id,
            travel_date=parse_iso_date(data.get("date", ""), "date"),
            total_distance=data.get("totalDistance"),
            legs=legs,
        )
        return jsonify(summary.to_dict())

    @app.route("/api/distance", methods=["GET"], endpoint="distance_get")
    @login_required
    def get_daily_distance():
        summary = container.distance_service.get_daily_distance(
            user_id=g.current_user.user_id,
            travel_date=date_arg("date"),
        )
        return jsonify(summary.to_dict())
