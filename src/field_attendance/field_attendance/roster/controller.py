from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import date_arg, make_auth_decorators
from ..container import Container


def register(app: Flask, container: Container) -> None:
    _, admin_required = make_auth_decorators(container.auth_service)

    def _profiles(users) -> list[dict]:
        return [u.profile() for u in users]

    @app.route("/api/roster/without-check-in", methods=["GET"], endpoint="roster_without_check_in")
    @admin_required
    def without_check_in():
        return jsonify(_profiles(container.roster_service.users_without_check_in(date_arg("date", required=False))))

    @app.route("/api/roster/without-check-out", methods=["GET"], endpoint="roster_without_check_out")
    @admin_required
    def without_check_out():
        return jsonify(_profiles(container.roster_service.users_without_check_out(date_arg("date", required=False))))

    @app.route("/api/roster/on-leave", methods=["GET"], endpoint="roster_on_leave")
    @admin_required
    def on_leave():
        return jsonify(_profiles(container.roster_service.users_on_leave(date_arg("date", required=False))))

    @app.route("/api/roster/without-attendance", methods=["GET"], endpoint="roster_without_attendance")
    @admin_required
    def without_attendance():
        users = container.roster_service.users_without_any_attendance(date_arg("date", required=False))
        return jsonify(_profiles(users))

    @app.route("/api/roster/visit-counts", methods=["GET"], endpoint="roster_visit_counts")
    @admin_required
    def visit_counts():
        rows = container.roster_service.user_visit_counts(
            date_arg("startDate", required=False),
            date_arg("endDate", required=False),
        )
        return jsonify([r.to_dict() for r in rows])

    @app.route("/api/roster/region-month", methods=["GET"], endpoint="roster_region_month")
    @admin_required
    def region_month():
        matrix = container.roster_service.region_month_matrix(request.args.get("state", ""))
        return jsonify(matrix.to_dict())
