from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import date_arg, json_body, make_auth_decorators
from ..container import Container
from ..core.exceptions import ValidationError
from ..integrations.imaging import decode_data_url


def register(app: Flask, container: Container) -> None:
    login_required, admin_required = make_auth_decorators(container.auth_service)

    def _submitted_fields() -> dict:
        # Mobile clients send multipart with an image file; web clients send JSON with a data URL.
        if request.files or request.form:
            return request.form.to_dict()
        return json_body()

    def _submitted_image(fields: dict) -> bytes:
        upload = request.files.get("image")
        if upload is not None:
            return upload.read()
        image = fields.get("image")
        if not image:
            raise ValidationError("Image is required")
        return decode_data_url(image)

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_record")
    @login_required
    def record_event():
        fields = _submitted_fields()
        event = container.attendance_service.record_event(
            g.current_user.user_id,
            purpose=fields.get("purpose", ""),
            location=fields.get("location"),
            image=_submitted_image(fields),
            sub_purpose=fields.get("subPurpose"),
            feedback=fields.get("feedback"),
        )
        return jsonify({"message": "Attendance saved successfully", "attendance": event.to_dict()}), 201

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_by_date")
    @login_required
    def events_by_date():
        events = container.attendance_service.get_events_for_day(g.current_user.user_id, date_arg("date"))
        return jsonify([e.to_dict() for e in events])

    @app.route("/api/attendance/all", methods=["GET"], endpoint="attendance_all")
    @login_required
    def all_events():
        events = container.attendance_service.get_all_events(g.current_user.user_id)
        return jsonify([e.to_dict() for e in events])

    @app.route("/api/attendance/range", methods=["GET"], endpoint="attendance_range")
    @login_required
    def events_in_range():
        events = container.attendance_service.get_events_through(
            g.current_user.user_id, date_arg("start"), date_arg("end")
        )
        return jsonify([e.to_dict() for e in events])

    @app.route("/api/attendance/with-distances", methods=["GET"], endpoint="attendance_with_distances")
    @login_required
    def events_with_distances():
        events = container.attendance_service.get_events_with_distances(g.current_user.user_id, date_arg("date"))
        return jsonify([e.to_dict() for e in events])

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    @login_required
    def summary():
        result = container.attendance_service.compute_summary(
            g.current_user.user_id,
            date_arg("startDate"),
            date_arg("endDate"),
            request.args.get("holidays", ""),
        )
        return jsonify(result.to_dict())

    @app.route("/api/attendance/first-today", methods=["GET"], endpoint="attendance_first_today")
    @login_required
    def first_entry_today():
        return jsonify({"isFirstEntry": container.attendance_service.is_first_entry_today(g.current_user.user_id)})

    @app.route("/api/attendance/filtered", methods=["GET"], endpoint="attendance_filtered")
    @admin_required
    def region_events():
        start = date_arg("startDate")
        end_s = request.args.get("endDate")
        end = parse_iso_date(end_s, "endDate") if end_s else None
        rows = container.attendance_service.get_region_events(request.args.get("state", ""), start, end)
        return jsonify(rows)

    @app.route("/api/attendance/user", methods=["GET"], endpoint="attendance_by_email")
    @admin_required
    def events_by_email():
        return jsonify(container.attendance_service.get_events_by_email(request.args.get("email", "")))
