from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body, make_auth_decorators
from ..container import Container


def register(app: Flask, container: Container) -> None:
    _, admin_required = make_auth_decorators(container.auth_service)

    @app.route("/api/user/signup", methods=["POST"], endpoint="user_signup")
    def signup():
        data = json_body()
        user = container.user_service.signup(
            email=data.get("email", ""),
            password=data.get("password", ""),
            full_name=data.get("fullName", ""),
            phone_number=data.get("phoneNumber"),
            reporting_manager=data.get("reportingManager"),
            region=data.get("state"),
        )
        return jsonify(dict(user.profile(), role=user.role.value)), 201

    @app.route("/api/user/login", methods=["POST"], endpoint="user_login")
    def login():
        data = json_body()
        result = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        return jsonify({"email": result.email, "token": result.token, "state": result.region, "role": result.role.value})

    @app.route("/api/user", methods=["GET"], endpoint="user_list")
    @admin_required
    def list_users():
        users = container.user_service.list_users()
        return jsonify([dict(u.profile(), role=u.role.value, isActive=u.is_active) for u in users])

    @app.route("/api/user/by-email", methods=["GET"], endpoint="user_by_email")
    @admin_required
    def user_by_email():
        user = container.user_service.get_by_email(request.args.get("email", ""))
        return jsonify(dict(user.profile(), role=user.role.value, isActive=user.is_active))
