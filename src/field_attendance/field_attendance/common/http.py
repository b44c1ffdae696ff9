from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Callable, Optional

from flask import Flask, g, jsonify, request

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    PersistenceError,
    UpstreamError,
    ValidationError,
)
from ..users.service import AuthService
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (UpstreamError, 502),
    (PersistenceError, 500),
]


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                if status >= 500:
                    logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.path, exc)
                return jsonify({"error": str(exc)}), status
        logger.exception("Unmapped domain error on %s %s", request.method, request.path)
        return jsonify({"error": "Server error"}), 500


def make_auth_decorators(auth_service: AuthService) -> tuple[Callable, Callable]:
    """Return ``(login_required, admin_required)`` bound to ``auth_service``.

    The resolved caller is stored as ``flask.g.current_user``.
    """

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.current_user = auth_service.current_user(request.headers.get("Authorization"))
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.current_user = auth_service.current_user(request.headers.get("Authorization"))
            auth_service.require_admin(g.current_user)
            return view(*args, **kwargs)

        return wrapper

    return login_required, admin_required


def date_arg(name: str, *, required: bool = True) -> Optional[date]:
    value = request.args.get(name)
    if not value:
        if required:
            raise ValidationError(f"{name} is required")
        return None
    return parse_iso_date(value, name)


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
