from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_admin_user, list_tables
from .distance.controller import register as register_distance
from .roster.controller import register as register_roster
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Pass a prebuilt ``container`` to run against other repositories (tests);
    otherwise settings come from ``config.<APP_ENV>`` and MySQL is used.
    """
    load_dotenv(override=False)
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
            admin_email = getattr(settings, "ADMIN_EMAIL", "")
            admin_password = getattr(settings, "ADMIN_PASSWORD", "")
            if admin_email and admin_password:
                ensure_admin_user(db_config, email=admin_email, password=admin_password)
        container = build_container(settings)

    logger.info("Starting field attendance API with settings=%s", settings_module)

    register_error_handlers(app)
    register_users(app, container)
    register_attendance(app, container)
    register_distance(app, container)
    register_roster(app, container)

    return app
