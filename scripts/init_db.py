from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.field_attendance.field_attendance.database.bootstrap import apply_schema, ensure_admin_user, list_tables

logger = logging.getLogger("init_db")


def main() -> None:
    parser = argparse.ArgumentParser(description="Apply database/schema.sql and optionally create an admin account.")
    parser.add_argument("--admin-email", default="")
    parser.add_argument("--admin-password", default="")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    if args.admin_email and args.admin_password:
        ensure_admin_user(db_config, email=args.admin_email, password=args.admin_password)

    tables = list_tables(db_config)
    logger.info("Schema applied to %s on %s (%s)", db_config.get("database"), db_config.get("host"), ", ".join(sorted(tables)))


if __name__ == "__main__":
    main()
