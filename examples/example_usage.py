"""Example: using the service layer directly (no Flask).

Controllers stay thin; the attendance rules live in the services.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.field_attendance.field_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings)

    today = date.today()
    summary = container.attendance_service.compute_summary(1, today.replace(day=1), today, "")
    print(summary.to_dict())
    print([u.email for u in container.roster_service.users_without_check_in(today)])


if __name__ == "__main__":
    main()
