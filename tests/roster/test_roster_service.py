from datetime import date, datetime

import pytest

from src.field_attendance.field_attendance.core.enums import Role
from src.field_attendance.field_attendance.core.exceptions import ValidationError
from src.field_attendance.field_attendance.roster.model import RosterExclusions
from src.field_attendance.field_attendance.roster.service import RosterService
from tests.fakes import InMemoryAttendance, InMemoryUsers, make_event, make_user

TODAY = date(2026, 2, 10)


def _at(hour, minute=0, day=TODAY):
    return datetime(day.year, day.month, day.day, hour, minute)


@pytest.fixture
def users():
    return InMemoryUsers(
        [
            make_user(1, full_name="Asha"),
            make_user(2, full_name="Bala"),
            make_user(3, full_name="Chitra"),
            make_user(4, full_name="Dev", region="Delhi"),
            make_user(5, full_name="Esha", is_active=False),
            make_user(6, full_name="Admin", email="admin@example.com", role=Role.ADMIN),
            make_user(7, full_name="Farah", email="ops-bot@example.com"),
        ]
    )


def _roster(users, events):
    return RosterService(
        InMemoryAttendance(events),
        users,
        exclusions=RosterExclusions.of(emails=["OPS-BOT@example.com"], regions=["delhi", "Denmark"]),
    )


def test_without_check_in_skips_leave_and_exclusions(users):
    roster = _roster(
        users,
        [
            make_event(1, 1, _at(9), purpose="Check In"),
            make_event(2, 2, _at(8), purpose="On Leave"),
            make_event(3, 3, _at(9, day=date(2026, 2, 9)), purpose="Check In"),
        ],
    )

    missing = roster.users_without_check_in(TODAY)

    # Dev is in an excluded region, Esha inactive, the admin not a field user, Farah denylisted
    assert [u.user_id for u in missing] == [3]


def test_without_check_out(users):
    roster = _roster(
        users,
        [
            make_event(1, 1, _at(9), purpose="Check In"),
            make_event(2, 1, _at(18), purpose="Check Out"),
            make_event(3, 3, _at(9), purpose="Check In"),
        ],
    )

    assert [u.user_id for u in roster.users_without_check_out(TODAY)] == [2, 3]


def test_roster_dedupes_by_email():
    users = InMemoryUsers([make_user(1, email="dup@example.com"), make_user(2, email="DUP@example.com")])
    roster = RosterService(InMemoryAttendance(), users)

    assert [u.user_id for u in roster.users_without_check_in(TODAY)] == [1]


def test_users_on_leave(users):
    roster = _roster(
        users,
        [
            make_event(1, 2, _at(8), purpose="On Leave"),
            make_event(2, 2, _at(8, 5), purpose="On Leave"),
            make_event(3, 1, _at(9), purpose="Check In"),
        ],
    )

    assert [u.full_name for u in roster.users_on_leave(TODAY)] == ["Bala"]


def test_without_any_attendance_ignores_email_denylist(users):
    roster = _roster(users, [make_event(1, 1, _at(9), purpose="Check In")])

    assert [u.user_id for u in roster.users_without_any_attendance(TODAY)] == [2, 3, 7]


def test_visit_counts_ignore_reserved_purposes(users):
    roster = _roster(
        users,
        [
            make_event(1, 2, _at(9), purpose="Check In"),
            make_event(2, 2, _at(10), purpose="Site Visit"),
            make_event(3, 2, _at(12), purpose="Customer Meeting"),
            make_event(4, 1, _at(11), purpose="Site Visit"),
            make_event(5, 1, _at(18), purpose="Check Out"),
            make_event(6, 3, _at(9, day=date(2026, 2, 9)), purpose="Site Visit"),
        ],
    )

    rows = roster.user_visit_counts(date(2026, 2, 9), TODAY)

    assert [(r.visit_date, r.user.full_name, r.visits) for r in rows] == [
        (date(2026, 2, 9), "Chitra", 1),
        (TODAY, "Asha", 1),
        (TODAY, "Bala", 2),
    ]
    assert rows[2].to_dict()["visitCount"] == 2
    assert rows[2].to_dict()["date"] == "2026-02-10"


def test_visit_counts_default_to_today(users, fixed_now):
    roster = _roster(
        users,
        [
            make_event(1, 1, _at(9, day=date(2026, 2, 9)), purpose="Site Visit"),
            make_event(2, 1, _at(9), purpose="Site Visit"),
        ],
    )

    rows = roster.user_visit_counts(now=fixed_now)

    assert [(r.visit_date, r.visits) for r in rows] == [(TODAY, 1)]


def test_visit_counts_reject_inverted_range(users):
    with pytest.raises(ValidationError):
        _roster(users, []).user_visit_counts(TODAY, date(2026, 2, 1))


def test_region_month_matrix(fixed_now):
    users = InMemoryUsers(
        [
            make_user(1, full_name="Asha", region="Kerala"),
            make_user(2, full_name="Bala", region="Kerala"),
            make_user(3, full_name="Chitra", region="Goa"),
        ]
    )
    roster = RosterService(
        InMemoryAttendance(
            [
                make_event(1, 1, _at(9, day=date(2026, 2, 3))),
                make_event(2, 1, _at(10, day=date(2026, 2, 3))),
                make_event(3, 1, _at(9, day=date(2026, 1, 31))),
                make_event(4, 3, _at(9, day=date(2026, 2, 3))),
            ]
        ),
        users,
    )

    data = roster.region_month_matrix("kerala", now=fixed_now).to_dict()

    assert data["dates"][0] == "2026-02-01"
    assert data["dates"][-1] == "2026-02-28"
    assert data["engineers"] == [
        {
            "userId": 1,
            "fullName": "Asha",
            "email": "user1@example.com",
            "attendanceByDate": [{"date": "2026-02-03", "count": 2}],
        },
        {"userId": 2, "fullName": "Bala", "email": "user2@example.com", "attendanceByDate": []},
    ]


def test_region_month_matrix_requires_region():
    with pytest.raises(ValidationError):
        RosterService(InMemoryAttendance(), InMemoryUsers()).region_month_matrix(" ")
