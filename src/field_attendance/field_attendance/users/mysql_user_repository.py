from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, email, password_hash, full_name, phone_number, reporting_manager, region, role, is_active"


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        email=row["email"],
        password_hash=row["password_hash"],
        full_name=row["full_name"],
        role=Role(row["role"]),
        phone_number=row.get("phone_number"),
        reporting_manager=row.get("reporting_manager"),
        region=row.get("region"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email.strip().lower(),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_many(self, user_ids: Iterable[int]) -> Sequence[User]:
        ids = sorted({int(i) for i in user_ids})
        if not ids:
            return []
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id IN ({placeholders})", tuple(ids))
            return [_to_user(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY full_name ASC")
            return [_to_user(r) for r in fetchall(cur)]

    def list_active_by_role(self, role: Role, *, region: Optional[str] = None) -> Sequence[User]:
        clauses = ["role=%s", "is_active=1"]
        params: list[object] = [role.value]
        if region is not None:
            clauses.append("LOWER(region)=LOWER(%s)")
            params.append(region.strip())

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE {where} ORDER BY user_id ASC", tuple(params))
            return [_to_user(r) for r in fetchall(cur)]

    def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        full_name: str,
        role: Role,
        phone_number: Optional[str] = None,
        reporting_manager: Optional[str] = None,
        region: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(email, password_hash, full_name, phone_number, reporting_manager, region, role, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,%s,1)
                """,
                (email, password_hash, full_name, phone_number, reporting_manager, region, role.value),
            )
            return int(cur.lastrowid)
