from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import StaffUser
from .repository import StaffRepository

_COLUMNS = "user_id, name, email, password_hash, role, is_active, phone"


def _to_user(row: dict) -> StaffUser:
    return StaffUser(
        user_id=int(row["user_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        is_active=bool(row.get("is_active", True)),
        phone=row.get("phone"),
    )


class MySQLStaffRepository(StaffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[StaffUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff_users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[StaffUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff_users WHERE email=%s", (email.lower(),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def find_active_by_role(self, role: Role) -> Sequence[StaffUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM staff_users
                WHERE role=%s AND is_active=1
                ORDER BY user_id ASC
                """,
                (role.value,),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[StaffUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff_users ORDER BY user_id DESC")
            return [_to_user(r) for r in fetchall(cur)]

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        phone: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO staff_users(name, email, password_hash, role, phone, is_active)
                VALUES(%s,%s,%s,%s,%s,1)
                """,
                (name, email.lower(), password_hash, role.value, phone),
            )
            return int(cur.lastrowid)
