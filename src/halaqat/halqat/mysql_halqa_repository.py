from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Weekday
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Halqa
from .repository import HalqaRepository

_COLUMNS = "halqa_id, name, teacher_id, supervisor_id, days, start_time, end_time, max_students, is_active"


def _to_halqa(row: dict) -> Halqa:
    days = tuple(Weekday(d.strip()) for d in (row.get("days") or "").split(",") if d.strip())
    return Halqa(
        halqa_id=int(row["halqa_id"]),
        name=row["name"],
        teacher_id=row.get("teacher_id"),
        supervisor_id=row.get("supervisor_id"),
        days=days,
        start_time=normalize_mysql_time(row["start_time"]),
        end_time=normalize_mysql_time(row["end_time"]),
        max_students=int(row["max_students"]),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLHalqaRepository(HalqaRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, halqa_id: int) -> Optional[Halqa]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM halqat WHERE halqa_id=%s", (int(halqa_id),))
            row = fetchone(cur)
            return _to_halqa(row) if row else None

    def count_active_students(self, halqa_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM students WHERE halqa_id=%s AND is_active=1",
                (int(halqa_id),),
            )
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def list_active(self) -> Sequence[Halqa]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM halqat WHERE is_active=1 ORDER BY name")
            return [_to_halqa(r) for r in fetchall(cur)]
