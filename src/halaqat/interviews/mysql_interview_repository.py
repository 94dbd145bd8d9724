from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import InterviewResult, InterviewStatus, Weekday
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Interview
from .repository import InterviewRepository

_COLUMNS = """
    interview_id, student_id, scheduled_date, scheduled_by, conductor_id, status,
    result, notes, day_of_week, time_slot, conducted_at, created_at
"""


def to_interview(row: dict) -> Interview:
    return Interview(
        interview_id=int(row["interview_id"]),
        student_id=int(row["student_id"]),
        scheduled_date=row["scheduled_date"],
        scheduled_by=int(row["scheduled_by"]),
        conductor_id=row.get("conductor_id"),
        day_of_week=Weekday(row["day_of_week"]),
        status=InterviewStatus(row["status"]),
        result=InterviewResult(row["result"]) if row.get("result") else None,
        notes=row.get("notes"),
        time_slot=row.get("time_slot") or "after_asr",
        conducted_at=row.get("conducted_at"),
        created_at=row.get("created_at"),
    )


class MySQLInterviewRepository(InterviewRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, interview_id: int) -> Optional[Interview]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM interviews WHERE interview_id=%s", (int(interview_id),))
            row = fetchone(cur)
            return to_interview(row) if row else None

    def get_scheduled_for_student(self, student_id: int) -> Optional[Interview]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM interviews WHERE student_id=%s AND status=%s",
                (int(student_id), InterviewStatus.SCHEDULED.value),
            )
            row = fetchone(cur)
            return to_interview(row) if row else None

    def list_for_student(self, student_id: int) -> Sequence[Interview]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM interviews WHERE student_id=%s ORDER BY scheduled_date, interview_id",
                (int(student_id),),
            )
            return [to_interview(r) for r in fetchall(cur)]

    def list_upcoming(
        self,
        *,
        from_date: date,
        conductor_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[dict]:
        where = ["i.status=%s", "i.scheduled_date>=%s"]
        params: list = [InterviewStatus.SCHEDULED.value, from_date]
        if conductor_id is not None:
            where.append("i.conductor_id=%s")
            params.append(int(conductor_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT i.interview_id, i.student_id, i.scheduled_date, i.day_of_week, i.time_slot,
                       i.conductor_id, s.name AS student_name, s.stage,
                       g.name AS guardian_name, g.phone AS guardian_phone,
                       c.name AS conductor_name
                FROM interviews i
                JOIN students s ON s.student_id = i.student_id
                JOIN guardians g ON g.guardian_id = s.guardian_id
                LEFT JOIN staff_users c ON c.user_id = i.conductor_id
                WHERE {" AND ".join(where)}
                ORDER BY i.scheduled_date, i.interview_id
                LIMIT %s
                """,
                tuple(params) + (int(limit),),
            )
            rows = fetchall(cur)

        return [
            {
                "id": int(r["interview_id"]),
                "student_id": int(r["student_id"]),
                "student_name": r["student_name"],
                "stage": r["stage"],
                "guardian_name": r["guardian_name"],
                "guardian_phone": r["guardian_phone"],
                "scheduled_date": r["scheduled_date"].isoformat(),
                "day_of_week": r["day_of_week"],
                "time_slot": r["time_slot"],
                "conductor_id": r.get("conductor_id"),
                "conductor_name": r.get("conductor_name"),
            }
            for r in rows
        ]
