from __future__ import annotations

from datetime import date, datetime
from typing import Any, Collection, Mapping, Optional, Sequence

from ..core.enums import ApplicationStatus, InterviewResult, InterviewStatus, Stage, Weekday
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, sql_value
from ..guardians.model import GuardianData
from ..guardians.mysql_guardian_repository import to_guardian
from .model import Student, StudentForm
from .repository import StudentRepository

_SELECT = """
    SELECT s.student_id, s.name, s.stage, s.age, s.date_of_birth, s.guardian_id, s.halqa_id,
           s.notes, s.application_status, s.interview_date, s.interview_notes, s.is_active,
           s.accepted_at, s.accepted_by, s.created_at,
           g.guardian_id AS g_guardian_id, g.name AS g_name, g.phone AS g_phone,
           g.alternate_phone AS g_alternate_phone, g.address AS g_address,
           g.relationship AS g_relationship, g.whatsapp_enabled AS g_whatsapp_enabled,
           g.whatsapp_phone AS g_whatsapp_phone,
           h.name AS halqa_name
    FROM students s
    JOIN guardians g ON g.guardian_id = s.guardian_id
    LEFT JOIN halqat h ON h.halqa_id = s.halqa_id
"""


def _to_student(row: dict) -> Student:
    return Student(
        student_id=int(row["student_id"]),
        name=row["name"],
        stage=Stage(row["stage"]),
        guardian_id=int(row["guardian_id"]),
        application_status=ApplicationStatus(row["application_status"]),
        age=row.get("age"),
        date_of_birth=row.get("date_of_birth"),
        halqa_id=row.get("halqa_id"),
        notes=row.get("notes"),
        interview_date=row.get("interview_date"),
        interview_notes=row.get("interview_notes"),
        is_active=bool(row.get("is_active")),
        accepted_at=row.get("accepted_at"),
        accepted_by=row.get("accepted_by"),
        created_at=row.get("created_at"),
        guardian=to_guardian(row, prefix="g_"),
        halqa_name=row.get("halqa_name"),
    )


def _conditional_update(
    cur,
    *,
    student_id: int,
    expected: Collection[ApplicationStatus],
    target: ApplicationStatus,
    fields: Mapping[str, Any],
) -> bool:
    expected = list(expected)
    assignments = ", ".join(["application_status=%s"] + [f"{column}=%s" for column in fields])
    cur.execute(
        f"""
        UPDATE students SET {assignments}
        WHERE student_id=%s AND application_status IN ({in_clause(expected)})
        """,
        (target.value,)
        + tuple(sql_value(v) for v in fields.values())
        + (int(student_id),)
        + tuple(s.value for s in expected),
    )
    # The target is never one of the expected statuses, so a match always changes the row.
    return cur.rowcount > 0


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, form: StudentForm, guardian_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(name, stage, age, date_of_birth, guardian_id, notes, application_status, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,%s,0)
                """,
                (
                    form.name,
                    form.stage.value,
                    form.age,
                    form.date_of_birth,
                    int(guardian_id),
                    form.notes,
                    ApplicationStatus.NEW.value,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE s.student_id=%s", (int(student_id),))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def list_by_status(
        self, statuses: Collection[ApplicationStatus], *, limit: int = 200
    ) -> Sequence[Student]:
        statuses = list(statuses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE s.application_status IN ({in_clause(statuses)})
                ORDER BY s.created_at DESC, s.student_id DESC
                LIMIT %s
                """,
                tuple(s.value for s in statuses) + (int(limit),),
            )
            return [_to_student(r) for r in fetchall(cur)]

    def list_for_guardian(self, guardian_id: int) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE s.guardian_id=%s ORDER BY s.created_at ASC, s.student_id ASC",
                (int(guardian_id),),
            )
            return [_to_student(r) for r in fetchall(cur)]

    def transition(
        self,
        *,
        student_id: int,
        expected: Collection[ApplicationStatus],
        target: ApplicationStatus,
        fields: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            return _conditional_update(
                cur, student_id=student_id, expected=expected, target=target, fields=fields or {}
            )

    def submit_form(
        self,
        *,
        student_id: int,
        expected: Collection[ApplicationStatus],
        form: StudentForm,
        guardian_id: int,
        guardian_data: GuardianData,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            moved = _conditional_update(
                cur,
                student_id=student_id,
                expected=expected,
                target=ApplicationStatus.FORM_SUBMITTED,
                fields=form.columns(),
            )
            if not moved:
                return False

            changes = guardian_data.changes()
            if changes:
                assignments = ", ".join(f"{column}=%s" for column in changes)
                cur.execute(
                    f"UPDATE guardians SET {assignments} WHERE guardian_id=%s",
                    tuple(sql_value(v) for v in changes.values()) + (int(guardian_id),),
                )
            return True

    def schedule_interview(
        self,
        *,
        student_id: int,
        expected: Collection[ApplicationStatus],
        interview_date: date,
        day_of_week: Weekday,
        time_slot: str,
        scheduled_by: int,
        conductor_id: int,
    ) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            moved = _conditional_update(
                cur,
                student_id=student_id,
                expected=expected,
                target=ApplicationStatus.INTERVIEW_SCHEDULED,
                fields={"interview_date": interview_date},
            )
            if not moved:
                return None

            # A second scheduled row for the student violates uq_interview_one_scheduled
            # and rolls the status change back with it.
            cur.execute(
                """
                INSERT INTO interviews(
                    student_id, scheduled_date, scheduled_by, conductor_id, status, day_of_week, time_slot
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(student_id),
                    interview_date,
                    int(scheduled_by),
                    int(conductor_id),
                    InterviewStatus.SCHEDULED.value,
                    day_of_week.value,
                    time_slot,
                ),
            )
            return int(cur.lastrowid)

    def record_interview_result(
        self,
        *,
        student_id: int,
        expected: Collection[ApplicationStatus],
        result: InterviewResult,
        notes: Optional[str],
        conducted_at: datetime,
        decided_by: int,
        halqa_id: Optional[int] = None,
    ) -> Optional[int]:
        target = result.application_status
        fields: dict = {"interview_notes": notes}
        if target == ApplicationStatus.ACCEPTED:
            fields.update(
                is_active=1,
                accepted_at=conducted_at,
                accepted_by=int(decided_by),
                halqa_id=int(halqa_id) if halqa_id is not None else None,
            )

        with db_cursor(self._conn_factory) as (_, cur):
            moved = _conditional_update(
                cur, student_id=student_id, expected=expected, target=target, fields=fields
            )
            if not moved:
                return None

            cur.execute(
                "SELECT interview_id FROM interviews WHERE student_id=%s AND status=%s FOR UPDATE",
                (int(student_id), InterviewStatus.SCHEDULED.value),
            )
            row = fetchone(cur)
            if not row:
                raise ConflictError(f"Student {student_id} has no scheduled interview to complete")

            interview_id = int(row["interview_id"])
            cur.execute(
                """
                UPDATE interviews
                SET status=%s, result=%s, notes=%s, conducted_at=%s
                WHERE interview_id=%s AND status=%s
                """,
                (
                    InterviewStatus.COMPLETED.value,
                    result.value,
                    notes,
                    conducted_at,
                    interview_id,
                    InterviewStatus.SCHEDULED.value,
                ),
            )
            return interview_id

    def assign_halqa(self, *, student_id: int, halqa_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE students SET halqa_id=%s WHERE student_id=%s AND application_status=%s",
                (int(halqa_id), int(student_id), ApplicationStatus.ACCEPTED.value),
            )
            if cur.rowcount > 0:
                return True
            # rowcount is 0 when the halqa was already the same one.
            cur.execute(
                "SELECT 1 AS found FROM students WHERE student_id=%s AND application_status=%s",
                (int(student_id), ApplicationStatus.ACCEPTED.value),
            )
            return fetchone(cur) is not None
