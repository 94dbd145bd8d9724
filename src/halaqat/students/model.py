from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import ApplicationStatus, Stage
from ..guardians.model import Guardian
from ..interviews.model import Interview
from ..notifications.model import Notification


@dataclass(frozen=True)
class Student:
    """Domain entity: a student and the state of their application.

    Note: ``is_active`` is only ever set together with ``Accepted``.
    """

    student_id: int
    name: str
    stage: Stage
    guardian_id: int
    application_status: ApplicationStatus = ApplicationStatus.NEW
    age: Optional[int] = None
    date_of_birth: Optional[date] = None
    halqa_id: Optional[int] = None
    notes: Optional[str] = None
    interview_date: Optional[date] = None
    interview_notes: Optional[str] = None
    is_active: bool = False
    accepted_at: Optional[datetime] = None
    accepted_by: Optional[int] = None
    created_at: Optional[datetime] = None
    guardian: Optional[Guardian] = None
    halqa_name: Optional[str] = None

    @property
    def is_enrolled(self) -> bool:
        return (
            self.application_status == ApplicationStatus.ACCEPTED
            and self.is_active
            and self.halqa_id is not None
        )

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "name": self.name,
            "stage": self.stage.value,
            "age": self.age,
            "date_of_birth": isoformat_or_none(self.date_of_birth),
            "application_status": self.application_status.value,
            "notes": self.notes,
            "interview_date": isoformat_or_none(self.interview_date),
            "interview_notes": self.interview_notes,
            "is_active": self.is_active,
            "is_enrolled": self.is_enrolled,
            "accepted_at": isoformat_or_none(self.accepted_at),
            "accepted_by": self.accepted_by,
            "guardian_id": self.guardian_id,
            "guardian": self.guardian.to_dict() if self.guardian else None,
            "halqa": {"id": self.halqa_id, "name": self.halqa_name} if self.halqa_id else None,
            "created_at": isoformat_or_none(self.created_at),
        }


@dataclass(frozen=True)
class StudentForm:
    """Student fields captured by the application form."""

    name: str
    stage: Stage
    age: Optional[int] = None
    date_of_birth: Optional[date] = None
    notes: Optional[str] = None

    def columns(self) -> dict:
        return {
            "name": self.name,
            "stage": self.stage,
            "age": self.age,
            "date_of_birth": self.date_of_birth,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class InterviewBooking:
    """Result of scheduling: the moved student, the new interview and the director's notification."""

    student: Student
    interview: Interview
    notification: Notification

    def to_dict(self) -> dict:
        return {
            "student": self.student.to_dict(),
            "interview": self.interview.to_dict(),
            "notification": self.notification.to_dict(),
        }
