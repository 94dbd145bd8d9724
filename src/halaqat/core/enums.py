from __future__ import annotations

from enum import Enum
from typing import FrozenSet


class Role(str, Enum):
    """Staff roles used for authorization."""

    DIRECTOR = "director"
    SUPERVISOR = "supervisor"
    TEACHER = "teacher"
    STUDENT_AFFAIRS = "student_affairs"


class Stage(str, Enum):
    """School stage of a student."""

    PRIMARY = "primary"
    PREP = "prep"
    SECONDARY = "secondary"
    UNIVERSITY = "university"


class ApplicationStatus(str, Enum):
    """Onboarding lifecycle of a student application.

    Moves forward only: New -> FormGiven -> FormSubmitted -> InterviewScheduled
    -> Accepted | Rejected | Pending.
    """

    NEW = "New"
    FORM_GIVEN = "FormGiven"
    FORM_SUBMITTED = "FormSubmitted"
    INTERVIEW_SCHEDULED = "InterviewScheduled"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    PENDING = "Pending"

    @classmethod
    def allowed_sources(cls, target: "ApplicationStatus") -> FrozenSet["ApplicationStatus"]:
        """Statuses from which a transition into ``target`` is permitted."""
        return _TRANSITION_SOURCES.get(target, frozenset())

    @property
    def is_terminal(self) -> bool:
        return self in {ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED}

    @property
    def is_open(self) -> bool:
        """Still in the application pipeline (shown in the pending list)."""
        return self not in {ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED}


_TRANSITION_SOURCES = {
    ApplicationStatus.FORM_GIVEN: frozenset({ApplicationStatus.NEW}),
    ApplicationStatus.FORM_SUBMITTED: frozenset({ApplicationStatus.NEW, ApplicationStatus.FORM_GIVEN}),
    ApplicationStatus.INTERVIEW_SCHEDULED: frozenset({ApplicationStatus.FORM_SUBMITTED}),
    ApplicationStatus.ACCEPTED: frozenset({ApplicationStatus.INTERVIEW_SCHEDULED}),
    ApplicationStatus.REJECTED: frozenset({ApplicationStatus.INTERVIEW_SCHEDULED}),
    ApplicationStatus.PENDING: frozenset({ApplicationStatus.INTERVIEW_SCHEDULED}),
}


class InterviewStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    RESCHEDULED = "rescheduled"


class InterviewResult(str, Enum):
    """Outcome recorded by the director after an interview."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"
    PENDING = "pending"

    @property
    def application_status(self) -> ApplicationStatus:
        return {
            InterviewResult.ACCEPTED: ApplicationStatus.ACCEPTED,
            InterviewResult.REJECTED: ApplicationStatus.REJECTED,
            InterviewResult.PENDING: ApplicationStatus.PENDING,
        }[self]


class Relationship(str, Enum):
    """Guardian's relationship to the student."""

    FATHER = "father"
    MOTHER = "mother"
    BROTHER = "brother"
    SISTER = "sister"
    PATERNAL_UNCLE = "paternal_uncle"
    PATERNAL_AUNT = "paternal_aunt"
    MATERNAL_UNCLE = "maternal_uncle"
    MATERNAL_AUNT = "maternal_aunt"
    GRANDFATHER = "grandfather"
    GRANDMOTHER = "grandmother"
    OTHER = "other"


class NotificationType(str, Enum):
    INTERVIEW_SCHEDULED = "interview_scheduled"
    INTERVIEW_REMINDER = "interview_reminder"
    STUDENT_ACCEPTED = "student_accepted"
    STUDENT_REJECTED = "student_rejected"
    ATTENDANCE_ALERT = "attendance_alert"
    SYSTEM = "system"


class NotificationPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Weekday(str, Enum):
    """Day names, mapped onto ``date.weekday()`` (Monday == 0)."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def number(self) -> int:
        return list(Weekday).index(self)
