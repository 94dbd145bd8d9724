from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from ..common.datetime_utils import now_local, optional_date
from ..common.validators import optional_int_in_range, optional_text, require_enum, require_non_empty
from ..core.constants import (
    DEFAULT_INTERVIEW_TIME_SLOT,
    DEFAULT_INTERVIEW_WEEKDAYS,
    DEFAULT_LIST_LIMIT,
    MAX_STUDENT_AGE,
    MIN_STUDENT_AGE,
)
from ..core.enums import ApplicationStatus, InterviewResult, Role, Stage, Weekday
from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from ..guardians.model import GuardianData
from ..guardians.service import GuardianService, parse_guardian_data
from ..halqat.service import HalqaService
from ..interviews.repository import InterviewRepository
from ..interviews.slots import next_interview_slot
from ..notifications.service import NotificationService
from ..staff.directory import StaffDirectory
from ..staff.model import Actor
from .model import InterviewBooking, Student, StudentForm
from .repository import StudentRepository

logger = logging.getLogger(__name__)

_INTAKE_ROLES = (Role.STUDENT_AFFAIRS, Role.DIRECTOR)


def parse_student_form(raw: Mapping[str, Any]) -> StudentForm:
    if not isinstance(raw, Mapping):
        raise ValidationError("Student data must be an object")
    return StudentForm(
        name=require_non_empty(raw.get("name"), "Student name"),
        stage=require_enum(raw.get("stage"), Stage, "stage"),
        age=optional_int_in_range(raw.get("age"), "Age", low=MIN_STUDENT_AGE, high=MAX_STUDENT_AGE),
        date_of_birth=optional_date(raw.get("date_of_birth"), "Date of birth"),
        notes=optional_text(raw.get("notes")),
    )


class OnboardingService:
    """Use case: move a student application through its lifecycle.

    New -> FormGiven -> FormSubmitted -> InterviewScheduled -> Accepted | Rejected | Pending

    Every step checks the current status first and then writes conditionally,
    so a request that loses a race gets ``ConflictError`` and changes nothing.
    """

    def __init__(
        self,
        students: StudentRepository,
        interviews: InterviewRepository,
        *,
        guardian_service: GuardianService,
        halqa_service: HalqaService,
        notification_service: NotificationService,
        directory: StaffDirectory,
        interview_weekdays: Iterable[Union[Weekday, str]] = DEFAULT_INTERVIEW_WEEKDAYS,
        interview_time_slot: str = DEFAULT_INTERVIEW_TIME_SLOT,
    ):
        self._students = students
        self._interviews = interviews
        self._guardians = guardian_service
        self._halqat = halqa_service
        self._notifications = notification_service
        self._directory = directory
        self._weekdays = tuple(Weekday(w) for w in interview_weekdays)
        self._time_slot = interview_time_slot
        if not self._weekdays:
            raise ValueError("At least one interview weekday is required")

    # -------- helpers --------
    @staticmethod
    def _require_role(actor: Actor, roles: Sequence[Role], action: str) -> None:
        if not actor.has_role(*roles):
            raise AuthorizationError(f"You are not allowed to {action}")

    def _require_student(self, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError(f"Student {student_id} not found")
        return student

    @staticmethod
    def _require_transition(student: Student, target: ApplicationStatus) -> frozenset:
        if student.application_status.is_terminal:
            raise InvalidStateError(
                f"Application {student.student_id} is already decided ({student.application_status.value})"
            )
        allowed = ApplicationStatus.allowed_sources(target)
        if student.application_status not in allowed:
            logger.debug(
                "Rejected transition of student %s: %s -> %s",
                student.student_id,
                student.application_status.value,
                target.value,
            )
            raise InvalidStateError(
                f"Cannot move application from {student.application_status.value} to {target.value}"
            )
        return allowed

    @staticmethod
    def _lost_race(student: Student) -> ConflictError:
        return ConflictError(f"Application {student.student_id} was changed by another request, reload and retry")

    @staticmethod
    def _log_transition(student: Student, target: ApplicationStatus, actor: Actor) -> None:
        logger.info(
            "Student %s: %s -> %s by %s",
            student.student_id,
            student.application_status.value,
            target.value,
            actor.user_id,
        )

    # -------- operations --------
    def create_application(
        self,
        *,
        actor: Actor,
        data: Mapping[str, Any],
        guardian_id: Optional[int] = None,
        guardian: Optional[Mapping[str, Any]] = None,
    ) -> Student:
        """Register a new applicant in status New.

        The guardian is either an existing record (``guardian_id``) or created from ``guardian``.
        """
        self._require_role(actor, _INTAKE_ROLES, "register students")
        form = parse_student_form(data)
        resolved = self._guardians.resolve(guardian_id=guardian_id, data=guardian)

        student_id = self._students.create(form=form, guardian_id=resolved.guardian_id)
        logger.info("Student %s registered (guardian %s) by %s", student_id, resolved.guardian_id, actor.user_id)
        return self._require_student(student_id)

    def mark_form_given(self, *, actor: Actor, student_id: int) -> Student:
        self._require_role(actor, _INTAKE_ROLES, "update applications")
        student = self._require_student(student_id)
        target = ApplicationStatus.FORM_GIVEN
        expected = self._require_transition(student, target)

        if not self._students.transition(student_id=student.student_id, expected=expected, target=target):
            raise self._lost_race(student)
        self._log_transition(student, target, actor)
        return self._require_student(student.student_id)

    def submit_form(
        self,
        *,
        actor: Actor,
        student_id: int,
        data: Mapping[str, Any],
        guardian: Optional[Mapping[str, Any]] = None,
    ) -> Student:
        """Store the completed form: student fields are overwritten, guardian fields merged."""
        self._require_role(actor, _INTAKE_ROLES, "update applications")
        student = self._require_student(student_id)
        target = ApplicationStatus.FORM_SUBMITTED
        expected = self._require_transition(student, target)

        form = parse_student_form(data)
        guardian_data = parse_guardian_data(guardian, partial=True) if guardian else GuardianData()

        moved = self._students.submit_form(
            student_id=student.student_id,
            expected=expected,
            form=form,
            guardian_id=student.guardian_id,
            guardian_data=guardian_data,
        )
        if not moved:
            raise self._lost_race(student)
        self._log_transition(student, target, actor)
        return self._require_student(student.student_id)

    def schedule_interview(
        self,
        *,
        actor: Actor,
        student_id: int,
        today: Optional[date] = None,
    ) -> InterviewBooking:
        self._require_role(actor, _INTAKE_ROLES, "schedule interviews")
        student = self._require_student(student_id)
        target = ApplicationStatus.INTERVIEW_SCHEDULED
        expected = self._require_transition(student, target)

        conductor = self._directory.interview_conductor()
        if not conductor:
            raise NotFoundError("No active director is available to conduct the interview")

        slot = next_interview_slot(today or now_local().date(), self._weekdays)
        interview_id = self._students.schedule_interview(
            student_id=student.student_id,
            expected=expected,
            interview_date=slot.date,
            day_of_week=slot.weekday,
            time_slot=self._time_slot,
            scheduled_by=actor.user_id,
            conductor_id=conductor.user_id,
        )
        if interview_id is None:
            raise self._lost_race(student)
        self._log_transition(student, target, actor)

        interview = self._interviews.get_by_id(interview_id)
        if not interview:
            raise NotFoundError(f"Interview {interview_id} not found")

        notification = self._notifications.interview_scheduled(
            recipient_id=conductor.user_id,
            student_name=student.name,
            interview=interview,
        )
        return InterviewBooking(
            student=self._require_student(student.student_id),
            interview=interview,
            notification=notification,
        )

    def record_interview_result(
        self,
        *,
        actor: Actor,
        student_id: int,
        result: Any,
        notes: Optional[str] = None,
        halqa_id: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> Student:
        """Director's decision. Acceptance activates the student, optionally in a halqa."""
        self._require_role(actor, (Role.DIRECTOR,), "record interview results")
        student = self._require_student(student_id)
        outcome = require_enum(result, InterviewResult, "result")
        target = outcome.application_status
        expected = self._require_transition(student, target)

        if halqa_id is not None:
            if outcome != InterviewResult.ACCEPTED:
                raise ValidationError("A halqa can only be assigned to an accepted student")
            halqa_id = self._halqat.require_open(halqa_id).halqa_id

        if not self._interviews.get_scheduled_for_student(student.student_id):
            raise NotFoundError(f"No scheduled interview found for student {student.student_id}")

        interview_id = self._students.record_interview_result(
            student_id=student.student_id,
            expected=expected,
            result=outcome,
            notes=optional_text(notes),
            conducted_at=now or now_local(),
            decided_by=actor.user_id,
            halqa_id=halqa_id,
        )
        if interview_id is None:
            raise self._lost_race(student)
        self._log_transition(student, target, actor)
        return self._require_student(student.student_id)

    def assign_halqa(self, *, actor: Actor, student_id: int, halqa_id: int) -> Student:
        self._require_role(actor, (Role.DIRECTOR,), "assign halqat")
        student = self._require_student(student_id)
        if student.application_status != ApplicationStatus.ACCEPTED:
            raise InvalidStateError("Only accepted students can join a halqa")
        if student.halqa_id is not None and int(student.halqa_id) == int(halqa_id):
            return student

        halqa = self._halqat.require_open(halqa_id)
        if not self._students.assign_halqa(student_id=student.student_id, halqa_id=halqa.halqa_id):
            raise self._lost_race(student)
        logger.info("Student %s assigned to halqa %s by %s", student.student_id, halqa.halqa_id, actor.user_id)
        return self._require_student(student.student_id)

    def get_application(self, *, actor: Actor, student_id: int) -> Student:
        self._require_role(actor, _INTAKE_ROLES, "view applications")
        return self._require_student(student_id)

    def list_pending(self, *, actor: Actor, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[Student]:
        self._require_role(actor, _INTAKE_ROLES, "view applications")
        statuses = [s for s in ApplicationStatus if s.is_open]
        return self._students.list_by_status(statuses, limit=limit)

    def list_for_guardian(self, *, actor: Actor, guardian_id: int) -> Sequence[Student]:
        """Every student (applicant or enrolled) under one guardian."""
        self._require_role(actor, _INTAKE_ROLES, "view applications")
        self._guardians.get(guardian_id)
        return self._students.list_for_guardian(int(guardian_id))
