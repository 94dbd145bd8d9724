from __future__ import annotations

from datetime import date, datetime
from typing import Any, Collection, Mapping, Optional, Protocol, Sequence

from ..core.enums import ApplicationStatus, InterviewResult, Weekday
from ..guardians.model import GuardianData
from .model import Student, StudentForm


class StudentRepository(Protocol):
    """Persistence of student applications.

    Every status change is a conditional write: it only applies while the
    stored status is one of ``expected``. Methods report a lost race by
    returning False / None; composite writes run in a single transaction.
    """

    def create(self, *, form: StudentForm, guardian_id: int) -> int:
        raise NotImplementedError

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def list_by_status(
        self, statuses: Collection[ApplicationStatus], *, limit: int = 200
    ) -> Sequence[Student]:
        """Newest first."""

        raise NotImplementedError

    def list_for_guardian(self, guardian_id: int) -> Sequence[Student]:
        """Oldest first."""

        raise NotImplementedError

    def transition(
        self,
        *,
        student_id: int,
        expected: Collection[ApplicationStatus],
        target: ApplicationStatus,
        fields: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        raise NotImplementedError

    def submit_form(
        self,
        *,
        student_id: int,
        expected: Collection[ApplicationStatus],
        form: StudentForm,
        guardian_id: int,
        guardian_data: GuardianData,
    ) -> bool:
        """Move to FormSubmitted, overwrite the form fields and update the guardian."""

        raise NotImplementedError

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
        """Move to InterviewScheduled and insert the interview. Returns its id."""

        raise NotImplementedError

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
        """Complete the scheduled interview and apply the result to the student.

        Returns the completed interview id.
        """

        raise NotImplementedError

    def assign_halqa(self, *, student_id: int, halqa_id: int) -> bool:
        """Only for accepted students."""

        raise NotImplementedError
