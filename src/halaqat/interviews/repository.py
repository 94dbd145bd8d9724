from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Interview


class InterviewRepository(Protocol):
    """Read side of interviews.

    Interviews are written together with the student's status change, see
    ``StudentRepository.schedule_interview`` / ``record_interview_result``.
    """

    def get_by_id(self, interview_id: int) -> Optional[Interview]:
        raise NotImplementedError

    def get_scheduled_for_student(self, student_id: int) -> Optional[Interview]:
        raise NotImplementedError

    def list_for_student(self, student_id: int) -> Sequence[Interview]:
        raise NotImplementedError

    def list_upcoming(
        self,
        *,
        from_date: date,
        conductor_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[dict]:
        """Scheduled interviews on or after ``from_date`` (joined with student/staff names)."""

        raise NotImplementedError
