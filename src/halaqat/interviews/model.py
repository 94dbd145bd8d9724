from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import InterviewResult, InterviewStatus, Weekday


@dataclass(frozen=True)
class Interview:
    """Domain entity: an acceptance interview for one student."""

    interview_id: int
    student_id: int
    scheduled_date: date
    scheduled_by: int
    conductor_id: Optional[int]
    day_of_week: Weekday
    status: InterviewStatus = InterviewStatus.SCHEDULED
    result: Optional[InterviewResult] = None
    notes: Optional[str] = None
    time_slot: str = "after_asr"
    conducted_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    def can_reschedule(self, today: date) -> bool:
        return self.status == InterviewStatus.SCHEDULED and self.scheduled_date > today

    def to_dict(self) -> dict:
        return {
            "id": self.interview_id,
            "student_id": self.student_id,
            "scheduled_date": self.scheduled_date.isoformat(),
            "day_of_week": self.day_of_week.value,
            "time_slot": self.time_slot,
            "scheduled_by": self.scheduled_by,
            "conductor_id": self.conductor_id,
            "status": self.status.value,
            "result": self.result.value if self.result else None,
            "notes": self.notes,
            "conducted_at": isoformat_or_none(self.conducted_at),
        }
