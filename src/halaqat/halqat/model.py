from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from typing import Optional, Tuple

from ..core.constants import DEFAULT_HALQA_CAPACITY
from ..core.enums import Weekday


@dataclass(frozen=True)
class Halqa:
    """A recurring teaching circle that accepted students join."""

    halqa_id: int
    name: str
    teacher_id: Optional[int]
    supervisor_id: Optional[int]
    days: Tuple[Weekday, ...] = field(default_factory=tuple)
    start_time: time = time(14, 0)
    end_time: time = time(16, 0)
    max_students: int = DEFAULT_HALQA_CAPACITY
    is_active: bool = True

    def to_dict(self, *, student_count: Optional[int] = None) -> dict:
        out = {
            "id": self.halqa_id,
            "name": self.name,
            "teacher_id": self.teacher_id,
            "supervisor_id": self.supervisor_id,
            "days": [d.value for d in self.days],
            "start_time": self.start_time.strftime("%H:%M"),
            "end_time": self.end_time.strftime("%H:%M"),
            "max_students": self.max_students,
            "is_active": self.is_active,
        }
        if student_count is not None:
            out["student_count"] = student_count
        return out
