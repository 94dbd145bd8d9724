from __future__ import annotations

from typing import List

from ..core.exceptions import NotFoundError, ValidationError
from .model import Halqa
from .repository import HalqaRepository


class HalqaService:
    def __init__(self, halqat: HalqaRepository):
        self._halqat = halqat

    def require_open(self, halqa_id: int) -> Halqa:
        """The halqa an accepted student joins: must exist, be active and have a free seat."""
        halqa = self._halqat.get_by_id(int(halqa_id))
        if not halqa or not halqa.is_active:
            raise NotFoundError(f"Halqa {halqa_id} not found")
        if self._halqat.count_active_students(halqa.halqa_id) >= halqa.max_students:
            raise ValidationError(f"Halqa {halqa.name} is full ({halqa.max_students} students)")
        return halqa

    def list_active(self) -> List[dict]:
        return [
            h.to_dict(student_count=self._halqat.count_active_students(h.halqa_id))
            for h in self._halqat.list_active()
        ]
