from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Halqa


class HalqaRepository(Protocol):
    def get_by_id(self, halqa_id: int) -> Optional[Halqa]:
        raise NotImplementedError

    def count_active_students(self, halqa_id: int) -> int:
        raise NotImplementedError

    def list_active(self) -> Sequence[Halqa]:
        raise NotImplementedError
