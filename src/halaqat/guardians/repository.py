from __future__ import annotations

from typing import Optional, Protocol

from .model import Guardian, GuardianData


class GuardianRepository(Protocol):
    def create(self, data: GuardianData) -> int:
        raise NotImplementedError

    def get_by_id(self, guardian_id: int) -> Optional[Guardian]:
        raise NotImplementedError

    def update(self, guardian_id: int, data: GuardianData) -> bool:
        """Apply the provided fields only. Returns False if the guardian is absent."""

        raise NotImplementedError
