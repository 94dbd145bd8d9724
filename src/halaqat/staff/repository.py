from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import StaffUser


class StaffRepository(Protocol):
    """Repository interface for staff accounts.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[StaffUser]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[StaffUser]:
        raise NotImplementedError

    def find_active_by_role(self, role: Role) -> Sequence[StaffUser]:
        """Active accounts with ``role``, ordered by id."""

        raise NotImplementedError

    def list_all(self) -> Sequence[StaffUser]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        phone: Optional[str] = None,
    ) -> int:
        raise NotImplementedError
