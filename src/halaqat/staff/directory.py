from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import StaffUser
from .repository import StaffRepository


class StaffDirectory(Protocol):
    """Resolves which staff member is responsible for a duty.

    The onboarding workflow takes a directory as a dependency instead of
    querying staff accounts itself.
    """

    def interview_conductor(self) -> Optional[StaffUser]:
        raise NotImplementedError


class RoleStaffDirectory(StaffDirectory):
    """Assigns duties by role: interviews go to the active director with the lowest id."""

    def __init__(self, staff: StaffRepository, *, conductor_role: Role = Role.DIRECTOR):
        self._staff = staff
        self._conductor_role = conductor_role

    def interview_conductor(self) -> Optional[StaffUser]:
        candidates = self._staff.find_active_by_role(self._conductor_role)
        return candidates[0] if candidates else None
