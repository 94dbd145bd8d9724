from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class StaffUser:
    """Domain entity: a staff account (director, supervisor, teacher, student affairs).

    Note: Plain data object, no DB access code here.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    is_active: bool = True
    phone: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "is_active": self.is_active,
            "phone": self.phone,
        }


@dataclass(frozen=True)
class Actor:
    """The authenticated caller of a use case."""

    user_id: int
    role: Role
    name: str = ""

    def has_role(self, *roles: Role) -> bool:
        return self.role in roles

    def to_dict(self) -> dict:
        return {"id": self.user_id, "name": self.name, "role": self.role.value}
