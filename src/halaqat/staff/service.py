from __future__ import annotations

import logging
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import optional_text, require_enum, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from .model import Actor, StaffUser
from .repository import StaffRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate a staff member (login)."""

    def __init__(self, staff: StaffRepository):
        self._staff = staff

    def authenticate(self, email: str, password: str) -> Actor:
        if not isinstance(email, str) or not isinstance(password, str):
            raise AuthenticationError("Invalid email or password")

        user = self._staff.get_by_email(email.strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # Stored hash is not in werkzeug format.
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        logger.info("Staff user %s signed in (%s)", user.user_id, user.role.value)
        return Actor(user_id=user.user_id, role=user.role, name=user.name)


class StaffService:
    """Use case: manage staff accounts (director)."""

    def __init__(self, staff: StaffRepository):
        self._staff = staff

    def create_account(
        self,
        *,
        actor: Actor,
        name: str,
        email: str,
        password: str,
        role: str,
        phone: Optional[str] = None,
    ) -> StaffUser:
        if not actor.has_role(Role.DIRECTOR):
            raise AuthorizationError("Only the director can create staff accounts")

        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email").lower()
        if "@" not in email:
            raise ValidationError("Email is not valid")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        staff_role = require_enum(role, Role, "role")

        if self._staff.get_by_email(email):
            raise ConflictError(f"Email {email} is already registered")

        user_id = self._staff.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=staff_role,
            phone=optional_text(phone),
        )
        logger.info("Staff account %s created with role %s by %s", user_id, staff_role.value, actor.user_id)
        created = self._staff.get_by_id(user_id)
        if not created:
            raise NotFoundError("Staff account was not stored")
        return created

    def list_staff(self, *, actor: Actor) -> Sequence[StaffUser]:
        if not actor.has_role(Role.DIRECTOR, Role.SUPERVISOR):
            raise AuthorizationError("You are not allowed to list staff")
        return self._staff.list_all()
