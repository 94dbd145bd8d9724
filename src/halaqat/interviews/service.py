from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..staff.model import Actor
from .model import Interview
from .repository import InterviewRepository


class InterviewService:
    """Use case: the director's interview calendar."""

    def __init__(self, interviews: InterviewRepository):
        self._interviews = interviews

    def list_upcoming(
        self,
        *,
        actor: Actor,
        today: Optional[date] = None,
        mine_only: bool = False,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> List[dict]:
        if not actor.has_role(Role.DIRECTOR):
            raise AuthorizationError("Only the director can view the interview calendar")
        today = today or now_local().date()
        return list(
            self._interviews.list_upcoming(
                from_date=today,
                conductor_id=actor.user_id if mine_only else None,
                limit=limit,
            )
        )

    def history_for_student(self, *, actor: Actor, student_id: int) -> Sequence[Interview]:
        if not actor.has_role(Role.DIRECTOR, Role.STUDENT_AFFAIRS):
            raise AuthorizationError("You are not allowed to view interviews")
        return self._interviews.list_for_student(int(student_id))
