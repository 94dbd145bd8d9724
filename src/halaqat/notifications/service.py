from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import NotificationPriority, NotificationType
from ..core.exceptions import AuthorizationError, NotFoundError
from ..interviews.model import Interview
from ..staff.model import Actor
from .model import NewNotification, Notification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    """Use case: record events for staff and track their read state.

    Emission is a single insert; there is no delivery channel or retry.
    """

    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def emit(
        self,
        *,
        recipient_id: int,
        type: NotificationType,
        title: str,
        message: str,
        related_student_id: Optional[int] = None,
        related_interview_id: Optional[int] = None,
        priority: NotificationPriority = NotificationPriority.MEDIUM,
        expires_at: Optional[datetime] = None,
    ) -> Notification:
        data = NewNotification(
            recipient_id=int(recipient_id),
            type=type,
            title=require_non_empty(title, "Title"),
            message=require_non_empty(message, "Message"),
            related_student_id=related_student_id,
            related_interview_id=related_interview_id,
            priority=priority,
            expires_at=expires_at,
        )
        notification_id = self._notifications.create(data)
        logger.info("Notification %s (%s) sent to staff user %s", notification_id, type.value, recipient_id)
        created = self._notifications.get_by_id(notification_id)
        if not created:
            raise NotFoundError(f"Notification {notification_id} not found")
        return created

    def interview_scheduled(self, *, recipient_id: int, student_name: str, interview: Interview) -> Notification:
        return self.emit(
            recipient_id=recipient_id,
            type=NotificationType.INTERVIEW_SCHEDULED,
            title="New interview scheduled",
            message=(
                f"Interview with {student_name} on {interview.day_of_week.value.capitalize()} "
                f"{interview.scheduled_date.isoformat()} ({interview.time_slot})"
            ),
            related_student_id=interview.student_id,
            related_interview_id=interview.interview_id,
            priority=NotificationPriority.HIGH,
        )

    def list_for(
        self,
        *,
        actor: Actor,
        unread_only: bool = False,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[Notification]:
        return self._notifications.list_for_recipient(
            recipient_id=actor.user_id, unread_only=unread_only, limit=limit
        )

    def unread_count(self, *, actor: Actor) -> int:
        return self._notifications.count_unread(actor.user_id)

    def mark_read(self, *, actor: Actor, notification_id: int, now: Optional[datetime] = None) -> Notification:
        """Mark one notification read. Repeating the call keeps the first ``read_at``."""
        notification = self._notifications.get_by_id(int(notification_id))
        if not notification:
            raise NotFoundError(f"Notification {notification_id} not found")
        if notification.recipient_id != actor.user_id:
            raise AuthorizationError("You can only mark your own notifications as read")

        if not notification.is_read:
            self._notifications.mark_read(notification_id=notification.notification_id, read_at=now or now_local())

        updated = self._notifications.get_by_id(notification.notification_id)
        if not updated:
            raise NotFoundError(f"Notification {notification_id} not found")
        return updated

    def mark_all_read(self, *, actor: Actor, now: Optional[datetime] = None) -> int:
        return self._notifications.mark_all_read(recipient_id=actor.user_id, read_at=now or now_local())
