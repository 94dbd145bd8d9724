from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import NotificationPriority, NotificationType


@dataclass(frozen=True)
class Notification:
    """Domain entity: an in-app message addressed to one staff user."""

    notification_id: int
    recipient_id: int
    type: NotificationType
    title: str
    message: str
    related_student_id: Optional[int] = None
    related_interview_id: Optional[int] = None
    is_read: bool = False
    read_at: Optional[datetime] = None
    priority: NotificationPriority = NotificationPriority.MEDIUM
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.notification_id,
            "recipient_id": self.recipient_id,
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "related_student_id": self.related_student_id,
            "related_interview_id": self.related_interview_id,
            "is_read": self.is_read,
            "read_at": isoformat_or_none(self.read_at),
            "priority": self.priority.value,
            "expires_at": isoformat_or_none(self.expires_at),
            "created_at": isoformat_or_none(self.created_at),
        }


@dataclass(frozen=True)
class NewNotification:
    recipient_id: int
    type: NotificationType
    title: str
    message: str
    related_student_id: Optional[int] = None
    related_interview_id: Optional[int] = None
    priority: NotificationPriority = NotificationPriority.MEDIUM
    expires_at: Optional[datetime] = None
