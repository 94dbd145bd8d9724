from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import NewNotification, Notification


class NotificationRepository(Protocol):
    def create(self, data: NewNotification) -> int:
        raise NotImplementedError

    def get_by_id(self, notification_id: int) -> Optional[Notification]:
        raise NotImplementedError

    def list_for_recipient(
        self,
        *,
        recipient_id: int,
        unread_only: bool = False,
        limit: int = 200,
    ) -> Sequence[Notification]:
        raise NotImplementedError

    def count_unread(self, recipient_id: int) -> int:
        raise NotImplementedError

    def mark_read(self, *, notification_id: int, read_at: datetime) -> bool:
        """Set the read flag only if it is not set yet.

        Returns True when this call flipped it, False if it was already read.
        """

        raise NotImplementedError

    def mark_all_read(self, *, recipient_id: int, read_at: datetime) -> int:
        raise NotImplementedError
