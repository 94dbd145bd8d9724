from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import NotificationPriority, NotificationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import NewNotification, Notification
from .repository import NotificationRepository

_COLUMNS = """
    notification_id, recipient_id, type, title, message, related_student_id,
    related_interview_id, is_read, read_at, priority, expires_at, created_at
"""


def _to_notification(row: dict) -> Notification:
    return Notification(
        notification_id=int(row["notification_id"]),
        recipient_id=int(row["recipient_id"]),
        type=NotificationType(row["type"]),
        title=row["title"],
        message=row["message"],
        related_student_id=row.get("related_student_id"),
        related_interview_id=row.get("related_interview_id"),
        is_read=bool(row.get("is_read")),
        read_at=row.get("read_at"),
        priority=NotificationPriority(row.get("priority") or NotificationPriority.MEDIUM.value),
        expires_at=row.get("expires_at"),
        created_at=row.get("created_at"),
    )


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, data: NewNotification) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notifications(
                    recipient_id, type, title, message, related_student_id,
                    related_interview_id, priority, expires_at, is_read
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,0)
                """,
                (
                    int(data.recipient_id),
                    data.type.value,
                    data.title,
                    data.message,
                    data.related_student_id,
                    data.related_interview_id,
                    data.priority.value,
                    data.expires_at,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, notification_id: int) -> Optional[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM notifications WHERE notification_id=%s", (int(notification_id),))
            row = fetchone(cur)
            return _to_notification(row) if row else None

    def list_for_recipient(
        self,
        *,
        recipient_id: int,
        unread_only: bool = False,
        limit: int = 200,
    ) -> Sequence[Notification]:
        sql = f"SELECT {_COLUMNS} FROM notifications WHERE recipient_id=%s"
        if unread_only:
            sql += " AND is_read=0"
        sql += " ORDER BY created_at DESC, notification_id DESC LIMIT %s"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, (int(recipient_id), int(limit)))
            return [_to_notification(r) for r in fetchall(cur)]

    def count_unread(self, recipient_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM notifications WHERE recipient_id=%s AND is_read=0",
                (int(recipient_id),),
            )
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def mark_read(self, *, notification_id: int, read_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE notifications SET is_read=1, read_at=%s WHERE notification_id=%s AND is_read=0",
                (read_at, int(notification_id)),
            )
            return cur.rowcount > 0

    def mark_all_read(self, *, recipient_id: int, read_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE notifications SET is_read=1, read_at=%s WHERE recipient_id=%s AND is_read=0",
                (read_at, int(recipient_id)),
            )
            return int(cur.rowcount)
