from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from halaqat.core.enums import NotificationPriority, NotificationType
from halaqat.core.exceptions import AuthorizationError, NotFoundError, ValidationError


@pytest.fixture
def notifications(container):
    return container.notification_service


@pytest.fixture
def note(notifications, director):
    return notifications.emit(
        recipient_id=director.user_id,
        type=NotificationType.SYSTEM,
        title="Backup finished",
        message="Nightly backup completed",
    )


def test_emit_persists_unread(note, director):
    assert note.recipient_id == director.user_id
    assert note.is_read is False
    assert note.read_at is None
    assert note.priority == NotificationPriority.MEDIUM


def test_emit_requires_title_and_message(notifications, director):
    with pytest.raises(ValidationError):
        notifications.emit(recipient_id=director.user_id, type=NotificationType.SYSTEM, title=" ", message="x")


def test_mark_read_sets_flag_and_timestamp(notifications, director, note, fixed_now):
    updated = notifications.mark_read(actor=director, notification_id=note.notification_id, now=fixed_now)
    assert updated.is_read is True
    assert updated.read_at == fixed_now


def test_mark_read_again_keeps_first_timestamp(notifications, director, note, fixed_now):
    notifications.mark_read(actor=director, notification_id=note.notification_id, now=fixed_now)
    again = notifications.mark_read(
        actor=director, notification_id=note.notification_id, now=fixed_now + timedelta(hours=2)
    )
    assert again.is_read is True
    assert again.read_at == fixed_now


def test_only_recipient_can_mark_read(notifications, affairs, note, db):
    with pytest.raises(AuthorizationError):
        notifications.mark_read(actor=affairs, notification_id=note.notification_id)
    assert db.notifications[note.notification_id].is_read is False


def test_mark_read_unknown(notifications, director):
    with pytest.raises(NotFoundError):
        notifications.mark_read(actor=director, notification_id=123)


def test_unread_listing_and_counts(notifications, director, affairs, note, fixed_now):
    second = notifications.emit(
        recipient_id=director.user_id, type=NotificationType.SYSTEM, title="Second", message="Another"
    )
    notifications.emit(recipient_id=affairs.user_id, type=NotificationType.SYSTEM, title="Other", message="Not yours")

    assert notifications.unread_count(actor=director) == 2
    assert [n.notification_id for n in notifications.list_for(actor=director)] == [
        second.notification_id,
        note.notification_id,
    ]

    notifications.mark_read(actor=director, notification_id=note.notification_id, now=fixed_now)
    unread = notifications.list_for(actor=director, unread_only=True)
    assert [n.notification_id for n in unread] == [second.notification_id]
    assert notifications.unread_count(actor=director) == 1


def test_mark_all_read(notifications, director, affairs, note):
    notifications.emit(recipient_id=director.user_id, type=NotificationType.SYSTEM, title="2", message="2")
    notifications.emit(recipient_id=affairs.user_id, type=NotificationType.SYSTEM, title="3", message="3")

    assert notifications.mark_all_read(actor=director, now=datetime(2026, 10, 18, 8, 0)) == 2
    assert notifications.unread_count(actor=director) == 0
    assert notifications.unread_count(actor=affairs) == 1
    assert notifications.mark_all_read(actor=director) == 0
