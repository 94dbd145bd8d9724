from __future__ import annotations

from flask import Flask, request

from ..common.web import current_actor, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/notifications", methods=["GET"], endpoint="my_notifications")
    @login_required
    def my_notifications():
        unread_only = request.args.get("unread", "").lower() in {"1", "true", "yes"}
        items = container.notification_service.list_for(actor=current_actor(), unread_only=unread_only)
        return ok(notifications=[n.to_dict() for n in items])

    @app.route("/api/notifications/unread-count", methods=["GET"], endpoint="unread_notifications")
    @login_required
    def unread_notifications():
        return ok(count=container.notification_service.unread_count(actor=current_actor()))

    @app.route("/api/notifications/<int:notification_id>/read", methods=["PUT"], endpoint="read_notification")
    @login_required
    def read_notification(notification_id: int):
        notification = container.notification_service.mark_read(
            actor=current_actor(), notification_id=notification_id
        )
        return ok(notification=notification.to_dict())

    @app.route("/api/notifications/read-all", methods=["PUT"], endpoint="read_all_notifications")
    @login_required
    def read_all_notifications():
        updated = container.notification_service.mark_all_read(actor=current_actor())
        return ok(updated=updated)
