from __future__ import annotations

from flask import Flask

from ..common.web import current_actor, json_body, ok, roles_required
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/guardians/<int:guardian_id>", methods=["GET"], endpoint="get_guardian")
    @roles_required(Role.STUDENT_AFFAIRS, Role.DIRECTOR)
    def get_guardian(guardian_id: int):
        guardian = container.guardian_service.get(guardian_id)
        students = container.onboarding_service.list_for_guardian(actor=current_actor(), guardian_id=guardian_id)
        return ok(guardian=guardian.to_dict(), students=[s.to_dict() for s in students])

    @app.route("/api/guardians/<int:guardian_id>", methods=["PUT"], endpoint="update_guardian")
    @roles_required(Role.STUDENT_AFFAIRS, Role.DIRECTOR)
    def update_guardian(guardian_id: int):
        guardian = container.guardian_service.update(guardian_id, json_body())
        return ok(guardian=guardian.to_dict())
