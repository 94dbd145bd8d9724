from __future__ import annotations

from flask import Flask, session

from ..common.web import current_actor, json_body, login_required, ok, roles_required
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/auth/login", methods=["POST"], endpoint="login")
    def login():
        body = json_body()
        actor = container.auth_service.authenticate(body.get("email", ""), body.get("password", ""))

        session.clear()
        session.permanent = bool(body.get("remember_me"))
        session["user_id"] = actor.user_id
        session["name"] = actor.name
        session["role"] = actor.role.value
        return ok(user=actor.to_dict())

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok(message="Signed out")

    @app.route("/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return ok(user=current_actor().to_dict())

    @app.route("/api/staff", methods=["GET"], endpoint="list_staff")
    @roles_required(Role.DIRECTOR, Role.SUPERVISOR)
    def list_staff():
        users = container.staff_service.list_staff(actor=current_actor())
        return ok(staff=[u.to_dict() for u in users])

    @app.route("/api/staff", methods=["POST"], endpoint="create_staff")
    @roles_required(Role.DIRECTOR)
    def create_staff():
        body = json_body()
        user = container.staff_service.create_account(
            actor=current_actor(),
            name=body.get("name", ""),
            email=body.get("email", ""),
            password=body.get("password", ""),
            role=body.get("role", ""),
            phone=body.get("phone"),
        )
        return ok(201, user=user.to_dict())
