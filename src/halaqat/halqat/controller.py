from __future__ import annotations

from flask import Flask

from ..common.web import login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/halqat", methods=["GET"], endpoint="list_halqat")
    @login_required
    def list_halqat():
        return ok(halqat=container.halqa_service.list_active())
