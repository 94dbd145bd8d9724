from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .common.web import ok, register_error_handlers
from .config import get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_INTERVIEW_TIME_SLOT, DEFAULT_INTERVIEW_WEEKDAYS, DEFAULT_SESSION_DAYS
from .database.bootstrap import apply_schema, ensure_demo_data, list_tables
from .database.connection import DBConfig
from .guardians.controller import register as register_guardians
from .halqat.controller import register as register_halqat
from .notifications.controller import register as register_notifications
from .staff.controller import register as register_staff
from .students.controller import register as register_onboarding


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Passing a ready ``container`` skips all database setup (used by the tests).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        app.logger.info(
            "[halaqat] settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe()
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            app.logger.info("[halaqat] schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_data(db_config)
            app.logger.info("[halaqat] demo seed ready")

        container = build_container(
            db_config=db_config,
            interview_weekdays=getattr(settings, "INTERVIEW_WEEKDAYS", DEFAULT_INTERVIEW_WEEKDAYS),
            interview_time_slot=getattr(settings, "INTERVIEW_TIME_SLOT", DEFAULT_INTERVIEW_TIME_SLOT),
        )

    app.extensions["halaqat.container"] = container
    register_error_handlers(app)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return ok(status="ok")

    register_staff(app, container)
    register_guardians(app, container)
    register_halqat(app, container)
    register_onboarding(app, container)
    register_notifications(app, container)

    return app
