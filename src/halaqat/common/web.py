from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Dict

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from ..staff.model import Actor

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (InvalidStateError, 409),
    (ConflictError, 409),
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
)


def error_response(kind: str, message: str, status: int):
    return jsonify({"success": False, "error": {"kind": kind, "message": message}}), status


def ok(status_code: int = 200, **payload: Any):
    return jsonify({"success": True, **payload}), status_code


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def current_actor() -> Actor:
    if "user_id" not in session:
        raise AuthenticationError("Please sign in to continue")
    return Actor(
        user_id=int(session["user_id"]),
        role=Role(session["role"]),
        name=session.get("name", ""),
    )


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response(AuthenticationError.kind, "Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return error_response(AuthenticationError.kind, "Please sign in to continue", 401)
            if session.get("role") not in {r.value for r in roles}:
                return error_response(AuthorizationError.kind, "You do not have access to this resource", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for error_cls, status in _STATUS_BY_ERROR:
            if isinstance(e, error_cls):
                return error_response(e.kind, str(e), status)
        return error_response(e.kind, str(e), 400)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        kind = NotFoundError.kind if e.code == 404 else "http_error"
        return error_response(kind, e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        message = f"Internal server error: {e}" if app.config.get("DEBUG") else "Internal server error"
        return error_response("internal_error", message, 500)
