from __future__ import annotations

import logging

from flask import jsonify, request

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def json_error(message: str, status: int):
    return jsonify({"error": message}), status


def request_json() -> dict:
    """JSON body of the current request, {} when absent or not an object."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def domain_error_response(exc: DomainError, *, unauthorized_status: int = 401):
    """Map a domain exception onto the JSON error taxonomy."""
    if isinstance(exc, ValidationError):
        return json_error(str(exc), 400)
    if isinstance(exc, AuthenticationError):
        return json_error("Unauthorized", 401)
    if isinstance(exc, AuthorizationError):
        return json_error("Unauthorized" if unauthorized_status == 401 else "Forbidden", unauthorized_status)
    if isinstance(exc, NotFoundError):
        return json_error(str(exc) or "Not found", 404)
    if isinstance(exc, PersistenceError):
        logger.error("persistence failure: %s", exc)
        return json_error("Internal server error", 500)
    return json_error(str(exc), 400)


def internal_error_response(message: str):
    """Log the active exception server-side and hide it from the client."""
    logger.exception(message)
    return json_error(message, 500)
