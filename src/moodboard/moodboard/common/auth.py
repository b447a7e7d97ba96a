from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Optional

from flask import jsonify, session

from ..core.enums import Role


@dataclass(frozen=True)
class Identity:
    """Per-request identity read from the Flask session."""

    user_id: int
    role: Role
    name: str = ""


def current_identity() -> Optional[Identity]:
    user_id = session.get("user_id")
    if user_id is None:
        return None
    try:
        role = Role(session.get("role"))
    except ValueError:
        return None
    return Identity(user_id=int(user_id), role=role, name=session.get("name") or "")


def api_login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_identity() is None:
            return jsonify({"error": "Unauthorized"}), 401
        return view(*args, **kwargs)

    return wrapper


def api_admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        identity = current_identity()
        if identity is None:
            return jsonify({"error": "Unauthorized"}), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify({"error": "Forbidden"}), 403
        return view(*args, **kwargs)

    return wrapper
