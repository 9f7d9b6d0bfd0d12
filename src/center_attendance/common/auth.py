from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import Role


def _deny(status: int, message: str, code: str):
    return jsonify({"success": False, "error": code, "message": message}), status


def current_user_id() -> int:
    return int(session["user_id"])


def login_required(view):
    """Identity is put in the signed session by the auth layer; we only trust it here."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return _deny(401, "Authentication required", "unauthorized")
        return view(*args, **kwargs)

    return wrapper


def role_required(role: Role):
    def decorator(view):
        @wraps(view)
        @login_required
        def wrapper(*args, **kwargs):
            if session.get("role") != role.value:
                return _deny(403, "You do not have permission for this action", "forbidden")
            return view(*args, **kwargs)

        return wrapper

    return decorator


admin_required = role_required(Role.ADMIN)
assistant_required = role_required(Role.ASSISTANT)
