from __future__ import annotations

from datetime import timedelta
from functools import wraps

from flask import current_app, jsonify, session

from ..core.enums import Role
from .policy import Actor
from .service import SessionUser


def start_session(user: SessionUser, *, days: int) -> None:
    session.clear()
    session.permanent = True
    current_app.permanent_session_lifetime = timedelta(days=days)
    session["user_id"] = user.user_id
    session["name"] = user.name
    session["role"] = user.role.value


def end_session() -> None:
    session.clear()


def current_actor() -> Actor:
    return Actor(user_id=int(session["user_id"]), role=Role(session["role"]))


def role_required(*roles: Role):
    """JSON 401 without a session, 403 when the session role is not allowed."""

    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session or "role" not in session:
                return jsonify({"message": "Unauthorized: please log in"}), 401
            if allowed and session.get("role") not in allowed:
                return jsonify({"message": "Forbidden: insufficient role"}), 403
            return view(*args, **kwargs)

        return wrapper

    return decorator


def login_required(view):
    return role_required()(view)
