from __future__ import annotations

from flask import Flask, current_app, jsonify, session

from ..app_logger import get_logger
from ..common.http import handle_errors, json_body
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS
from .service import SessionUser
from .session import current_actor, end_session, login_required, start_session

logger = get_logger("auth.http")


def _user_payload(user_id: int, name: str, role: str) -> dict:
    return {"id": user_id, "name": name, "role": role}


def _login_response(user: SessionUser):
    start_session(user, days=int(current_app.config.get("SESSION_DAYS", DEFAULT_SESSION_DAYS)))
    return (
        jsonify(
            {
                "message": "Login successful",
                "user": _user_payload(user.user_id, user.name, user.role.value),
            }
        ),
        200,
    )


def register(app: Flask, container: Container) -> None:
    auth = container.auth_service

    @app.route("/api/student/login", methods=["POST"], endpoint="student_login")
    @handle_errors(logger)
    def student_login():
        return _login_response(auth.login_student(json_body()))

    @app.route("/api/teacher/login", methods=["POST"], endpoint="teacher_login")
    @handle_errors(logger)
    def teacher_login():
        return _login_response(auth.login_teacher(json_body()))

    @app.route("/api/admin/login", methods=["POST"], endpoint="admin_login")
    @handle_errors(logger)
    def admin_login():
        return _login_response(auth.login_admin(json_body()))

    def logout():
        end_session()
        return jsonify({"message": "Logged out successfully"}), 200

    for role in ("student", "teacher", "admin"):
        app.add_url_rule(
            f"/api/{role}/logout",
            endpoint=f"{role}_logout",
            view_func=login_required(logout),
            methods=["POST"],
        )

    @app.route("/api/auth/check", methods=["GET"], endpoint="auth_check")
    @login_required
    def auth_check():
        actor = current_actor()
        return jsonify({"user": _user_payload(actor.user_id, session.get("name"), actor.role.value)}), 200
