from __future__ import annotations

from flask import Flask, jsonify

from ..app_logger import get_logger
from ..auth.session import current_actor, role_required
from ..common.http import handle_errors, json_body
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError

logger = get_logger("admins.http")


def _active_flag(data: dict) -> bool:
    value = data.get("active")
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "false"}:
        return value.strip().lower() == "true"
    raise ValidationError("active must be true or false")


def register(app: Flask, container: Container) -> None:
    admins = container.admin_service
    students = container.student_service
    teachers = container.teacher_service

    @app.route("/api/admin/register", methods=["POST"], endpoint="register_admin")
    @handle_errors(logger)
    def register_admin():
        admin_id = admins.register(json_body())
        return jsonify({"message": "Admin registered successfully", "adminId": admin_id}), 201

    @app.route("/api/admin/me", methods=["GET"], endpoint="admin_me")
    @role_required(Role.ADMIN)
    @handle_errors(logger)
    def admin_me():
        return jsonify(admins.get(current_actor().user_id).to_dict()), 200

    @app.route("/api/admin/<int:admin_id>", methods=["GET"], endpoint="get_admin")
    @role_required(Role.ADMIN)
    @handle_errors(logger, "Internal server error")
    def get_admin(admin_id: int):
        return jsonify({"admin": admins.get(admin_id).to_dict()}), 200

    @app.route("/api/admin/students", methods=["GET"], endpoint="admin_students")
    @role_required(Role.ADMIN)
    @handle_errors(logger)
    def admin_students():
        return jsonify([s.to_dict() for s in students.list_all()]), 200

    @app.route("/api/admin/students/<int:student_id>/status", methods=["POST"], endpoint="admin_student_status")
    @role_required(Role.ADMIN)
    @handle_errors(logger)
    def admin_student_status(student_id: int):
        student = students.set_active(student_id=student_id, active=_active_flag(json_body()))
        return jsonify({"message": f"Student marked {student.status.value}", "student": student.to_dict()}), 200

    @app.route("/api/admin/teachers/<int:teacher_id>/status", methods=["POST"], endpoint="admin_teacher_status")
    @role_required(Role.ADMIN)
    @handle_errors(logger)
    def admin_teacher_status(teacher_id: int):
        teacher = teachers.set_active(teacher_id=teacher_id, active=_active_flag(json_body()))
        state = "activated" if teacher.is_active else "deactivated"
        return jsonify({"message": f"Teacher {state}", "teacher": teacher.to_dict()}), 200

    @app.route("/api/admin/student/<int:student_id>/toggle-status", methods=["POST"], endpoint="toggle_student_status")
    @role_required(Role.ADMIN)
    @handle_errors(logger)
    def toggle_student_status(student_id: int):
        student = students.toggle_active(student_id)
        return jsonify({"message": f"Student marked {student.status.value}", "status": student.status.value}), 200

    @app.route("/api/admin/teacher/<int:teacher_id>/toggle-status", methods=["POST"], endpoint="toggle_teacher_status")
    @role_required(Role.ADMIN)
    @handle_errors(logger)
    def toggle_teacher_status(teacher_id: int):
        teacher = teachers.toggle_active(teacher_id)
        state = "activated" if teacher.is_active else "deactivated"
        return jsonify({"message": f"Teacher {state}", "isActive": teacher.is_active}), 200

    @app.route("/api/admin/teacher-by-department", methods=["POST"], endpoint="department_roster")
    @role_required(Role.ADMIN)
    @handle_errors(logger, "Internal server error")
    def department_roster():
        return jsonify(teachers.department_roster(json_body().get("department")).to_dict()), 200
