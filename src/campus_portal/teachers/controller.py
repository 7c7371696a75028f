from __future__ import annotations

from flask import Flask, jsonify

from ..app_logger import get_logger
from ..auth.session import current_actor, role_required
from ..common.http import handle_errors, json_body
from ..container import Container
from ..core.enums import Role

logger = get_logger("teachers.http")


def register(app: Flask, container: Container) -> None:
    teachers = container.teacher_service

    @app.route("/api/teachers/register", methods=["POST"], endpoint="register_teacher")
    @role_required(Role.ADMIN)
    @handle_errors(logger, "Internal server error")
    def register_teacher():
        result = teachers.register(json_body())
        return (
            jsonify(
                {
                    "message": "Teacher registered successfully",
                    "teacherId": result.teacher_id,
                    "defaultPassword": result.default_password,
                }
            ),
            201,
        )

    @app.route("/api/teachers/bulk-register", methods=["POST"], endpoint="bulk_register_teachers")
    @role_required(Role.ADMIN)
    @handle_errors(logger, "Error uploading teachers")
    def bulk_register_teachers():
        result = teachers.bulk_register(json_body().get("teachers") or [])
        return (
            jsonify(
                {
                    "message": (
                        f"Bulk teacher upload successful ({result.inserted} inserted, "
                        f"{result.skipped} skipped as duplicates)"
                    ),
                    "inserted": result.inserted,
                    "skipped": result.skipped,
                }
            ),
            201,
        )

    @app.route("/api/teachers", methods=["GET"], endpoint="list_teachers")
    @role_required(Role.ADMIN)
    @handle_errors(logger)
    def list_teachers():
        return jsonify([t.to_dict() for t in teachers.list_all()]), 200

    @app.route("/api/teacher/students", methods=["GET"], endpoint="teacher_students")
    @role_required(Role.TEACHER)
    @handle_errors(logger)
    def teacher_students():
        return jsonify([s.to_dict() for s in teachers.my_students(current_actor().user_id)]), 200

    @app.route("/api/teacher/<int:teacher_id>", methods=["GET"], endpoint="get_teacher")
    @role_required(Role.TEACHER, Role.ADMIN)
    @handle_errors(logger, "Internal server error")
    def get_teacher(teacher_id: int):
        return jsonify({"Teacher": teachers.get(teacher_id).to_dict()}), 200

    @app.route("/api/admin/teacher/<int:teacher_id>", methods=["GET"], endpoint="admin_get_teacher")
    @role_required(Role.ADMIN)
    @handle_errors(logger, "Internal server error")
    def admin_get_teacher(teacher_id: int):
        return jsonify({"Teacher": teachers.get(teacher_id).to_dict()}), 200

    @app.route(
        "/api/admin/teachers/<int:teacher_id>/AdminUpdateTeacher",
        methods=["POST"],
        endpoint="admin_update_teacher",
    )
    @role_required(Role.ADMIN)
    @handle_errors(logger, "Internal server error")
    def admin_update_teacher(teacher_id: int):
        teacher = teachers.admin_update(teacher_id, json_body())
        return jsonify({"message": "Teacher updated successfully", "teacher": teacher.to_dict()}), 200

    @app.route("/api/teachers/<int:teacher_id>", methods=["POST"], endpoint="update_teacher")
    @role_required(Role.TEACHER)
    @handle_errors(logger, "Internal server error")
    def update_teacher(teacher_id: int):
        teacher = teachers.update_profile(
            current_user_id=current_actor().user_id,
            teacher_id=teacher_id,
            data=json_body(),
        )
        return jsonify(teacher.to_dict()), 200

    @app.route("/api/teacher/<int:teacher_id>/change-password", methods=["POST"], endpoint="teacher_change_password")
    @role_required(Role.TEACHER)
    @handle_errors(logger)
    def teacher_change_password(teacher_id: int):
        teachers.change_password(current_user_id=current_actor().user_id, teacher_id=teacher_id, data=json_body())
        return jsonify({"message": "Password updated successfully"}), 200

    @app.route("/api/delete/teacher/<int:teacher_id>", methods=["POST"], endpoint="delete_teacher")
    @role_required(Role.ADMIN)
    @handle_errors(logger, "Internal server error")
    def delete_teacher(teacher_id: int):
        teachers.delete(teacher_id)
        return jsonify({"message": "Teacher deleted successfully"}), 200
