from __future__ import annotations

from flask import Flask, jsonify

from ..app_logger import get_logger
from ..auth.session import current_actor, role_required
from ..common.http import handle_errors, json_body
from ..container import Container
from ..core.enums import Role

logger = get_logger("students.http")


def register(app: Flask, container: Container) -> None:
    students = container.student_service

    @app.route("/api/students/registration", methods=["POST"], endpoint="student_registration")
    @handle_errors(logger, "Internal server error")
    def student_registration():
        result = students.register(json_body())
        return (
            jsonify(
                {
                    "message": "Student registered successfully",
                    "studentId": result.student_id,
                    "defaultPassword": result.default_password,
                }
            ),
            201,
        )

    @app.route("/api/students/bulk-register", methods=["POST"], endpoint="student_bulk_register")
    @role_required(Role.ADMIN)
    @handle_errors(logger)
    def student_bulk_register():
        created = students.bulk_register(json_body().get("students") or [])
        return (
            jsonify(
                {
                    "message": f"{len(created)} students uploaded successfully",
                    "students": [{"name": s.name, "email": s.email, "rollNo": s.roll_no} for s in created],
                }
            ),
            201,
        )

    @app.route("/api/students/<int:student_id>", methods=["GET"], endpoint="get_student")
    @role_required(Role.STUDENT, Role.TEACHER, Role.ADMIN)
    @handle_errors(logger, "Internal server error")
    def get_student(student_id: int):
        actor = current_actor()
        student = students.get_profile(
            current_role=actor.role,
            current_user_id=actor.user_id,
            student_id=student_id,
        )
        return jsonify({"Student": student.to_dict()}), 200

    @app.route("/api/students/admin/<int:student_id>", methods=["GET"], endpoint="admin_get_student")
    @role_required(Role.ADMIN)
    @handle_errors(logger, "Internal server error")
    def admin_get_student(student_id: int):
        return jsonify({"Student": students.get(student_id).to_dict()}), 200

    @app.route("/api/students/teacher/<int:student_id>", methods=["GET"], endpoint="teacher_get_student")
    @role_required(Role.TEACHER)
    @handle_errors(logger, "Internal server error")
    def teacher_get_student(student_id: int):
        return jsonify({"Student": students.get(student_id).to_dict()}), 200

    @app.route("/api/student/<int:student_id>", methods=["POST"], endpoint="update_student")
    @role_required(Role.STUDENT)
    @handle_errors(logger, "Internal server error")
    def update_student(student_id: int):
        student = students.update_profile(
            current_user_id=current_actor().user_id,
            student_id=student_id,
            data=json_body(),
        )
        return jsonify(student.to_dict()), 200

    @app.route("/api/student/<int:student_id>/change-password", methods=["POST"], endpoint="student_change_password")
    @role_required(Role.STUDENT)
    @handle_errors(logger)
    def student_change_password(student_id: int):
        students.change_password(current_user_id=current_actor().user_id, student_id=student_id, data=json_body())
        return jsonify({"message": "Password updated successfully"}), 200

    @app.route("/api/students/class/<class_name>/<int:student_id>", methods=["GET"], endpoint="class_students")
    @role_required(Role.STUDENT)
    @handle_errors(logger, "Internal server error.")
    def class_students(class_name: str, student_id: int):
        others = students.classmates(student_id=student_id, class_name=class_name)
        return (
            jsonify({"students": [s.to_dict() for s in others], "message": "Students fetched successfully."}),
            200,
        )

    @app.route("/api/delete/student/<int:student_id>", methods=["POST"], endpoint="delete_student")
    @role_required(Role.ADMIN)
    @handle_errors(logger, "Internal server error")
    def delete_student(student_id: int):
        students.delete(student_id)
        return jsonify({"message": "Student deleted successfully"}), 200
