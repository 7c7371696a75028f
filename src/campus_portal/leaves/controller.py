from __future__ import annotations

from flask import Flask, jsonify, send_file

from ..app_logger import get_logger
from ..auth.session import current_actor, role_required
from ..common.http import handle_errors, json_body
from ..common.datetime_utils import now_local
from ..container import Container
from ..core.enums import Role
from .export import leaves_workbook

logger = get_logger("leaves.http")


def register(app: Flask, container: Container) -> None:
    leaves = container.leave_service

    @app.route("/api/student/request-leaves", methods=["POST"], endpoint="request_leave")
    @role_required(Role.STUDENT)
    @handle_errors(logger)
    def request_leave():
        leave = leaves.submit(current_actor(), json_body())
        return jsonify({"message": "Leave request submitted", "leave": leave.to_dict()}), 201

    @app.route("/api/student/<int:student_id>/my-leaves", methods=["GET"], endpoint="student_leaves")
    @role_required(Role.STUDENT)
    @handle_errors(logger, "Server error while fetching leaves")
    def student_leaves(student_id: int):
        items = leaves.list_for_student(current_actor(), student_id)
        return jsonify({"success": True, "leaves": [lv.to_dict() for lv in items]}), 200

    @app.route("/api/student/leaves/<int:leave_id>/delete", methods=["POST"], endpoint="delete_leave")
    @role_required(Role.STUDENT)
    @handle_errors(logger, "Error deleting leave")
    def delete_leave(leave_id: int):
        leaves.delete(current_actor(), leave_id)
        return jsonify({"message": "Leave deleted successfully"}), 200

    @app.route("/api/teacher/leaves", methods=["GET"], endpoint="teacher_leaves")
    @role_required(Role.TEACHER)
    @handle_errors(logger)
    def teacher_leaves():
        return jsonify([v.to_dict() for v in leaves.list_for_teacher(current_actor())]), 200

    @app.route("/api/teacher/leaves/<int:leave_id>", methods=["POST"], endpoint="teacher_decide_leave")
    @role_required(Role.TEACHER)
    @handle_errors(logger)
    def teacher_decide_leave(leave_id: int):
        view = leaves.teacher_decide(current_actor(), leave_id, json_body().get("status"))
        return jsonify(view.to_dict()), 200

    @app.route("/api/admin/leaves", methods=["GET"], endpoint="admin_leaves")
    @role_required(Role.ADMIN)
    @handle_errors(logger)
    def admin_leaves():
        return jsonify([v.to_dict() for v in leaves.list_all(current_actor())]), 200

    @app.route("/api/admin/leave/<int:leave_id>", methods=["POST"], endpoint="admin_decide_leave")
    @role_required(Role.ADMIN)
    @handle_errors(logger)
    def admin_decide_leave(leave_id: int):
        view = leaves.admin_decide(current_actor(), leave_id, json_body().get("status"))
        return jsonify(view.to_dict()), 200

    @app.route("/api/admin/leaves/export", methods=["GET"], endpoint="admin_export_leaves")
    @role_required(Role.ADMIN)
    @handle_errors(logger, "Error exporting leaves")
    def admin_export_leaves():
        buf = leaves_workbook(leaves.list_all(current_actor()))
        return send_file(
            buf,
            mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            as_attachment=True,
            download_name=f"leaves_{now_local():%Y%m%d}.xlsx",
        )
