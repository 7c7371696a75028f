from __future__ import annotations

from flask import Flask, jsonify

from ..app_logger import get_logger
from ..auth.session import current_actor, role_required
from ..common.http import handle_errors, json_body
from ..container import Container
from ..core.enums import Role

logger = get_logger("notices.http")


def register(app: Flask, container: Container) -> None:
    notices = container.notice_service

    @app.route("/api/student/notices", methods=["GET"], endpoint="student_notices")
    @role_required(Role.STUDENT)
    @handle_errors(logger)
    def student_notices():
        items = notices.list_for_student()
        return jsonify({"notices": [n.to_dict() for n in items], "message": "Notices fetched successfully"}), 200

    # Teacher board

    @app.route("/api/teacher/notices", methods=["GET"], endpoint="teacher_notices")
    @role_required(Role.TEACHER)
    @handle_errors(logger)
    def teacher_notices():
        return jsonify([n.to_dict() for n in notices.list_all()]), 200

    @app.route("/api/teacher/notices", methods=["POST"], endpoint="teacher_create_notice")
    @role_required(Role.TEACHER)
    @handle_errors(logger)
    def teacher_create_notice():
        notice = notices.create(current_role=current_actor().role, data=json_body())
        return jsonify({"message": "Notice created", "notice": notice.to_dict()}), 201

    @app.route("/api/teacher/notice/update/<int:notice_id>", methods=["POST"], endpoint="teacher_update_notice")
    @role_required(Role.TEACHER)
    @handle_errors(logger)
    def teacher_update_notice(notice_id: int):
        notice = notices.update(current_role=current_actor().role, notice_id=notice_id, data=json_body())
        return jsonify({"message": "Notice updated", "notice": notice.to_dict()}), 200

    @app.route("/api/teacher/notice/delete/<int:notice_id>", methods=["POST"], endpoint="teacher_delete_notice")
    @role_required(Role.TEACHER)
    @handle_errors(logger)
    def teacher_delete_notice(notice_id: int):
        notices.delete(current_role=current_actor().role, notice_id=notice_id)
        return jsonify({"message": "Notice deleted"}), 200

    # Admin board

    @app.route("/api/admin/notice", methods=["GET"], endpoint="admin_notices")
    @role_required(Role.ADMIN)
    @handle_errors(logger)
    def admin_notices():
        return jsonify([n.to_dict() for n in notices.list_all()]), 200

    @app.route("/api/admin/notice", methods=["POST"], endpoint="admin_create_notice")
    @role_required(Role.ADMIN)
    @handle_errors(logger)
    def admin_create_notice():
        notice = notices.create(current_role=current_actor().role, data=json_body())
        return jsonify({"message": "Notice created", "notice": notice.to_dict()}), 201

    @app.route("/api/admin/notice/update/<int:notice_id>", methods=["POST"], endpoint="admin_update_notice")
    @role_required(Role.ADMIN)
    @handle_errors(logger)
    def admin_update_notice(notice_id: int):
        notice = notices.update(current_role=current_actor().role, notice_id=notice_id, data=json_body())
        return jsonify({"message": "Notice updated", "notice": notice.to_dict()}), 200

    @app.route("/api/admin/notice/delete/<int:notice_id>", methods=["POST"], endpoint="admin_delete_notice")
    @role_required(Role.ADMIN)
    @handle_errors(logger)
    def admin_delete_notice(notice_id: int):
        notices.delete(current_role=current_actor().role, notice_id=notice_id)
        return jsonify({"message": "Notice deleted"}), 200
