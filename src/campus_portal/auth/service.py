from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..admins.repository import AdminRepository
from ..app_logger import get_logger
from ..common.passwords import verify_password
from ..common.validators import require_fields
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ForbiddenError
from ..students.repository import StudentRepository
from ..teachers.repository import TeacherRepository

logger = get_logger("auth")

_INVALID = "Invalid credentials"


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    name: str
    role: Role


class AuthService:
    """Use case: authenticate a student, teacher or admin (login)."""

    def __init__(self, students: StudentRepository, teachers: TeacherRepository, admins: AdminRepository):
        self._students = students
        self._teachers = teachers
        self._admins = admins

    def login_student(self, data: Mapping[str, Any]) -> SessionUser:
        require_fields(data, ("rollNo", "email", "password"))
        student = self._students.get_by_email(str(data["email"]).strip().lower())
        if not student or student.roll_no != str(data["rollNo"]).strip():
            raise AuthenticationError(_INVALID)
        if not verify_password(student.password_hash, str(data["password"])):
            raise AuthenticationError(_INVALID)
        if not student.is_active:
            raise AuthenticationError("Your Account is Inactive Contact Your Admin")

        logger.info("student id=%s logged in", student.student_id)
        return SessionUser(user_id=student.student_id, name=student.name, role=Role.STUDENT)

    def login_teacher(self, data: Mapping[str, Any]) -> SessionUser:
        require_fields(data, ("username", "email", "password"))
        teacher = self._teachers.get_by_email(str(data["email"]).strip().lower())
        if not teacher or teacher.username != str(data["username"]).strip():
            raise AuthenticationError(_INVALID)
        if not teacher.is_active:
            raise ForbiddenError("Account is deactivated. Please contact admin.")
        if not verify_password(teacher.password_hash, str(data["password"])):
            raise AuthenticationError(_INVALID)

        logger.info("teacher id=%s logged in", teacher.teacher_id)
        return SessionUser(user_id=teacher.teacher_id, name=teacher.name, role=Role.TEACHER)

    def login_admin(self, data: Mapping[str, Any]) -> SessionUser:
        require_fields(data, ("email", "password"))
        admin = self._admins.get_by_email(str(data["email"]).strip().lower())
        if not admin or not verify_password(admin.password_hash, str(data["password"])):
            raise AuthenticationError(_INVALID)

        logger.info("admin id=%s logged in", admin.admin_id)
        return SessionUser(user_id=admin.admin_id, name=admin.name, role=Role.ADMIN)
