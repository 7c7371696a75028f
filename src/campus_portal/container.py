from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .admins.mysql_admin_repository import MySQLAdminRepository
from .admins.repository import AdminRepository
from .admins.service import AdminService
from .auth.policy import LeaveAccessPolicy, RoleLeavePolicy
from .auth.service import AuthService
from .common.datetime_utils import now_local
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .notices.mysql_notice_repository import MySQLNoticeRepository
from .notices.repository import NoticeRepository
from .notices.service import NoticeService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService
from .teachers.mysql_teacher_repository import MySQLTeacherRepository
from .teachers.repository import TeacherRepository
from .teachers.service import TeacherService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    students_repo: StudentRepository
    teachers_repo: TeacherRepository
    admins_repo: AdminRepository
    leaves_repo: LeaveRepository
    notices_repo: NoticeRepository

    auth_service: AuthService
    student_service: StudentService
    teacher_service: TeacherService
    admin_service: AdminService
    leave_service: LeaveService
    notice_service: NoticeService


def wire(
    *,
    students_repo: StudentRepository,
    teachers_repo: TeacherRepository,
    admins_repo: AdminRepository,
    leaves_repo: LeaveRepository,
    notices_repo: NoticeRepository,
    leave_policy: Optional[LeaveAccessPolicy] = None,
    clock: Callable[[], datetime] = now_local,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Assemble services over any repository implementations."""

    return Container(
        conn=conn,
        students_repo=students_repo,
        teachers_repo=teachers_repo,
        admins_repo=admins_repo,
        leaves_repo=leaves_repo,
        notices_repo=notices_repo,
        auth_service=AuthService(students_repo, teachers_repo, admins_repo),
        student_service=StudentService(students_repo),
        teacher_service=TeacherService(teachers_repo, students_repo),
        admin_service=AdminService(admins_repo),
        leave_service=LeaveService(
            leaves_repo,
            students_repo,
            teachers_repo,
            leave_policy or RoleLeavePolicy(),
            clock=clock,
        ),
        notice_service=NoticeService(notices_repo, clock=clock),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire(
        conn=conn,
        students_repo=MySQLStudentRepository(conn),
        teachers_repo=MySQLTeacherRepository(conn),
        admins_repo=MySQLAdminRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        notices_repo=MySQLNoticeRepository(conn),
    )
