from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role carried in the session, used for authorization."""

    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


class TeacherStatus(str, Enum):
    """Teacher-side verdict on a leave request."""

    PENDING = "Pending"
    RECOMMENDED = "Recommended"
    REJECTED = "Rejected"


class AdminStatus(str, Enum):
    """Admin-side (final) verdict on a leave request."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class LeaveStage(str, Enum):
    """Single stored state of a leave request.

    Both status fields are derived from it (see leaves.state).
    """

    PENDING = "PENDING"
    TEACHER_RECOMMENDED = "TEACHER_RECOMMENDED"
    TEACHER_REJECTED = "TEACHER_REJECTED"
    ADMIN_APPROVED = "ADMIN_APPROVED"
    ADMIN_REJECTED = "ADMIN_REJECTED"


class StudentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
