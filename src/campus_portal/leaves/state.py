"""Leave request lifecycle.

A leave is stored as one LeaveStage; teacher/admin statuses are projections:

    PENDING --teacher Recommended--> TEACHER_RECOMMENDED --admin Approved--> ADMIN_APPROVED
       |                                   |
       +--teacher Rejected--> TEACHER_REJECTED  +--admin Rejected--> ADMIN_REJECTED

Only PENDING leaves may be deleted.
"""

from __future__ import annotations

from typing import Any

from ..core.enums import AdminStatus, LeaveStage, TeacherStatus
from ..core.exceptions import InvalidTransitionError, ValidationError

_STATUSES: dict[LeaveStage, tuple[TeacherStatus, AdminStatus]] = {
    LeaveStage.PENDING: (TeacherStatus.PENDING, AdminStatus.PENDING),
    LeaveStage.TEACHER_RECOMMENDED: (TeacherStatus.RECOMMENDED, AdminStatus.PENDING),
    LeaveStage.TEACHER_REJECTED: (TeacherStatus.REJECTED, AdminStatus.PENDING),
    LeaveStage.ADMIN_APPROVED: (TeacherStatus.RECOMMENDED, AdminStatus.APPROVED),
    LeaveStage.ADMIN_REJECTED: (TeacherStatus.RECOMMENDED, AdminStatus.REJECTED),
}

_TEACHER_MOVES = {
    TeacherStatus.RECOMMENDED: LeaveStage.TEACHER_RECOMMENDED,
    TeacherStatus.REJECTED: LeaveStage.TEACHER_REJECTED,
}

_ADMIN_MOVES = {
    AdminStatus.APPROVED: LeaveStage.ADMIN_APPROVED,
    AdminStatus.REJECTED: LeaveStage.ADMIN_REJECTED,
}


def teacher_status_of(stage: LeaveStage) -> TeacherStatus:
    return _STATUSES[stage][0]


def admin_status_of(stage: LeaveStage) -> AdminStatus:
    return _STATUSES[stage][1]


def is_deletable(stage: LeaveStage) -> bool:
    return stage == LeaveStage.PENDING


def parse_teacher_decision(value: Any) -> TeacherStatus:
    try:
        status = TeacherStatus(str(value).strip())
    except ValueError:
        status = None
    if status not in _TEACHER_MOVES:
        raise ValidationError("status must be one of: Recommended, Rejected")
    return status


def parse_admin_decision(value: Any) -> AdminStatus:
    try:
        status = AdminStatus(str(value).strip())
    except ValueError:
        status = None
    if status not in _ADMIN_MOVES:
        raise ValidationError("status must be one of: Approved, Rejected")
    return status


def after_teacher_decision(stage: LeaveStage, decision: TeacherStatus) -> LeaveStage:
    if stage != LeaveStage.PENDING:
        raise InvalidTransitionError(
            f"Teacher has already decided this leave ({teacher_status_of(stage).value})"
        )
    return _TEACHER_MOVES[decision]


def after_admin_decision(stage: LeaveStage, decision: AdminStatus) -> LeaveStage:
    if stage != LeaveStage.TEACHER_RECOMMENDED:
        if admin_status_of(stage) != AdminStatus.PENDING:
            raise InvalidTransitionError(
                f"Admin has already decided this leave ({admin_status_of(stage).value})"
            )
        raise InvalidTransitionError("Leave must be recommended by a teacher before admin review")
    return _ADMIN_MOVES[decision]
