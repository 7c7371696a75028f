from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import iso_date, iso_datetime
from ..core.enums import AdminStatus, LeaveStage, TeacherStatus
from ..students.model import StudentSummary
from .state import admin_status_of, teacher_status_of


@dataclass(frozen=True)
class LeaveRequest:
    leave_id: int
    student_id: int
    reason: str
    start_date: date
    end_date: date
    stage: LeaveStage
    applied_at: datetime
    decided_at: Optional[datetime] = None

    @property
    def teacher_status(self) -> TeacherStatus:
        return teacher_status_of(self.stage)

    @property
    def admin_status(self) -> AdminStatus:
        return admin_status_of(self.stage)

    def to_dict(self) -> dict:
        return {
            "id": self.leave_id,
            "studentId": self.student_id,
            "reason": self.reason,
            "startDate": iso_date(self.start_date),
            "endDate": iso_date(self.end_date),
            "teacherStatus": self.teacher_status.value,
            "adminStatus": self.admin_status.value,
            "appliedDate": iso_datetime(self.applied_at),
        }


@dataclass(frozen=True)
class LeaveView:
    """A leave with its student summary, as shown to teachers and admins."""

    leave: LeaveRequest
    student: Optional[StudentSummary]

    def to_dict(self) -> dict:
        out = self.leave.to_dict()
        out["student"] = self.student.to_dict() if self.student else None
        return out
