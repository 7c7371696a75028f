from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import iso_date, iso_datetime
from ..core.enums import StudentStatus


@dataclass(frozen=True)
class StudentSummary:
    """The slice of a student shown next to a leave request."""

    student_id: int
    name: str
    roll_no: str
    class_name: str

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "name": self.name,
            "rollNo": self.roll_no,
            "className": self.class_name,
        }


@dataclass(frozen=True)
class NewStudent:
    name: str
    email: str
    roll_no: str
    class_name: str
    semester: str
    phone: str
    password_hash: str
    address: Optional[str] = None
    dob: Optional[date] = None
    gender: Optional[str] = None
    parent_name: Optional[str] = None
    parent_phone: Optional[str] = None


@dataclass(frozen=True)
class Student:
    """Domain entity: Student (plain data, no DB access)."""

    student_id: int
    name: str
    email: str
    roll_no: str
    class_name: str
    semester: str
    phone: str
    password_hash: str
    address: Optional[str] = None
    dob: Optional[date] = None
    gender: Optional[str] = None
    parent_name: Optional[str] = None
    parent_phone: Optional[str] = None
    status: StudentStatus = StudentStatus.ACTIVE
    created_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == StudentStatus.ACTIVE

    def summary(self) -> StudentSummary:
        return StudentSummary(
            student_id=self.student_id,
            name=self.name,
            roll_no=self.roll_no,
            class_name=self.class_name,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "name": self.name,
            "email": self.email,
            "rollNo": self.roll_no,
            "className": self.class_name,
            "semester": self.semester,
            "phone": self.phone,
            "address": self.address,
            "dob": iso_date(self.dob),
            "gender": self.gender,
            "parentName": self.parent_name,
            "parentPhone": self.parent_phone,
            "status": self.status.value,
            "createdAt": iso_datetime(self.created_at),
        }
