from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import iso_date, iso_datetime


@dataclass(frozen=True)
class Subject:
    subject_name: str
    course: str
    semester: str

    def to_dict(self) -> dict:
        return {"subjectName": self.subject_name, "course": self.course, "semester": self.semester}


@dataclass(frozen=True)
class NewTeacher:
    name: str
    email: str
    username: str
    designation: str
    department: str
    qualification: str
    phone: str
    address: str
    college_name: str
    date_of_joining: Optional[date]
    subjects: tuple[Subject, ...]
    password_hash: str


@dataclass(frozen=True)
class Teacher:
    """Domain entity: Teacher. `department` is matched against student class names."""

    teacher_id: int
    name: str
    email: str
    username: str
    designation: str
    department: str
    qualification: str
    phone: str
    address: str
    college_name: str
    date_of_joining: Optional[date]
    password_hash: str
    subjects: tuple[Subject, ...] = field(default_factory=tuple)
    is_active: bool = True
    created_at: Optional[datetime] = None

    @property
    def courses(self) -> list[str]:
        return [s.course.strip() for s in self.subjects if s.course and s.course.strip()]

    def to_dict(self) -> dict:
        return {
            "id": self.teacher_id,
            "name": self.name,
            "email": self.email,
            "username": self.username,
            "designation": self.designation,
            "department": self.department,
            "qualification": self.qualification,
            "phone": self.phone,
            "address": self.address,
            "collegeName": self.college_name,
            "dateOfJoining": iso_date(self.date_of_joining),
            "subjects": [s.to_dict() for s in self.subjects],
            "isActive": self.is_active,
            "createdAt": iso_datetime(self.created_at),
        }
