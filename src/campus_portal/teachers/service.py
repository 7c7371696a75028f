from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from ..app_logger import get_logger
from ..common.passwords import hash_password, new_password_hash, teacher_default_password
from ..common.validators import optional_str, require_date, require_fields, require_non_empty
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..students.model import Student
from ..students.repository import StudentRepository
from .model import NewTeacher, Subject, Teacher
from .repository import TeacherRepository

logger = get_logger("teachers")

_REQUIRED = (
    "name",
    "email",
    "username",
    "designation",
    "department",
    "qualification",
    "phone",
    "address",
    "collegeName",
    "dateOfJoining",
    "subjects",
)


def _subject_from(value: Any) -> Subject:
    if isinstance(value, Mapping):
        return Subject(
            subject_name=str(value.get("subjectName") or "Unnamed"),
            course=str(value.get("course") or "Unknown"),
            semester=str(value.get("semester") or "N/A"),
        )
    return Subject(subject_name=str(value), course="Unknown", semester="N/A")


def normalize_subjects(raw: Any) -> tuple[Subject, ...]:
    """Accept subjects as a list, a JSON string, a single object or a bare name."""

    if isinstance(raw, (list, tuple)):
        return tuple(_subject_from(s) for s in raw)

    if isinstance(raw, str):
        if not raw.strip():
            return ()
        try:
            parsed = json.loads(raw)
        except ValueError:
            return (_subject_from(raw),)
        if isinstance(parsed, list):
            return tuple(_subject_from(s) for s in parsed)
        return (_subject_from(parsed),)

    if isinstance(raw, Mapping):
        return (_subject_from(raw),)

    return ()


@dataclass(frozen=True)
class RegisteredTeacher:
    teacher_id: int
    default_password: str


@dataclass(frozen=True)
class BulkTeacherResult:
    inserted: int
    skipped: int


@dataclass(frozen=True)
class DepartmentRoster:
    department: str
    teachers: Sequence[Teacher]
    students: Sequence[Student]

    def to_dict(self) -> dict:
        return {
            "department": self.department,
            "teachers": [t.to_dict() for t in self.teachers],
            "students": [s.to_dict() for s in self.students],
        }


class TeacherService:
    """Use cases: teacher accounts, profile and the teacher's student roster."""

    def __init__(self, teachers: TeacherRepository, students: StudentRepository):
        self._teachers = teachers
        self._students = students

    @staticmethod
    def _build_new(data: Mapping[str, Any]) -> tuple[NewTeacher, str]:
        name = require_non_empty(data.get("name"), "name")
        phone = str(data.get("phone") or "").strip()
        raw_password = teacher_default_password(name, phone)
        joined = optional_str(data.get("dateOfJoining"))

        new = NewTeacher(
            name=name,
            email=require_non_empty(data.get("email"), "email").lower(),
            username=require_non_empty(data.get("username"), "username"),
            designation=str(data.get("designation") or "").strip(),
            department=str(data.get("department") or "").strip(),
            qualification=str(data.get("qualification") or "").strip(),
            phone=phone,
            address=str(data.get("address") or "").strip(),
            college_name=str(data.get("collegeName") or "").strip(),
            date_of_joining=require_date(joined, "dateOfJoining") if joined else None,
            subjects=normalize_subjects(data.get("subjects")),
            password_hash=hash_password(raw_password),
        )
        return new, raw_password

    def register(self, data: Mapping[str, Any]) -> RegisteredTeacher:
        require_fields(data, _REQUIRED)
        new, raw_password = self._build_new(data)

        if self._teachers.get_by_username(new.username):
            raise ConflictError("Username already taken")
        if self._teachers.get_by_email(new.email):
            raise ConflictError("Teacher already exists")

        teacher_id = self._teachers.create(new)
        logger.info("registered teacher id=%s username=%s", teacher_id, new.username)
        return RegisteredTeacher(teacher_id=teacher_id, default_password=raw_password)

    def bulk_register(self, rows: Sequence[Mapping[str, Any]]) -> BulkTeacherResult:
        if not rows or not isinstance(rows, (list, tuple)):
            raise ValidationError("No teacher data provided")
        for index, row in enumerate(rows, start=1):
            if not isinstance(row, Mapping):
                raise ValidationError(f"Row {index}: Expected an object with teacher fields")

        existing = self._teachers.find_existing(
            emails=[str(r.get("email") or "").strip().lower() for r in rows],
            usernames=[str(r.get("username") or "").strip() for r in rows],
        )
        taken_emails = {t.email for t in existing}
        taken_usernames = {t.username for t in existing}

        fresh: list[NewTeacher] = []
        for row in rows:
            email = str(row.get("email") or "").strip().lower()
            username = str(row.get("username") or "").strip()
            if email in taken_emails or username in taken_usernames:
                continue
            new, _ = self._build_new(row)
            fresh.append(new)
            # Later rows in the same upload must not reuse these either.
            taken_emails.add(new.email)
            taken_usernames.add(new.username)

        if not fresh:
            raise ConflictError("All provided teachers already exist")

        self._teachers.create_many(fresh)
        result = BulkTeacherResult(inserted=len(fresh), skipped=len(rows) - len(fresh))
        logger.info("bulk teacher upload: inserted=%d skipped=%d", result.inserted, result.skipped)
        return result

    def get(self, teacher_id: int) -> Teacher:
        teacher = self._teachers.get_by_id(int(teacher_id))
        if not teacher:
            raise NotFoundError("Teacher not found")
        return teacher

    def list_all(self) -> Sequence[Teacher]:
        return self._teachers.list_all()

    def update_profile(self, *, current_user_id: int, teacher_id: int, data: Mapping[str, Any]) -> Teacher:
        if int(current_user_id) != int(teacher_id):
            raise AuthorizationError("You can only update your own profile")
        teacher = self.get(teacher_id)

        username = optional_str(data.get("username"))
        if username and username != teacher.username:
            other = self._teachers.get_by_username(username)
            if other and other.teacher_id != teacher.teacher_id:
                raise ConflictError("Username already taken")

        self._teachers.update_profile(
            teacher.teacher_id,
            name=optional_str(data.get("name")),
            username=username,
            qualification=optional_str(data.get("qualification")),
            phone=optional_str(data.get("phone")),
            address=optional_str(data.get("address")),
        )
        return self.get(teacher_id)

    def change_password(self, *, current_user_id: int, teacher_id: int, data: Mapping[str, Any]) -> None:
        if int(current_user_id) != int(teacher_id):
            raise AuthorizationError("You can only change your own password")
        teacher = self.get(teacher_id)
        self._teachers.update_password(teacher.teacher_id, new_password_hash(teacher.password_hash, dict(data)))
        logger.info("teacher id=%s changed password", teacher.teacher_id)

    def set_active(self, *, teacher_id: int, active: bool) -> Teacher:
        self.get(teacher_id)
        self._teachers.set_active(int(teacher_id), is_active=bool(active))
        logger.info("teacher id=%s active -> %s", teacher_id, bool(active))
        return self.get(teacher_id)

    def my_students(self, teacher_id: int) -> Sequence[Student]:
        """Students enrolled in any course the teacher has a subject in."""

        teacher = self.get(teacher_id)
        return self._students.list_by_classes(teacher.courses)

    def admin_update(self, teacher_id: int, data: Mapping[str, Any]) -> Teacher:
        """Admin edit of designation, department and subjects."""

        teacher = self.get(teacher_id)
        self._teachers.update_assignment(
            teacher.teacher_id,
            designation=optional_str(data.get("designation")),
            department=optional_str(data.get("department")),
            subjects=normalize_subjects(data["subjects"]) if data.get("subjects") is not None else None,
        )
        logger.info("teacher id=%s assignment updated by admin", teacher.teacher_id)
        return self.get(teacher_id)

    def toggle_active(self, teacher_id: int) -> Teacher:
        return self.set_active(teacher_id=teacher_id, active=not self.get(teacher_id).is_active)

    def delete(self, teacher_id: int) -> None:
        teacher = self.get(teacher_id)
        self._teachers.delete(teacher.teacher_id)
        logger.info("deleted teacher id=%s username=%s", teacher.teacher_id, teacher.username)

    def department_roster(self, department: Any) -> DepartmentRoster:
        """Teachers of a department and students whose class has the same name."""

        department = require_non_empty(department, "department")
        return DepartmentRoster(
            department=department,
            teachers=self._teachers.list_by_department(department),
            students=self._students.list_by_classes([department]),
        )
