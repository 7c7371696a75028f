from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from ..app_logger import get_logger
from ..common.passwords import hash_password, new_password_hash, student_default_password
from ..common.validators import optional_str, require_date, require_fields, require_non_empty
from ..core.constants import STUDENT_BULK_FIELDS
from ..core.enums import Role, StudentStatus
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from .model import NewStudent, Student
from .repository import StudentRepository

logger = get_logger("students")

_REQUIRED_ON_REGISTER = ("name", "email", "rollNo", "className", "semester", "phone")


def _cell_to_str(value: Any) -> Any:
    # Spreadsheet imports hand numbers for roll numbers and phones.
    if isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return value


@dataclass(frozen=True)
class RegisteredStudent:
    student_id: int
    default_password: str


class StudentService:
    """Use cases: student registration, profile and directory lookups."""

    def __init__(self, students: StudentRepository):
        self._students = students

    @staticmethod
    def _build_new(data: Mapping[str, Any]) -> tuple[NewStudent, str]:
        name = require_non_empty(data.get("name"), "name")
        roll_no = require_non_empty(data.get("rollNo"), "rollNo")
        phone = require_non_empty(data.get("phone"), "phone")
        raw_password = student_default_password(name, roll_no, phone)

        dob = optional_str(data.get("dob"))
        new = NewStudent(
            name=name,
            email=require_non_empty(data.get("email"), "email").lower(),
            roll_no=roll_no,
            class_name=require_non_empty(data.get("className"), "className"),
            semester=require_non_empty(data.get("semester"), "semester"),
            phone=phone,
            password_hash=hash_password(raw_password),
            address=optional_str(data.get("address")),
            dob=require_date(dob, "dob") if dob else None,
            gender=optional_str(data.get("gender")),
            parent_name=optional_str(data.get("parentName")),
            parent_phone=optional_str(data.get("parentPhone")),
        )
        return new, raw_password

    def register(self, data: Mapping[str, Any]) -> RegisteredStudent:
        require_fields(data, _REQUIRED_ON_REGISTER, "All required fields must be filled")
        new, raw_password = self._build_new(data)

        if self._students.find_existing(emails=[new.email], roll_nos=[new.roll_no]):
            raise ConflictError("Student with this Email or Roll No already exists")

        student_id = self._students.create(new)
        logger.info("registered student id=%s roll_no=%s", student_id, new.roll_no)
        return RegisteredStudent(student_id=student_id, default_password=raw_password)

    def bulk_register(self, rows: Sequence[Mapping[str, Any]]) -> Sequence[Student]:
        if not rows or not isinstance(rows, (list, tuple)):
            raise ValidationError("No student data provided")

        for index, row in enumerate(rows, start=1):
            if not isinstance(row, Mapping):
                raise ValidationError(f"Row {index}: Expected an object with student fields")
            for field in STUDENT_BULK_FIELDS:
                value = row.get(field)
                if value is None or not str(value).strip():
                    raise ValidationError(f'Row {index}: Missing required field "{field}"')

        normalized = [{k: _cell_to_str(v) for k, v in row.items()} for row in rows]
        built = [self._build_new(row)[0] for row in normalized]

        if len({s.email for s in built}) != len(built) or len({s.roll_no for s in built}) != len(built):
            raise ValidationError("Duplicate email or rollNo inside the uploaded data")

        existing = self._students.find_existing(
            emails=[s.email for s in built],
            roll_nos=[s.roll_no for s in built],
        )
        if existing:
            dupes = ", ".join(f"{s.email}/{s.roll_no}" for s in existing)
            raise ValidationError(f"Duplicate email or rollNo found: {dupes}")

        ids = self._students.create_many(built)
        logger.info("bulk registered %d students", len(ids))
        created = self._students.get_many(ids)
        return [created[i] for i in ids if i in created]

    def get(self, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("Student not found")
        return student

    def get_profile(self, *, current_role: Role, current_user_id: int, student_id: int) -> Student:
        if current_role == Role.STUDENT and int(current_user_id) != int(student_id):
            raise AuthorizationError("You can only view your own profile")
        return self.get(student_id)

    def update_profile(self, *, current_user_id: int, student_id: int, data: Mapping[str, Any]) -> Student:
        if int(current_user_id) != int(student_id):
            raise AuthorizationError("You can only update your own profile")
        self.get(student_id)

        self._students.update_profile(
            int(student_id),
            name=optional_str(data.get("name")),
            phone=optional_str(data.get("phone")),
            address=optional_str(data.get("address")),
            parent_name=optional_str(data.get("parentName")),
            parent_phone=optional_str(data.get("parentPhone")),
        )
        return self.get(student_id)

    def change_password(self, *, current_user_id: int, student_id: int, data: Mapping[str, Any]) -> None:
        if int(current_user_id) != int(student_id):
            raise AuthorizationError("You can only change your own password")
        student = self.get(student_id)
        self._students.update_password(student.student_id, new_password_hash(student.password_hash, dict(data)))
        logger.info("student id=%s changed password", student.student_id)

    def classmates(self, *, student_id: int, class_name: str) -> Sequence[Student]:
        class_name = require_non_empty(class_name, "className")
        others = [s for s in self._students.list_by_classes([class_name]) if s.student_id != int(student_id)]
        if not others:
            raise NotFoundError("No other students found in this class.")
        return others

    def list_all(self) -> Sequence[Student]:
        return self._students.list_all()

    def set_active(self, *, student_id: int, active: bool) -> Student:
        self.get(student_id)
        status = StudentStatus.ACTIVE if active else StudentStatus.INACTIVE
        self._students.set_status(int(student_id), status)
        logger.info("student id=%s status -> %s", student_id, status.value)
        return self.get(student_id)

    def toggle_active(self, student_id: int) -> Student:
        return self.set_active(student_id=student_id, active=not self.get(student_id).is_active)

    def delete(self, student_id: int) -> None:
        student = self.get(student_id)
        self._students.delete(student.student_id)
        logger.info("deleted student id=%s roll_no=%s", student.student_id, student.roll_no)
