from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence

from ..core.enums import StudentStatus
from .model import NewStudent, Student


class StudentRepository(Protocol):
    """Repository interface for Student.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_many(self, student_ids: Sequence[int]) -> Mapping[int, Student]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Student]:
        raise NotImplementedError

    def find_existing(self, *, emails: Sequence[str], roll_nos: Sequence[str]) -> Sequence[Student]:
        """Students whose email or roll number is in the given lists."""

        raise NotImplementedError

    def create(self, student: NewStudent) -> int:
        raise NotImplementedError

    def create_many(self, students: Sequence[NewStudent]) -> Sequence[int]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def list_by_classes(self, class_names: Sequence[str]) -> Sequence[Student]:
        raise NotImplementedError

    def update_profile(
        self,
        student_id: int,
        *,
        name: Optional[str],
        phone: Optional[str],
        address: Optional[str],
        parent_name: Optional[str],
        parent_phone: Optional[str],
    ) -> bool:
        """Overwrite the editable fields; None leaves a field unchanged."""

        raise NotImplementedError

    def update_password(self, student_id: int, password_hash: str) -> bool:
        raise NotImplementedError

    def set_status(self, student_id: int, status: StudentStatus) -> bool:
        raise NotImplementedError

    def delete(self, student_id: int) -> bool:
        """Remove the student; their leave requests are removed with them."""

        raise NotImplementedError
