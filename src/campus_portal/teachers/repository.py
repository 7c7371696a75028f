from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NewTeacher, Subject, Teacher


class TeacherRepository(Protocol):
    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[Teacher]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Teacher]:
        raise NotImplementedError

    def find_existing(self, *, emails: Sequence[str], usernames: Sequence[str]) -> Sequence[Teacher]:
        raise NotImplementedError

    def create(self, teacher: NewTeacher) -> int:
        raise NotImplementedError

    def create_many(self, teachers: Sequence[NewTeacher]) -> Sequence[int]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Teacher]:
        raise NotImplementedError

    def list_by_department(self, department: str) -> Sequence[Teacher]:
        raise NotImplementedError

    def update_profile(
        self,
        teacher_id: int,
        *,
        name: Optional[str],
        username: Optional[str],
        qualification: Optional[str],
        phone: Optional[str],
        address: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def update_password(self, teacher_id: int, password_hash: str) -> bool:
        raise NotImplementedError

    def set_active(self, teacher_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError

    def update_assignment(
        self,
        teacher_id: int,
        *,
        designation: Optional[str],
        department: Optional[str],
        subjects: Optional[Sequence[Subject]],
    ) -> bool:
        """Admin-side edit; None leaves a field unchanged."""

        raise NotImplementedError

    def delete(self, teacher_id: int) -> bool:
        raise NotImplementedError
