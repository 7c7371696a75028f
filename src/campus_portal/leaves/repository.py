from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStage
from .model import LeaveRequest


class LeaveRepository(Protocol):
    """Leave store. All list methods return newest `applied_at` first."""

    def create(
        self,
        *,
        student_id: int,
        reason: str,
        start_date: date,
        end_date: date,
        applied_at: datetime,
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_for_student(self, student_id: int) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_for_students(self, student_ids: Sequence[int]) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_all(self) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def transition(
        self,
        *,
        leave_id: int,
        expected: LeaveStage,
        new: LeaveStage,
        decided_at: datetime,
    ) -> bool:
        """Move `leave_id` to `new` only if it is still at `expected`."""

        raise NotImplementedError

    def delete_pending(self, leave_id: int) -> bool:
        """Delete `leave_id` only while it is still PENDING."""

        raise NotImplementedError
