from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Mapping, Sequence

from ..app_logger import get_logger
from ..auth.policy import Actor, LeaveAccessPolicy
from ..common.datetime_utils import now_local
from ..common.validators import require_date, require_fields, require_int, require_non_empty
from ..core.constants import LEAVE_DELETE_FORBIDDEN
from ..core.exceptions import ForbiddenError, InvalidTransitionError, NotFoundError
from ..students.repository import StudentRepository
from ..teachers.repository import TeacherRepository
from . import state
from .model import LeaveRequest, LeaveView
from .repository import LeaveRepository

logger = get_logger("leaves")


class LeaveService:
    """Two-stage leave approval: student submits, teacher recommends, admin approves.

    Role and ownership checks are delegated to the injected policy; this class
    only enforces the lifecycle rules in `leaves.state`.
    """

    def __init__(
        self,
        leaves: LeaveRepository,
        students: StudentRepository,
        teachers: TeacherRepository,
        policy: LeaveAccessPolicy,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._leaves = leaves
        self._students = students
        self._teachers = teachers
        self._policy = policy
        self._clock = clock

    def get(self, leave_id: int) -> LeaveRequest:
        leave = self._leaves.get_by_id(int(leave_id))
        if not leave:
            raise NotFoundError("Leave not found")
        return leave

    def _with_students(self, leaves: Sequence[LeaveRequest]) -> list[LeaveView]:
        students = self._students.get_many([lv.student_id for lv in leaves])
        out: list[LeaveView] = []
        for lv in leaves:
            student = students.get(lv.student_id)
            out.append(LeaveView(leave=lv, student=student.summary() if student else None))
        return out

    def submit(self, actor: Actor, data: Mapping[str, Any]) -> LeaveRequest:
        require_fields(data, ("studentId", "reason", "startDate", "endDate"))
        student_id = require_int(data["studentId"], "studentId")
        reason = require_non_empty(data["reason"], "reason")
        start_date = require_date(data["startDate"], "startDate")
        end_date = require_date(data["endDate"], "endDate")

        self._policy.require_submit(actor, student_id)
        if not self._students.get_by_id(student_id):
            raise NotFoundError("Student not found")

        leave_id = self._leaves.create(
            student_id=student_id,
            reason=reason,
            start_date=start_date,
            end_date=end_date,
            applied_at=self._clock(),
        )
        logger.info("leave id=%s submitted by student id=%s", leave_id, student_id)
        return self.get(leave_id)

    def list_for_student(self, actor: Actor, student_id: int) -> Sequence[LeaveRequest]:
        self._policy.require_view_student(actor, int(student_id))
        return self._leaves.list_for_student(int(student_id))

    def list_for_teacher(self, actor: Actor) -> Sequence[LeaveView]:
        """Leaves of students whose class matches the teacher's department."""

        self._policy.require_teacher(actor)
        teacher = self._teachers.get_by_id(actor.user_id)
        if not teacher:
            raise NotFoundError("Teacher not found")

        students = self._students.list_by_classes([teacher.department])
        leaves = self._leaves.list_for_students([s.student_id for s in students])
        return self._with_students(leaves)

    def list_all(self, actor: Actor) -> Sequence[LeaveView]:
        self._policy.require_admin(actor)
        return self._with_students(self._leaves.list_all())

    def _apply(self, leave: LeaveRequest, new_stage) -> LeaveView:
        moved = self._leaves.transition(
            leave_id=leave.leave_id,
            expected=leave.stage,
            new=new_stage,
            decided_at=self._clock(),
        )
        if not moved:
            # Lost a race with another decision or a delete.
            self.get(leave.leave_id)
            raise InvalidTransitionError("Leave was updated by someone else, reload and try again")

        logger.info("leave id=%s %s -> %s", leave.leave_id, leave.stage.value, new_stage.value)
        return self._with_students([self.get(leave.leave_id)])[0]

    def teacher_decide(self, actor: Actor, leave_id: int, status: Any) -> LeaveView:
        self._policy.require_teacher(actor)
        decision = state.parse_teacher_decision(status)
        leave = self.get(leave_id)
        return self._apply(leave, state.after_teacher_decision(leave.stage, decision))

    def admin_decide(self, actor: Actor, leave_id: int, status: Any) -> LeaveView:
        self._policy.require_admin(actor)
        decision = state.parse_admin_decision(status)
        leave = self.get(leave_id)
        return self._apply(leave, state.after_admin_decision(leave.stage, decision))

    def delete(self, actor: Actor, leave_id: int) -> None:
        leave = self.get(leave_id)
        self._policy.require_delete(actor, leave.student_id)
        if not state.is_deletable(leave.stage):
            raise ForbiddenError(LEAVE_DELETE_FORBIDDEN)

        if not self._leaves.delete_pending(leave.leave_id):
            self.get(leave.leave_id)
            raise ForbiddenError(LEAVE_DELETE_FORBIDDEN)
        logger.info("leave id=%s deleted by student id=%s", leave.leave_id, actor.user_id)
