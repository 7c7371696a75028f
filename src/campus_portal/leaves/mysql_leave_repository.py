from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import LeaveStage
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, normalize_mysql_date
from .model import LeaveRequest
from .repository import LeaveRepository

_SELECT = """
    SELECT leave_id, student_id, reason, start_date, end_date, stage, applied_at, decided_at
    FROM leave_requests
"""
_ORDER = "ORDER BY applied_at DESC, leave_id DESC"


def _row_to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        leave_id=int(r["leave_id"]),
        student_id=int(r["student_id"]),
        reason=r["reason"],
        start_date=normalize_mysql_date(r["start_date"]),
        end_date=normalize_mysql_date(r["end_date"]),
        stage=LeaveStage(r["stage"]),
        applied_at=r["applied_at"],
        decided_at=r.get("decided_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        student_id: int,
        reason: str,
        start_date: date,
        end_date: date,
        applied_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(student_id, reason, start_date, end_date, stage, applied_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(student_id), reason, start_date, end_date, LeaveStage.PENDING.value, applied_at),
            )
            return int(cur.lastrowid)

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE leave_id=%s", (int(leave_id),))
            row = fetchone(cur)
            return _row_to_leave(row) if row else None

    def list_for_student(self, student_id: int) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE student_id=%s {_ORDER}", (int(student_id),))
            return [_row_to_leave(r) for r in fetchall(cur)]

    def list_for_students(self, student_ids: Sequence[int]) -> Sequence[LeaveRequest]:
        ids = sorted({int(i) for i in student_ids})
        if not ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE student_id IN ({in_clause(ids)}) {_ORDER}", tuple(ids))
            return [_row_to_leave(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {_ORDER}")
            return [_row_to_leave(r) for r in fetchall(cur)]

    def transition(
        self,
        *,
        leave_id: int,
        expected: LeaveStage,
        new: LeaveStage,
        decided_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET stage=%s, decided_at=%s
                WHERE leave_id=%s AND stage=%s
                """,
                (new.value, decided_at, int(leave_id), expected.value),
            )
            return cur.rowcount > 0

    def delete_pending(self, leave_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM leave_requests WHERE leave_id=%s AND stage=%s",
                (int(leave_id), LeaveStage.PENDING.value),
            )
            return cur.rowcount > 0
