from __future__ import annotations

from typing import Mapping, Optional, Sequence

from ..core.enums import StudentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, normalize_mysql_date
from .model import NewStudent, Student
from .repository import StudentRepository

_COLUMNS = """
    student_id, name, email, roll_no, class_name, semester, phone, address, dob, gender,
    parent_name, parent_phone, password_hash, status, created_at
"""


def _row_to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        name=r["name"],
        email=r["email"],
        roll_no=r["roll_no"],
        class_name=r["class_name"],
        semester=str(r["semester"]),
        phone=r["phone"],
        password_hash=r["password_hash"],
        address=r.get("address"),
        dob=normalize_mysql_date(r.get("dob")),
        gender=r.get("gender"),
        parent_name=r.get("parent_name"),
        parent_phone=r.get("parent_phone"),
        status=StudentStatus(r.get("status") or StudentStatus.ACTIVE.value),
        created_at=r.get("created_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (int(student_id),))
            row = fetchone(cur)
            return _row_to_student(row) if row else None

    def get_many(self, student_ids: Sequence[int]) -> Mapping[int, Student]:
        ids = sorted({int(i) for i in student_ids})
        if not ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id IN ({in_clause(ids)})", tuple(ids))
            return {s.student_id: s for s in map(_row_to_student, fetchall(cur))}

    def get_by_email(self, email: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_student(row) if row else None

    def find_existing(self, *, emails: Sequence[str], roll_nos: Sequence[str]) -> Sequence[Student]:
        clauses: list[str] = []
        params: list[object] = []
        if emails:
            clauses.append(f"email IN ({in_clause(list(emails))})")
            params.extend(emails)
        if roll_nos:
            clauses.append(f"roll_no IN ({in_clause(list(roll_nos))})")
            params.extend(roll_nos)
        if not clauses:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE {' OR '.join(clauses)}", tuple(params))
            return [_row_to_student(r) for r in fetchall(cur)]

    def _insert(self, cur, s: NewStudent) -> int:
        cur.execute(
            """
            INSERT INTO students(name, email, roll_no, class_name, semester, phone, address, dob,
                                 gender, parent_name, parent_phone, password_hash, status)
            VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
            """,
            (
                s.name,
                s.email,
                s.roll_no,
                s.class_name,
                s.semester,
                s.phone,
                s.address,
                s.dob,
                s.gender,
                s.parent_name,
                s.parent_phone,
                s.password_hash,
                StudentStatus.ACTIVE.value,
            ),
        )
        return int(cur.lastrowid)

    def create(self, student: NewStudent) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._insert(cur, student)

    def create_many(self, students: Sequence[NewStudent]) -> Sequence[int]:
        # One transaction: either every row lands or none does.
        with db_cursor(self._conn_factory) as (_, cur):
            return [self._insert(cur, s) for s in students]

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY student_id DESC")
            return [_row_to_student(r) for r in fetchall(cur)]

    def list_by_classes(self, class_names: Sequence[str]) -> Sequence[Student]:
        names = list(dict.fromkeys(class_names))
        if not names:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM students WHERE class_name IN ({in_clause(names)}) ORDER BY name",
                tuple(names),
            )
            return [_row_to_student(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE students
                SET name=COALESCE(%s, name),
                    phone=COALESCE(%s, phone),
                    address=COALESCE(%s, address),
                    parent_name=COALESCE(%s, parent_name),
                    parent_phone=COALESCE(%s, parent_phone)
                WHERE student_id=%s
                """,
                (name, phone, address, parent_name, parent_phone, int(student_id)),
            )
            return cur.rowcount > 0

    def update_password(self, student_id: int, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE students SET password_hash=%s WHERE student_id=%s", (password_hash, int(student_id)))
            return cur.rowcount > 0

    def set_status(self, student_id: int, status: StudentStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE students SET status=%s WHERE student_id=%s", (status.value, int(student_id)))
            return cur.rowcount > 0

    def delete(self, student_id: int) -> bool:
        # leave_requests rows go via ON DELETE CASCADE
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE student_id=%s", (int(student_id),))
            return cur.rowcount > 0
