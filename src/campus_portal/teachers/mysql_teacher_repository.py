from __future__ import annotations

import json
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, load_json_column, normalize_mysql_date
from .model import NewTeacher, Subject, Teacher
from .repository import TeacherRepository

_COLUMNS = """
    teacher_id, name, email, username, designation, department, qualification, phone, address,
    college_name, date_of_joining, subjects, password_hash, is_active, created_at
"""


def _row_to_teacher(r: dict) -> Teacher:
    subjects = load_json_column(r.get("subjects"), [])
    return Teacher(
        teacher_id=int(r["teacher_id"]),
        name=r["name"],
        email=r["email"],
        username=r["username"],
        designation=r["designation"],
        department=r["department"],
        qualification=r["qualification"],
        phone=r["phone"],
        address=r["address"],
        college_name=r["college_name"],
        date_of_joining=normalize_mysql_date(r.get("date_of_joining")),
        password_hash=r["password_hash"],
        subjects=tuple(
            Subject(subject_name=s.get("subjectName", ""), course=s.get("course", ""), semester=s.get("semester", ""))
            for s in subjects
        ),
        is_active=bool(r.get("is_active", True)),
        created_at=r.get("created_at"),
    )


class MySQLTeacherRepository(TeacherRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, value: object) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM teachers WHERE {where}=%s", (value,))
            row = fetchone(cur)
            return _row_to_teacher(row) if row else None

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        return self._get_one("teacher_id", int(teacher_id))

    def get_by_username(self, username: str) -> Optional[Teacher]:
        return self._get_one("username", username)

    def get_by_email(self, email: str) -> Optional[Teacher]:
        return self._get_one("email", email)

    def find_existing(self, *, emails: Sequence[str], usernames: Sequence[str]) -> Sequence[Teacher]:
        clauses: list[str] = []
        params: list[object] = []
        if emails:
            clauses.append(f"email IN ({in_clause(list(emails))})")
            params.extend(emails)
        if usernames:
            clauses.append(f"username IN ({in_clause(list(usernames))})")
            params.extend(usernames)
        if not clauses:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM teachers WHERE {' OR '.join(clauses)}", tuple(params))
            return [_row_to_teacher(r) for r in fetchall(cur)]

    def _insert(self, cur, t: NewTeacher) -> int:
        cur.execute(
            """
            INSERT INTO teachers(name, email, username, designation, department, qualification, phone,
                                 address, college_name, date_of_joining, subjects, password_hash, is_active)
            VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,1)
            """,
            (
                t.name,
                t.email,
                t.username,
                t.designation,
                t.department,
                t.qualification,
                t.phone,
                t.address,
                t.college_name,
                t.date_of_joining,
                json.dumps([s.to_dict() for s in t.subjects]),
                t.password_hash,
            ),
        )
        return int(cur.lastrowid)

    def create(self, teacher: NewTeacher) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._insert(cur, teacher)

    def create_many(self, teachers: Sequence[NewTeacher]) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            return [self._insert(cur, t) for t in teachers]

    def list_all(self) -> Sequence[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM teachers ORDER BY teacher_id DESC")
            return [_row_to_teacher(r) for r in fetchall(cur)]

    def list_by_department(self, department: str) -> Sequence[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM teachers WHERE department=%s ORDER BY name", (department,))
            return [_row_to_teacher(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE teachers
                SET name=COALESCE(%s, name),
                    username=COALESCE(%s, username),
                    qualification=COALESCE(%s, qualification),
                    phone=COALESCE(%s, phone),
                    address=COALESCE(%s, address)
                WHERE teacher_id=%s
                """,
                (name, username, qualification, phone, address, int(teacher_id)),
            )
            return cur.rowcount > 0

    def update_password(self, teacher_id: int, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE teachers SET password_hash=%s WHERE teacher_id=%s", (password_hash, int(teacher_id)))
            return cur.rowcount > 0

    def set_active(self, teacher_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE teachers SET is_active=%s WHERE teacher_id=%s", (1 if is_active else 0, int(teacher_id)))
            return cur.rowcount > 0

    def update_assignment(
        self,
        teacher_id: int,
        *,
        designation: Optional[str],
        department: Optional[str],
        subjects: Optional[Sequence[Subject]],
    ) -> bool:
        subjects_json = json.dumps([s.to_dict() for s in subjects]) if subjects is not None else None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE teachers
                SET designation=COALESCE(%s, designation),
                    department=COALESCE(%s, department),
                    subjects=COALESCE(%s, subjects)
                WHERE teacher_id=%s
                """,
                (designation, department, subjects_json, int(teacher_id)),
            )
            return cur.rowcount > 0

    def delete(self, teacher_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM teachers WHERE teacher_id=%s", (int(teacher_id),))
            return cur.rowcount > 0
