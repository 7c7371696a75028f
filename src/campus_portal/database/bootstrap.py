from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from ..app_logger import get_logger
from .connection import DBConfig

logger = get_logger("bootstrap")


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    target = DBConfig.from_dict(db_config)
    ensure_database_exists(db_config)

    sql = Path(schema_path).read_text(encoding="utf-8")
    sql = _strip_create_db_and_use(_strip_comments(sql))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("schema applied to %s@%s/%s", target.user, target.host, target.database)


def ensure_demo_accounts(db_config: dict) -> None:
    """Create (or reset) one admin, one teacher and one student for local use."""

    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)

        cur.execute("SELECT admin_id FROM admins WHERE email=%s", ("admin@campus.local",))
        if cur.fetchone():
            cur.execute(
                "UPDATE admins SET password_hash=%s WHERE email=%s",
                (generate_password_hash("Admin@123"), "admin@campus.local"),
            )
        else:
            cur.execute(
                "INSERT INTO admins(name, email, password_hash) VALUES(%s,%s,%s)",
                ("Admin Demo", "admin@campus.local", generate_password_hash("Admin@123")),
            )

        cur.execute("SELECT teacher_id FROM teachers WHERE username=%s", ("teacher",))
        if not cur.fetchone():
            cur.execute(
                """
                INSERT INTO teachers(name, email, username, designation, department, qualification,
                                     phone, address, college_name, date_of_joining, subjects, password_hash)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    "Teacher Demo",
                    "teacher@campus.local",
                    "teacher",
                    "Assistant Professor",
                    "BCA",
                    "M.Sc",
                    "9000000001",
                    "Campus Road",
                    "Campus College",
                    "2024-07-01",
                    json.dumps([{"subjectName": "DBMS", "course": "BCA", "semester": "3"}]),
                    generate_password_hash("Teacher@123"),
                ),
            )

        cur.execute("SELECT student_id FROM students WHERE roll_no=%s", ("BCA0001",))
        if not cur.fetchone():
            cur.execute(
                """
                INSERT INTO students(name, email, roll_no, class_name, semester, phone, password_hash)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    "Student Demo",
                    "student@campus.local",
                    "BCA0001",
                    "BCA",
                    "3",
                    "9000000002",
                    generate_password_hash("Student@123"),
                ),
            )

        conn.commit()
    finally:
        conn.close()
    logger.info("demo accounts ready")


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
