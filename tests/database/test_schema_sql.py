from __future__ import annotations

from pathlib import Path

from campus_portal.database.bootstrap import _iter_sql_statements, _strip_comments, _strip_create_db_and_use

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_schema_splits_into_create_tables_only():
    sql = _strip_create_db_and_use(_strip_comments(SCHEMA.read_text(encoding="utf-8")))
    statements = list(_iter_sql_statements(sql))

    assert statements
    assert all(s.upper().startswith("CREATE TABLE IF NOT EXISTS") for s in statements)
    tables = {s.split()[5].strip("`(") for s in statements}
    assert {"admins", "students", "teachers", "leave_requests", "notices"} <= tables


def test_splitter_keeps_semicolons_inside_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); SELECT \"x;y\";"
    assert list(_iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", 'SELECT "x;y"']
