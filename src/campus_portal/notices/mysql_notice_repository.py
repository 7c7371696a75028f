from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Notice
from .repository import NoticeRepository

_SELECT = "SELECT notice_id, title, description, link, role, created_at, updated_at FROM notices"


def _row_to_notice(r: dict) -> Notice:
    return Notice(
        notice_id=int(r["notice_id"]),
        title=r["title"],
        description=r["description"],
        link=r.get("link"),
        role=Role(r["role"]),
        created_at=r["created_at"],
        updated_at=r.get("updated_at"),
    )


class MySQLNoticeRepository(NoticeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Notice]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY created_at DESC, notice_id DESC")
            return [_row_to_notice(r) for r in fetchall(cur)]

    def get_by_id(self, notice_id: int) -> Optional[Notice]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE notice_id=%s", (int(notice_id),))
            row = fetchone(cur)
            return _row_to_notice(row) if row else None

    def create(self, *, title: str, description: str, link: Optional[str], role: Role, created_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO notices(title, description, link, role, created_at) VALUES(%s,%s,%s,%s,%s)",
                (title, description, link, role.value, created_at),
            )
            return int(cur.lastrowid)

    def update(
        self,
        notice_id: int,
        *,
        title: str,
        description: str,
        link: Optional[str],
        updated_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE notices SET title=%s, description=%s, link=%s, updated_at=%s WHERE notice_id=%s",
                (title, description, link, updated_at, int(notice_id)),
            )
            return cur.rowcount > 0

    def delete(self, notice_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM notices WHERE notice_id=%s", (int(notice_id),))
            return cur.rowcount > 0
