from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Admin
from .repository import AdminRepository


def _row_to_admin(r: dict) -> Admin:
    return Admin(
        admin_id=int(r["admin_id"]),
        name=r["name"],
        email=r["email"],
        password_hash=r["password_hash"],
        created_at=r.get("created_at"),
    )


class MySQLAdminRepository(AdminRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, admin_id: int) -> Optional[Admin]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT admin_id, name, email, password_hash, created_at FROM admins WHERE admin_id=%s",
                (int(admin_id),),
            )
            row = fetchone(cur)
            return _row_to_admin(row) if row else None

    def get_by_email(self, email: str) -> Optional[Admin]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT admin_id, name, email, password_hash, created_at FROM admins WHERE email=%s",
                (email,),
            )
            row = fetchone(cur)
            return _row_to_admin(row) if row else None

    def create(self, *, name: str, email: str, password_hash: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO admins(name, email, password_hash) VALUES(%s,%s,%s)",
                (name, email, password_hash),
            )
            return int(cur.lastrowid)
