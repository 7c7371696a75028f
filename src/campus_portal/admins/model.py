from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import iso_datetime


@dataclass(frozen=True)
class Admin:
    admin_id: int
    name: str
    email: str
    password_hash: str
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.admin_id,
            "name": self.name,
            "email": self.email,
            "createdAt": iso_datetime(self.created_at),
        }
