from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import iso_datetime
from ..core.enums import Role


@dataclass(frozen=True)
class Notice:
    notice_id: int
    title: str
    description: str
    link: Optional[str]
    role: Role
    created_at: datetime
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.notice_id,
            "title": self.title,
            "description": self.description,
            "link": self.link,
            "role": self.role.value,
            "createdAt": iso_datetime(self.created_at),
            "updatedAt": iso_datetime(self.updated_at),
        }
