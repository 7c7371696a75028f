from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Notice


class NoticeRepository(Protocol):
    def list_all(self) -> Sequence[Notice]:
        """Newest first."""

        raise NotImplementedError

    def get_by_id(self, notice_id: int) -> Optional[Notice]:
        raise NotImplementedError

    def create(self, *, title: str, description: str, link: Optional[str], role: Role, created_at: datetime) -> int:
        raise NotImplementedError

    def update(
        self,
        notice_id: int,
        *,
        title: str,
        description: str,
        link: Optional[str],
        updated_at: datetime,
    ) -> bool:
        raise NotImplementedError

    def delete(self, notice_id: int) -> bool:
        raise NotImplementedError
