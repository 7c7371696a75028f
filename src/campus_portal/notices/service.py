from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Mapping, Sequence

from ..app_logger import get_logger
from ..common.datetime_utils import now_local
from ..common.validators import optional_str, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError
from .model import Notice
from .repository import NoticeRepository

logger = get_logger("notices")


class NoticeService:
    """Notice board. Teachers manage teacher notices; admins manage all."""

    def __init__(self, notices: NoticeRepository, *, clock: Callable[[], datetime] = now_local):
        self._notices = notices
        self._clock = clock

    def list_all(self) -> Sequence[Notice]:
        return self._notices.list_all()

    def list_for_student(self) -> Sequence[Notice]:
        notices = self._notices.list_all()
        if not notices:
            raise NotFoundError("No notices found")
        return notices

    def _editable(self, current_role: Role, notice_id: int) -> Notice:
        notice = self._notices.get_by_id(int(notice_id))
        if not notice:
            raise NotFoundError("Notice not found")
        if current_role == Role.TEACHER and notice.role != Role.TEACHER:
            raise AuthorizationError("You can only change teacher notices")
        return notice

    def create(self, *, current_role: Role, data: Mapping[str, Any]) -> Notice:
        if current_role not in {Role.TEACHER, Role.ADMIN}:
            raise AuthorizationError("Only teachers or admins can create notices")

        notice_id = self._notices.create(
            title=require_non_empty(data.get("title"), "title"),
            description=require_non_empty(data.get("description"), "description"),
            link=optional_str(data.get("link")),
            role=current_role,
            created_at=self._clock(),
        )
        logger.info("notice id=%s created by %s", notice_id, current_role.value)
        return self._notices.get_by_id(notice_id)

    def update(self, *, current_role: Role, notice_id: int, data: Mapping[str, Any]) -> Notice:
        notice = self._editable(current_role, notice_id)
        self._notices.update(
            notice.notice_id,
            title=optional_str(data.get("title")) or notice.title,
            description=optional_str(data.get("description")) or notice.description,
            link=optional_str(data["link"]) if "link" in data else notice.link,
            updated_at=self._clock(),
        )
        return self._notices.get_by_id(notice.notice_id)

    def delete(self, *, current_role: Role, notice_id: int) -> None:
        notice = self._editable(current_role, notice_id)
        self._notices.delete(notice.notice_id)
        logger.info("notice id=%s deleted by %s", notice.notice_id, current_role.value)
