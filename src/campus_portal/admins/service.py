from __future__ import annotations

from typing import Any, Mapping

from ..app_logger import get_logger
from ..common.passwords import hash_password
from ..common.validators import require_fields, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import ConflictError, NotFoundError
from .model import Admin
from .repository import AdminRepository

logger = get_logger("admins")


class AdminService:
    def __init__(self, admins: AdminRepository):
        self._admins = admins

    def register(self, data: Mapping[str, Any]) -> int:
        require_fields(data, ("name", "email", "password"))
        name = require_non_empty(data.get("name"), "name")
        email = require_non_empty(data.get("email"), "email").lower()
        password = require_min_length(str(data.get("password")), "password", MIN_PASSWORD_LENGTH)

        if self._admins.get_by_email(email):
            raise ConflictError("Admin with this email already exists")

        admin_id = self._admins.create(name=name, email=email, password_hash=hash_password(password))
        logger.info("registered admin id=%s", admin_id)
        return admin_id

    def get(self, admin_id: int) -> Admin:
        admin = self._admins.get_by_id(int(admin_id))
        if not admin:
            raise NotFoundError("Admin not found")
        return admin
