from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.exceptions import ValidationError
from .validators import require_fields, require_strong_password


def hash_password(raw: str) -> str:
    return generate_password_hash(raw)


def verify_password(password_hash: str, raw: str) -> bool:
    try:
        return check_password_hash(password_hash, raw or "")
    except (TypeError, ValueError):
        # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
        return False


def student_default_password(name: str, roll_no: str, phone: str) -> str:
    first = (name.split(" ")[0].lower() if name else "") or "student"
    return f"{first}{str(roll_no)[-4:] or '0000'}{str(phone)[-4:] or '0000'}@"


def teacher_default_password(name: str, phone: str) -> str:
    phone = str(phone or "")
    first = name.split(" ")[0].lower() if name else ""
    return f"{first}{phone[-6:] if len(phone) >= 6 else '000000'}@"


def new_password_hash(stored_hash: str, payload: dict) -> str:
    """Validate a change-password form and return the hash to store."""

    require_fields(payload, ("currentPassword", "newPassword", "confirmPassword"))
    if payload["newPassword"] != payload["confirmPassword"]:
        raise ValidationError("Passwords do not match")
    if not verify_password(stored_hash, payload["currentPassword"]):
        raise ValidationError("Current password is incorrect")
    require_strong_password(payload["newPassword"])
    return hash_password(payload["newPassword"])
