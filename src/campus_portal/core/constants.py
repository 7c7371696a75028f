"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

DEFAULT_SESSION_DAYS = 1

LEAVE_DELETE_FORBIDDEN = "Cannot delete approved/recommended leave"
GENERIC_SERVER_ERROR = "Server error"

PASSWORD_SPECIALS = "@$!%*?&"
MIN_PASSWORD_LENGTH = 8

STUDENT_BULK_FIELDS = (
    "name",
    "email",
    "rollNo",
    "className",
    "semester",
    "phone",
    "dob",
    "gender",
    "address",
    "parentName",
    "parentPhone",
)
