"""
Field validators shared by request payloads
"""

import re
from typing import Optional

PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{1,14}$")

# bcrypt only reads the first 72 bytes
MAX_PASSWORD_BYTES = 72


def normalize_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if len(value) < 2:
        raise ValueError("Name must be at least 2 characters long")
    return value


def normalize_phone(value: Optional[str]) -> Optional[str]:
    """Empty string and None both mean no phone"""
    if value is None:
        return None
    value = value.strip()
    if value == "":
        return None
    if not PHONE_PATTERN.match(value):
        raise ValueError("Invalid phone number format")
    return value


def check_password_length(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password cannot exceed {MAX_PASSWORD_BYTES} bytes")
    return value


def check_password_min_length(value: str) -> str:
    if len(value) < 8:
        raise ValueError("Password must be at least 8 characters long")
    return check_password_length(value)


def check_password_strength(value: str) -> str:
    check_password_min_length(value)
    if not re.search(r"[A-Z]", value):
        raise ValueError("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", value):
        raise ValueError("Password must contain at least one lowercase letter")
    if not re.search(r"[0-9]", value):
        raise ValueError("Password must contain at least one number")
    if not re.search(r"[\W_]", value):
        raise ValueError("Password must contain at least one special character")
    return value
