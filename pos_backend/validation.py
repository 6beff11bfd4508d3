from __future__ import annotations

import re

from .errors import InvalidPhoneError

# Optional "+", leading non-zero digit, 2-15 digits in total
_PHONE_RE = re.compile(r"^\+?[1-9]\d{1,14}$")
_NON_DIGIT_RE = re.compile(r"\D")


def is_valid_phone(value: str | None) -> bool:
    return bool(value) and bool(_PHONE_RE.match(value))


def validate_phone(value: str) -> str:
    """Return the trimmed phone handle, or raise ``InvalidPhoneError``."""
    phone = (value or "").strip()
    if not is_valid_phone(phone):
        raise InvalidPhoneError(
            "Invalid phone number format. Use country code, e.g. +1234567890"
        )
    return phone


def digits_only(phone: str) -> str:
    return _NON_DIGIT_RE.sub("", phone)
