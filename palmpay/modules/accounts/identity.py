"""Normalization helpers for identifiers users type or scan."""

from __future__ import annotations

import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
CNIC_DIGITS = 13
MIN_PASSWORD_LENGTH = 6

_NON_DIGITS = re.compile(r"\D")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def cnic_digits(text: str) -> str:
    return _NON_DIGITS.sub("", text)


def format_cnic(text: str) -> str | None:
    """Return ``12345-1234567-1`` for any input carrying exactly 13 digits."""
    digits = cnic_digits(text)
    if len(digits) != CNIC_DIGITS:
        return None
    return f"{digits[:5]}-{digits[5:12]}-{digits[12]}"


def password_strength(password: str) -> str:
    if len(password) < MIN_PASSWORD_LENGTH:
        return "too_short"
    if len(password) < 8:
        return "weak"
    has_lower = any(ch.islower() for ch in password)
    has_upper = any(ch.isupper() for ch in password)
    has_digit = any(ch.isdigit() for ch in password)
    if has_lower and has_upper and has_digit:
        return "strong"
    return "medium"
