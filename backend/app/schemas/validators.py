"""Reusable field validators for request schemas.

Usage in a Pydantic model:

    @field_validator("destination")
    @classmethod
    def _destination(cls, v: str) -> str:
        return validate_destination(v)
"""

import re

EMAIL_REGEX = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
USERNAME_REGEX = re.compile(r"^[a-zA-Z0-9_.-]{3,50}$")

# XSS patterns
XSS_PATTERNS = [
    r"<script[^>]*>.*?</script>",
    r"javascript:",
    r"on\w+\s*=",
    r"<iframe",
]


def sanitize_string(value: str, max_length: int = 255) -> str:
    """Trim, length-check and reject markup that could end up in the UI."""
    if not isinstance(value, str):
        raise ValueError("Must be a string")

    value = value.strip()
    if not value:
        raise ValueError("Value is required")
    if len(value) > max_length:
        raise ValueError(f"String too long (max {max_length} characters)")

    for pattern in XSS_PATTERNS:
        if re.search(pattern, value, re.IGNORECASE):
            raise ValueError("Invalid characters detected")

    return value


def validate_email(value: str) -> str:
    """Return the lowercased address or raise ValueError."""
    if not value:
        raise ValueError("Email is required")

    value = value.strip().lower()

    if len(value) > 254:  # RFC 5321
        raise ValueError("Email address too long")

    if not EMAIL_REGEX.match(value):
        raise ValueError("Invalid email address format")

    return value


def validate_username(value: str) -> str:
    value = value.strip()
    if not USERNAME_REGEX.match(value):
        raise ValueError(
            "Username must be 3-50 characters: letters, digits, '_', '.' or '-'"
        )
    return value


def validate_destination(value: str) -> str:
    """Destinations are written "City, Country"."""
    value = sanitize_string(value, max_length=120)
    city, sep, country = value.rpartition(",")
    if not sep or not city.strip() or not country.strip():
        raise ValueError('Destination must be in "City, Country" format')
    return value
