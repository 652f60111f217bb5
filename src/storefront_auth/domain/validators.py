"""Input validation functions.

Pure functions that raise ValueError on invalid input; handlers turn the
messages into field-level validation details.
"""

import re

_EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


def normalize_email(v: str) -> str:
    """Trim and lowercase an email address."""
    return v.strip().lower()


def validate_email(v: str) -> str:
    """Validate email format.

    Returns:
        Normalized email (trimmed, lowercase).

    Raises:
        ValueError: If email format is invalid.

    Example:
        >>> validate_email(" Alice@Example.COM ")
        'alice@example.com'
    """
    normalized = normalize_email(v)
    if not _EMAIL_PATTERN.match(normalized):
        raise ValueError("Invalid email format")
    return normalized
