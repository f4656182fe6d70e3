"""
Validation and data sanitization helpers shared by the schemas and models.
"""

import re
import unicodedata
from typing import Optional

# Telephone numbers are stored as up to 10 digits, no separators.
TELEPHONE_PATTERN = re.compile(r"^\d{1,10}$")


def sanitize_string(value: str, max_length: Optional[int] = None) -> str:
    """
    Sanitize a string by normalizing unicode and trimming whitespace.

    Args:
        value: The string to sanitize
        max_length: Maximum allowed length

    Returns:
        Sanitized string
    """
    normalized = unicodedata.normalize("NFKC", value)

    # Strip whitespace and collapse multiple spaces
    sanitized = re.sub(r"\s+", " ", normalized.strip())

    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length].rstrip()

    return sanitized


def normalize_telephone(telephone: str) -> str:
    """
    Strip common separators from a telephone number and validate it.

    Args:
        telephone: Raw telephone input, e.g. "(608) 555-1023"

    Returns:
        The digits only, e.g. "6085551023"

    Raises:
        ValueError: If the result is empty, has non-digits or exceeds 10 digits
    """
    digits = re.sub(r"[\s\-.()]", "", telephone)
    if not TELEPHONE_PATTERN.match(digits):
        raise ValueError("Telephone must be numeric with at most 10 digits")
    return digits


def require_text(value: Optional[str], field_name: str) -> str:
    """
    Return a sanitized, non-empty string or raise ``ValueError``.

    Args:
        value: Candidate value
        field_name: Field name used in the error message
    """
    if value is None:
        raise ValueError(f"{field_name} is required")
    cleaned = sanitize_string(value)
    if not cleaned:
        raise ValueError(f"{field_name} must not be empty")
    return cleaned
