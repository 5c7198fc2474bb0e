"""
Text helpers for form values.

Admin forms send empty strings, whitespace and nulls interchangeably.
These helpers collapse all of them to None before values reach the table.
"""

from typing import Optional


def clean_optional_text(value: Optional[str]) -> Optional[str]:
    """
    Clean a free-text form value for storage.

    - Strips whitespace
    - Returns None for empty/whitespace-only strings

    Args:
        value: Raw value from the form

    Returns:
        Trimmed text or None
    """
    if value is None:
        return None

    value = value.strip()

    if not value:
        return None

    return value


def clean_required_text(value: Optional[str]) -> str:
    """Trimmed text, empty string when missing."""
    return clean_optional_text(value) or ""
