"""Validation utilities for URL shortener.

Only presence is checked: the core accepts any non-empty string as a
redirect target, and any non-empty string as a code to look up.
"""

from typing import Any, Tuple


def is_valid_long_url(url: Any) -> Tuple[bool, str]:
    """Validate a long URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(url, str) or not url.strip():
        return False, "URL is required"
    return True, ""


def is_valid_short_code(short_code: Any) -> Tuple[bool, str]:
    """Validate a short code supplied for lookup.

    Args:
        short_code: The short code to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(short_code, str) or not short_code.strip():
        return False, "Short code is required"
    return True, ""
