"""Utilities for sanitizing sensitive data in logs."""

from typing import Optional


def mask_key(key: Optional[str]) -> str:
    """
    Mask an API key for logging.

    Keys longer than eight characters keep their first and last four characters;
    shorter keys are fully masked.

    Args:
        key: Secret to mask

    Returns:
        Masked key
    """
    if not key:
        return "<empty>"
    if len(key) <= 8:
        return "*" * len(key)
    return key[:4] + "*" * (len(key) - 8) + key[-4:]


def sanitize_for_logging(value: Optional[str], max_length: int = 200) -> str:
    """
    Sanitize any string value for logging.

    Args:
        value: Value to sanitize
        max_length: Maximum length to return

    Returns:
        Sanitized string
    """
    if value is None:
        return ""

    value_str = str(value)
    if len(value_str) > max_length:
        return value_str[:max_length] + "...<truncated>"

    return value_str
