"""Utility functions for the mapping engine."""

from mapping_engine.utils.retry import (
    call_with_retry,
    compute_backoff_delay,
    is_transient_error,
)
from mapping_engine.utils.sanitize import mask_key, sanitize_for_logging

__all__ = [
    "call_with_retry",
    "compute_backoff_delay",
    "is_transient_error",
    "mask_key",
    "sanitize_for_logging",
]
