"""Field classification."""

from mapping_engine.classification.field_classifier import SystemFieldClassifier
from mapping_engine.classification.system_fields import (
    CUSTOM_FIELD_PRIORITY,
    SYSTEM_FIELD_NAMES,
    SYSTEM_FIELD_PREFIXES,
    SYSTEM_FIELD_PRIORITIES,
)

__all__ = [
    "SystemFieldClassifier",
    "CUSTOM_FIELD_PRIORITY",
    "SYSTEM_FIELD_NAMES",
    "SYSTEM_FIELD_PREFIXES",
    "SYSTEM_FIELD_PRIORITIES",
]
