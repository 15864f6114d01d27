"""Constants for the mapping engine."""

# HTTP statuses treated as transient by the remote suggestion source
TRANSIENT_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})

# Retry defaults
DEFAULT_RETRY_COUNT = 2
MAX_RETRY_COUNT = 5
DEFAULT_BASE_DELAY_SECONDS = 0.4

# Remote service defaults
DEFAULT_API_VERSION = "2024-02-15-preview"
STANDARD_MODEL_MAX_TOKENS = 1500
REASONING_MODEL_MAX_COMPLETION_TOKENS = 2000

# Logging
LOG_PREVIEW_MAX_LENGTH = 1500
SUGGESTION_SUMMARY_LIMIT = 20

# Confidence multipliers applied after similarity scaling
CUSTOM_FIELD_MULTIPLIER = 1.05
SYSTEM_FIELD_MULTIPLIER = 0.95

# Match-type labels
CUSTOM_FIELD_MATCH_TYPE = "custom-field"
SYSTEM_FIELD_MATCH_TYPE_PREFIX = "system-field"
