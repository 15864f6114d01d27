"""Custom exceptions for the mapping engine."""


class MappingEngineError(Exception):
    """Base exception for mapping engine errors."""
    pass


class InvalidSchemaError(MappingEngineError):
    """Schema is malformed (blank or duplicate column names)."""
    pass


class ConfigurationError(MappingEngineError):
    """Required configuration for a remote client is missing."""
    pass


class SuggestionSourceError(MappingEngineError):
    """Error while obtaining candidate pairings from a suggestion source."""
    pass


class RetryExhaustedError(SuggestionSourceError):
    """All attempts against a transiently failing service were used up."""

    def __init__(self, attempts: int, last_error: Exception):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Gave up after {attempts} attempts: {last_error}")


class MalformedResponseError(SuggestionSourceError):
    """Service response did not contain a parseable JSON array."""
    pass


class OperationCancelledError(MappingEngineError):
    """Caller cancelled the outbound call or its retry loop."""
    pass
