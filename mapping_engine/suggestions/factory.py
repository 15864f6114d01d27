"""Suggestion source selection based on config."""

import logging
from typing import Optional

from mapping_engine.config import AppConfig, get_config
from mapping_engine.suggestions.base import NoOpSuggestionSource, SuggestionSource
from mapping_engine.suggestions.llm_source import LLMSuggestionSource

logger = logging.getLogger(__name__)


def create_suggestion_source(config: Optional[AppConfig] = None) -> SuggestionSource:
    """
    Get the suggestion source for the current configuration.

    A missing or disabled similarity service is not an error: the no-op source
    is returned and every source column will come back unresolved.

    Args:
        config: Application config (defaults to the global config)

    Returns:
        ``LLMSuggestionSource`` when the service is configured, else ``NoOpSuggestionSource``
    """
    config = config or get_config()

    if config.ai.is_configured:
        return LLMSuggestionSource(ai_config=config.ai, mlflow_config=config.mlflow)

    logger.info("AI similarity service not configured; using no-op suggestion source")
    return NoOpSuggestionSource()
