"""Suggestion sources."""

from mapping_engine.suggestions.base import NoOpSuggestionSource, SuggestionSource
from mapping_engine.suggestions.factory import create_suggestion_source
from mapping_engine.suggestions.llm_source import LLMSuggestionSource
from mapping_engine.suggestions.parsing import extract_json_array, parse_suggestions

__all__ = [
    "SuggestionSource",
    "NoOpSuggestionSource",
    "LLMSuggestionSource",
    "create_suggestion_source",
    "extract_json_array",
    "parse_suggestions",
]
