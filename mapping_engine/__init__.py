"""Mapping resolution engine: proposes column mappings between a relational table and a platform entity."""

from mapping_engine.classification import SystemFieldClassifier
from mapping_engine.models import (
    CandidatePairing,
    Column,
    ResolutionResult,
    Schema,
    SchemaOrigin,
    ScoredMapping,
    SystemFieldCategory,
    WeightConfiguration,
)
from mapping_engine.resolution import ResolutionEngine
from mapping_engine.suggestions import (
    LLMSuggestionSource,
    NoOpSuggestionSource,
    SuggestionSource,
    create_suggestion_source,
)

__all__ = [
    "SystemFieldClassifier",
    "CandidatePairing",
    "Column",
    "ResolutionResult",
    "Schema",
    "SchemaOrigin",
    "ScoredMapping",
    "SystemFieldCategory",
    "WeightConfiguration",
    "ResolutionEngine",
    "LLMSuggestionSource",
    "NoOpSuggestionSource",
    "SuggestionSource",
    "create_suggestion_source",
]
