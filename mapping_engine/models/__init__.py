"""Immutable value types used by the mapping engine."""

from mapping_engine.models.schema import (
    Column,
    Schema,
    SchemaOrigin,
    SystemFieldCategory,
)
from mapping_engine.models.mapping import (
    DEFAULT_WEIGHTS,
    CandidatePairing,
    MappingDisposition,
    ResolutionResult,
    ScoredMapping,
    WeightConfiguration,
    clamp_confidence,
)

__all__ = [
    "Column",
    "Schema",
    "SchemaOrigin",
    "SystemFieldCategory",
    "DEFAULT_WEIGHTS",
    "CandidatePairing",
    "MappingDisposition",
    "ResolutionResult",
    "ScoredMapping",
    "WeightConfiguration",
    "clamp_confidence",
]
