"""Mapping resolution."""

from mapping_engine.resolution.engine import (
    ResolutionEngine,
    adjust_confidence,
    match_type_for,
)

__all__ = ["ResolutionEngine", "adjust_confidence", "match_type_for"]
