"""Data models for candidate pairings, scored mappings and resolution results."""

import math
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from mapping_engine.models.schema import Schema


def clamp_confidence(value: float) -> float:
    """Clamp a confidence into [0, 1]."""
    if value < 0.0:
        return 0.0
    if value > 1.0:
        return 1.0
    return value


class MappingDisposition(str, Enum):
    """Tier a scored mapping landed in."""
    ACCEPTED = "accepted"
    NEEDS_REVIEW = "needs-review"


@dataclass(frozen=True)
class CandidatePairing:
    """A proposed source -> target pairing as returned by a suggestion source."""

    source_column: str
    target_column: str
    confidence: float
    transformation: Optional[str] = None
    rationale: Optional[str] = None

    def __post_init__(self):
        confidence = float(self.confidence)
        if math.isnan(confidence):
            raise ValueError("Candidate confidence must be a number, got NaN")
        object.__setattr__(self, "confidence", clamp_confidence(confidence))

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            "source_column": self.source_column,
            "target_column": self.target_column,
            "confidence": self.confidence,
            "transformation": self.transformation,
            "rationale": self.rationale,
        }


@dataclass(frozen=True)
class ScoredMapping:
    """A candidate pairing after scoring and tiering."""

    source_column: str
    target_column: str
    raw_confidence: float
    confidence: float  # adjusted confidence
    match_type: str  # custom-field, system-field:{category}
    disposition: MappingDisposition
    priority: int
    transformation: Optional[str] = None
    rationale: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            "source_column": self.source_column,
            "target_column": self.target_column,
            "raw_confidence": self.raw_confidence,
            "confidence": self.confidence,
            "match_type": self.match_type,
            "disposition": self.disposition.value,
            "priority": self.priority,
            "transformation": self.transformation,
            "rationale": self.rationale,
        }


@dataclass(frozen=True)
class WeightConfiguration:
    """Scoring weights and thresholds.

    Only ``ai_similarity``, ``high_threshold`` and ``review_threshold`` are read by
    the resolution engine; the per-signal weights are carried for exporters.

    Callers must keep ``high_threshold >= review_threshold``. This is a
    precondition and is not checked.
    """

    exact_name: float = 0.50
    case_insensitive: float = 0.45
    normalized: float = 0.40
    semantic_domain: float = 0.15
    type_compatibility: float = 0.20
    ai_similarity: float = 1.0
    length_penalty_per_10pct: float = -0.02
    high_threshold: float = 0.70
    review_threshold: float = 0.40

    def with_overrides(self, **overrides) -> "WeightConfiguration":
        """Return a copy with the given knobs replaced."""
        return replace(self, **overrides)

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            "exact_name": self.exact_name,
            "case_insensitive": self.case_insensitive,
            "normalized": self.normalized,
            "semantic_domain": self.semantic_domain,
            "type_compatibility": self.type_compatibility,
            "ai_similarity": self.ai_similarity,
            "length_penalty_per_10pct": self.length_penalty_per_10pct,
            "high_threshold": self.high_threshold,
            "review_threshold": self.review_threshold,
        }


DEFAULT_WEIGHTS = WeightConfiguration()


@dataclass(frozen=True)
class ResolutionResult:
    """Partitioned outcome of one resolution run."""

    source: Schema
    target: Schema
    accepted: Tuple[ScoredMapping, ...]
    needs_review: Tuple[ScoredMapping, ...]
    unresolved_source_columns: Tuple[str, ...]
    unused_target_columns: Tuple[str, ...]
    generated_at: datetime
    weights: WeightConfiguration

    @property
    def mappings(self) -> Tuple[ScoredMapping, ...]:
        """Accepted followed by needs-review mappings."""
        return self.accepted + self.needs_review

    def summary(self) -> dict:
        """Counts per partition."""
        return {
            "accepted": len(self.accepted),
            "needs_review": len(self.needs_review),
            "unresolved_source_columns": len(self.unresolved_source_columns),
            "unused_target_columns": len(self.unused_target_columns),
        }

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            "source": self.source.to_dict(),
            "target": self.target.to_dict(),
            "accepted": [m.to_dict() for m in self.accepted],
            "needs_review": [m.to_dict() for m in self.needs_review],
            "unresolved_source_columns": list(self.unresolved_source_columns),
            "unused_target_columns": list(self.unused_target_columns),
            "generated_at": self.generated_at.isoformat(),
            "weights": self.weights.to_dict(),
        }
