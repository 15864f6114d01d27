"""Resolution engine: turns candidate pairings into a partitioned mapping result."""

import logging
import threading
from datetime import datetime, timezone
from typing import List, Optional, Set, Tuple

from mapping_engine.classification.field_classifier import SystemFieldClassifier
from mapping_engine.config import get_config
from mapping_engine.constants import (
    CUSTOM_FIELD_MATCH_TYPE,
    CUSTOM_FIELD_MULTIPLIER,
    SYSTEM_FIELD_MATCH_TYPE_PREFIX,
    SYSTEM_FIELD_MULTIPLIER,
)
from mapping_engine.exceptions import OperationCancelledError
from mapping_engine.models.mapping import (
    CandidatePairing,
    MappingDisposition,
    ResolutionResult,
    ScoredMapping,
    WeightConfiguration,
)
from mapping_engine.models.schema import Column, Schema
from mapping_engine.suggestions.base import SuggestionSource

logger = logging.getLogger(__name__)


def match_type_for(column: Column) -> str:
    """Match-type label for a mapping onto ``column``."""
    if not column.is_system_field:
        return CUSTOM_FIELD_MATCH_TYPE
    return f"{SYSTEM_FIELD_MATCH_TYPE_PREFIX}:{column.system_field_category.value}"


def adjust_confidence(raw_confidence: float, column: Column, weights: WeightConfiguration) -> float:
    """Scale raw confidence by the similarity weight, then bias toward custom fields."""
    multiplier = SYSTEM_FIELD_MULTIPLIER if column.is_system_field else CUSTOM_FIELD_MULTIPLIER
    return raw_confidence * weights.ai_similarity * multiplier


class ResolutionEngine:
    """Resolves candidate pairings into accepted / needs-review / unresolved / unused.

    Conflicts are settled greedily in one pass: candidates are ordered by target
    priority (custom fields first) and then by raw confidence, and the first
    candidate to claim a source or target name keeps it. This is not an optimal
    bipartite assignment; it is deterministic and simple to audit.
    """

    def __init__(
        self,
        suggestion_source: SuggestionSource,
        classifier: Optional[SystemFieldClassifier] = None,
    ):
        """
        Initialize the resolution engine

        Args:
            suggestion_source: Where candidate pairings come from
            classifier: Field classifier (defaults to ``SystemFieldClassifier``)
        """
        self.suggestion_source = suggestion_source
        self.classifier = classifier or SystemFieldClassifier()

    def resolve(
        self,
        source: Schema,
        target: Schema,
        weights: Optional[WeightConfiguration] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> ResolutionResult:
        """
        Produce the mapping result for a source/target schema pair.

        Args:
            source: Source schema
            target: Target schema
            weights: Scoring weights and thresholds (defaults to the deployment's
                ``MAPPING_*`` settings)
            cancel_event: Optional cancellation signal for the suggestion request

        Returns:
            Immutable resolution result

        Raises:
            OperationCancelledError: If the caller cancelled the suggestion request
        """
        if weights is None:
            weights = get_config().weights.to_weights()

        if len(target) == 0:
            logger.info(f"Target schema '{target.name}' has no columns; all source columns unresolved")
            return ResolutionResult(
                source=source,
                target=target,
                accepted=(),
                needs_review=(),
                unresolved_source_columns=tuple(source.column_names),
                unused_target_columns=(),
                generated_at=datetime.now(timezone.utc),
                weights=weights,
            )

        target = self.classifier.classify_schema(target)

        candidates = self._fetch_candidates(source, target, cancel_event)
        ranked = self._rank_candidates(source, target, candidates)
        accepted, needs_review = self._partition(ranked, weights)

        mapped_sources = {m.source_column.casefold() for m in accepted + needs_review}
        mapped_targets = {m.target_column.casefold() for m in accepted + needs_review}
        unresolved = tuple(n for n in source.column_names if n.casefold() not in mapped_sources)
        unused = tuple(n for n in target.column_names if n.casefold() not in mapped_targets)

        logger.info(
            f"Mapping complete: {len(accepted)} accepted, {len(needs_review)} need review, "
            f"{len(unresolved)} unresolved source columns, {len(unused)} unused target columns"
        )

        return ResolutionResult(
            source=source,
            target=target,
            accepted=tuple(accepted),
            needs_review=tuple(needs_review),
            unresolved_source_columns=unresolved,
            unused_target_columns=unused,
            generated_at=datetime.now(timezone.utc),
            weights=weights,
        )

    def _fetch_candidates(
        self,
        source: Schema,
        target: Schema,
        cancel_event: Optional[threading.Event],
    ) -> List[CandidatePairing]:
        """Ask the suggestion source for candidates; any failure but cancellation means none."""
        logger.info(
            f"Requesting AI mapping suggestions (source cols: {len(source)}, "
            f"target cols: {len(target)}, custom target cols: {len(target.custom_columns())}, "
            f"system target cols: {len(target.system_columns())})"
        )
        try:
            candidates = self.suggestion_source.suggest(source, target, None, cancel_event)
        except OperationCancelledError:
            raise
        except Exception as e:
            logger.warning(f"AI mapping failed; producing empty mapping: {e}")
            return []

        candidates = list(candidates or [])
        logger.info(f"Received {len(candidates)} AI suggestions before filtering")
        return candidates

    def _rank_candidates(
        self,
        source: Schema,
        target: Schema,
        candidates: List[CandidatePairing],
    ) -> List[Tuple[CandidatePairing, Column, int]]:
        """
        Drop candidates naming unknown columns and order the rest.

        Names are rewritten to the schemas' own spelling. Ordering is ascending
        target priority, then descending raw confidence; the sort is stable.

        Returns:
            List of (candidate, target column, priority)
        """
        known = []
        for candidate in candidates:
            source_column = source.find_column(candidate.source_column)
            target_column = target.find_column(candidate.target_column)
            if source_column is None or target_column is None:
                logger.debug(
                    f"Discarding suggestion {candidate.source_column}->{candidate.target_column}: "
                    f"unknown column"
                )
                continue

            normalized = CandidatePairing(
                source_column=source_column.name,
                target_column=target_column.name,
                confidence=candidate.confidence,
                transformation=candidate.transformation,
                rationale=candidate.rationale,
            )
            priority = self.classifier.get_mapping_priority(target_column)
            known.append((normalized, target_column, priority))

        return sorted(known, key=lambda item: (item[2], -item[0].confidence))

    def _partition(
        self,
        ranked: List[Tuple[CandidatePairing, Column, int]],
        weights: WeightConfiguration,
    ) -> Tuple[List[ScoredMapping], List[ScoredMapping]]:
        """Greedy walk: score each unclaimed candidate and tier it."""
        accepted: List[ScoredMapping] = []
        needs_review: List[ScoredMapping] = []
        used_sources: Set[str] = set()
        used_targets: Set[str] = set()

        for candidate, target_column, priority in ranked:
            source_key = candidate.source_column.casefold()
            target_key = candidate.target_column.casefold()
            if source_key in used_sources or target_key in used_targets:
                continue

            confidence = adjust_confidence(candidate.confidence, target_column, weights)
            match_type = match_type_for(target_column)

            if confidence >= weights.high_threshold:
                disposition = MappingDisposition.ACCEPTED
            elif confidence >= weights.review_threshold:
                disposition = MappingDisposition.NEEDS_REVIEW
            else:
                logger.debug(
                    f"Rejected mapping: {candidate.source_column} -> {candidate.target_column} "
                    f"(confidence: {confidence:.3f}, type: {match_type}) - below review threshold"
                )
                continue

            mapping = ScoredMapping(
                source_column=candidate.source_column,
                target_column=candidate.target_column,
                raw_confidence=candidate.confidence,
                confidence=confidence,
                match_type=match_type,
                disposition=disposition,
                priority=priority,
                transformation=candidate.transformation,
                rationale=candidate.rationale,
            )
            if disposition is MappingDisposition.ACCEPTED:
                accepted.append(mapping)
            else:
                needs_review.append(mapping)
            logger.debug(
                f"{disposition.value} mapping: {candidate.source_column} -> {candidate.target_column} "
                f"(confidence: {confidence:.3f}, type: {match_type})"
            )

            used_sources.add(source_key)
            used_targets.add(target_key)

        return accepted, needs_review
