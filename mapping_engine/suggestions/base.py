"""Suggestion source contract and the no-op variant."""

import threading
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from mapping_engine.models.mapping import CandidatePairing
from mapping_engine.models.schema import Schema


class SuggestionSource(ABC):
    """Produces candidate pairings for a source/target schema pair.

    Implementations may raise; callers treat any failure other than
    cancellation as "zero suggestions".
    """

    @abstractmethod
    def suggest(
        self,
        source: Schema,
        target: Schema,
        requested_source_columns: Optional[Iterable[str]] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[CandidatePairing]:
        """
        Produce candidate pairings.

        Args:
            source: Source schema
            target: Target schema (classified)
            requested_source_columns: Optional case-insensitive filter on source columns;
                empty or None means all columns
            cancel_event: Optional cancellation signal

        Returns:
            List of candidate pairings (possibly empty)
        """


class NoOpSuggestionSource(SuggestionSource):
    """Suggestion source used when no similarity service is configured.

    Always returns no candidates, so every source column ends up unresolved.
    """

    def suggest(
        self,
        source: Schema,
        target: Schema,
        requested_source_columns: Optional[Iterable[str]] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[CandidatePairing]:
        return []
