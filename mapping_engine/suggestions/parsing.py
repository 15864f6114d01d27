"""Tolerant parsing of similarity service responses."""

import json
import logging
import math
from typing import Any, Dict, List, Optional

from mapping_engine.exceptions import MalformedResponseError
from mapping_engine.models.mapping import CandidatePairing

logger = logging.getLogger(__name__)


def extract_json_array(text: Optional[str]) -> str:
    """
    Slice the JSON array out of free model text.

    Takes everything from the first ``[`` to the last ``]`` so commentary or code
    fences around the array are ignored.

    Args:
        text: Raw model output

    Returns:
        The bracketed substring

    Raises:
        MalformedResponseError: If the text holds no bracketed array
    """
    if not text:
        raise MalformedResponseError("Response is empty")

    start = text.find("[")
    end = text.rfind("]")
    if start < 0 or end < start:
        raise MalformedResponseError("Response contains no JSON array")

    return text[start:end + 1]


def _coerce_confidence(value: Any) -> Optional[float]:
    """Return a float confidence, or None when the value is not numeric."""
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            # Integer too large for a float; clamps like infinity
            return 1.0 if value > 0 else 0.0
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return number


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_item(item: Any) -> Optional[CandidatePairing]:
    if not isinstance(item, dict):
        return None

    # Property names are matched case-insensitively
    fields: Dict[str, Any] = {str(k).lower(): v for k, v in item.items()}

    source = fields.get("source")
    target = fields.get("target")
    if not isinstance(source, str) or not source.strip():
        return None
    if not isinstance(target, str) or not target.strip():
        return None

    confidence = _coerce_confidence(fields.get("confidence"))
    if confidence is None:
        logger.debug(f"Dropping suggestion {source}->{target}: non-numeric confidence {fields.get('confidence')!r}")
        return None

    return CandidatePairing(
        source_column=source.strip(),
        target_column=target.strip(),
        confidence=confidence,
        transformation=_optional_text(fields.get("transformation")),
        rationale=_optional_text(fields.get("rationale")),
    )


def parse_suggestions(text: Optional[str]) -> List[CandidatePairing]:
    """
    Parse model output into candidate pairings.

    Items without a non-empty source and target, or with a non-numeric
    confidence, are dropped one by one. Confidence is clamped into [0, 1]. A
    missing array or an unparseable one yields an empty list.

    Args:
        text: Raw model output

    Returns:
        Candidate pairings in response order
    """
    try:
        sliced = extract_json_array(text)
        parsed = json.loads(sliced)
    except MalformedResponseError as e:
        logger.warning(f"No suggestions in AI response: {e}")
        return []
    except ValueError as e:  # JSONDecodeError, or an integer literal over the digit limit
        logger.warning(f"Failed to parse AI suggestions JSON: {e}")
        return []

    if not isinstance(parsed, list):
        logger.warning(f"AI suggestions JSON is not an array: {type(parsed).__name__}")
        return []

    candidates = []
    for item in parsed:
        candidate = _parse_item(item)
        if candidate is not None:
            candidates.append(candidate)

    dropped = len(parsed) - len(candidates)
    if dropped:
        logger.debug(f"Dropped {dropped} malformed suggestions out of {len(parsed)}")

    return candidates
