# ==============================================================================
# FILE: techboard/modules/sanitizer.py
# ==============================================================================
# --- Description:
# Parses the normalized model output and builds a TechnicalRecord from it.
# Every leaf field is checked on its own and replaced by its default when the
# value is missing or of the wrong type, so a partially valid answer still
# yields a complete record. Only a parse failure rejects the answer as a whole.

import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from techboard.models import RsiLabel, TechnicalRecord, TrendLabel

logger = logging.getLogger(__name__)

PARSE_FAILURE_MESSAGE = "Failed to parse data from API"

_MISSING = object()


@dataclass
class SanitizeResult:
    record: Optional[TechnicalRecord] = None
    error: Optional[str] = None
    detail: Optional[str] = None
    # kept for diagnostics only, never sent to clients
    raw_content: Optional[str] = None
    defaulted_fields: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.record is not None


# --- Leaf checks: each returns (accepted, value) ---

def _number(value: Any) -> Tuple[bool, Any]:
    # bool is an int subclass but never a valid reading
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False, None
    try:
        number = float(value)
    except OverflowError:
        return False, None
    return math.isfinite(number), number


def _non_negative(value: Any) -> Tuple[bool, Any]:
    accepted, number = _number(value)
    return accepted and number >= 0, number


def _label(choices):
    allowed = {c.value for c in choices}

    def check(value: Any) -> Tuple[bool, Any]:
        if not isinstance(value, str):
            return False, None
        label = value.strip().lower()
        return label in allowed, label

    return check


def _text(value: Any) -> Tuple[bool, Any]:
    if not isinstance(value, str) or not value.strip():
        return False, None
    return True, value.strip()


# (wire path, check, default)
FIELD_RULES = (
    (("currentPrice",), _non_negative, 0.0),
    (("weekHigh",), _non_negative, 0.0),
    (("weekLow",), _non_negative, 0.0),
    (("overallTrend", "value"), _label(TrendLabel), "neutral"),
    (("overallTrend", "percentage"), _number, 0.0),
    (("movingAverages", "status"), _text, "neutral"),
    (("movingAverages", "day50"), _number, 0.0),
    (("movingAverages", "day200"), _number, 0.0),
    (("rsi", "value"), _number, 50.0),
    (("rsi", "status"), _label(RsiLabel), "neutral"),
    (("macd", "value"), _number, 0.0),
    (("macd", "signal"), _number, 0.0),
    (("macd", "histogram"), _number, 0.0),
    (("macd", "status"), _label(TrendLabel), "neutral"),
    (("fundamentals", "peRatio"), _number, 0.0),
    (("fundamentals", "marketCap"), _text, "N/A"),
    (("fundamentals", "dividendYield"), _text, "N/A"),
    (("fundamentals", "beta"), _number, 1.0),
)


def _lookup(data: Any, path: Tuple[str, ...]) -> Any:
    node = data
    for key in path:
        if not isinstance(node, dict):
            return _MISSING
        node = node.get(key, _MISSING)
    return node


def _sanitize(data: dict) -> Tuple[TechnicalRecord, List[str]]:
    cleaned: dict = {}
    defaulted: List[str] = []

    for path, check, default in FIELD_RULES:
        raw = _lookup(data, path)
        accepted, value = (False, None) if raw is _MISSING else check(raw)
        if not accepted:
            value = default
            defaulted.append(".".join(path))

        target = cleaned
        for key in path[:-1]:
            target = target.setdefault(key, {})
        target[path[-1]] = value

    return TechnicalRecord.model_validate(cleaned), defaulted


def sanitize_payload(data: dict) -> TechnicalRecord:
    """Builds a complete record from an already-parsed JSON object."""
    record, _ = _sanitize(data)
    return record


def parse_json(text: str) -> Any:
    """Strict JSON parse; NaN and Infinity literals are rejected."""

    def reject_constant(token):
        raise ValueError(f"Invalid JSON constant: {token}")

    return json.loads(text, parse_constant=reject_constant)


def sanitize_content(text: str) -> SanitizeResult:
    """
    Parses normalized model output into a SanitizeResult.

    A parse failure is reported through the result (ok is False, error set,
    raw_content kept); it is never raised to the caller. A JSON value that is
    not an object counts as a parse failure.
    """
    try:
        data = parse_json(text)
    except (ValueError, RecursionError) as e:
        logger.error(f"JSON parsing error: {e}")
        logger.error(f"Failed content: {text!r}")
        return SanitizeResult(error=PARSE_FAILURE_MESSAGE, detail=str(e), raw_content=text)

    if not isinstance(data, dict):
        detail = f"Expected a JSON object, got {type(data).__name__}"
        logger.error(f"JSON parsing error: {detail}")
        logger.error(f"Failed content: {text!r}")
        return SanitizeResult(error=PARSE_FAILURE_MESSAGE, detail=detail, raw_content=text)

    record, defaulted = _sanitize(data)
    if defaulted:
        logger.debug(f"Defaulted {len(defaulted)} field(s): {', '.join(defaulted)}")
    return SanitizeResult(record=record, raw_content=text, defaulted_fields=defaulted)
