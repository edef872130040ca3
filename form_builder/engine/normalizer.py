"""Wire normalizer - operator spellings and the storage envelope."""

from __future__ import annotations

from typing import Any

from ..config import settings
from .operators import Operator

# Internal spelling -> snake_case wire spelling
INTERNAL_TO_WIRE = {
    Operator.FILLED: "filled",
    Operator.EMPTY: "empty",
    Operator.EQUALS: "equals",
    Operator.NOT_EQUALS: "not_equals",
    Operator.GREATER_THAN: "greater_than",
    Operator.LESS_THAN: "less_than",
    Operator.GREATER_OR_EQUAL: "greater_or_equal",
    Operator.LESS_OR_EQUAL: "less_or_equal",
    Operator.CONTAINS: "contains",
    Operator.NOT_CONTAINS: "not_contains",
    Operator.STARTS_WITH: "starts_with",
    Operator.ENDS_WITH: "ends_with",
    Operator.IN: "in",
    Operator.NOT_IN: "not_in",
}

WIRE_TO_INTERNAL = {wire: op for op, wire in INTERNAL_TO_WIRE.items()}


def from_wire(name: str) -> Operator | str:
    """Translate a wire operator name, passing unknown names through unchanged."""
    return WIRE_TO_INTERNAL.get(name, name)


def to_wire(operator: Operator | str) -> str:
    """Translate an operator to its wire name, passing unknown strings through."""
    if isinstance(operator, Operator):
        return INTERNAL_TO_WIRE[operator]
    resolved = resolve_operator(operator)
    if resolved is None:
        return operator
    return INTERNAL_TO_WIRE[resolved]


def resolve_operator(operator: Operator | str | None) -> Operator | None:
    """Return the Operator for either spelling, or None if unrecognised."""
    if isinstance(operator, Operator):
        return operator
    if not isinstance(operator, str):
        return None
    if operator in WIRE_TO_INTERNAL:
        return WIRE_TO_INTERNAL[operator]
    try:
        return Operator(operator)
    except ValueError:
        return None


def unwrap_envelope(payload: Any, key: str | None = None) -> Any:
    """Return the condition wrapped under the envelope key, if present."""
    key = key or settings.envelope_key
    if isinstance(payload, dict) and key in payload:
        return payload[key]
    return payload
