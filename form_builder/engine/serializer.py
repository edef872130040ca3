"""Condition serializer - condition tree back to the wire payload."""

from __future__ import annotations

import json
from typing import Any

from ..config import settings
from .conditions import Condition, ConditionGroup, SimpleCondition
from .normalizer import to_wire


def _condition_to_dict(condition: SimpleCondition | ConditionGroup) -> dict[str, Any]:
    if isinstance(condition, ConditionGroup):
        return {
            "logic": condition.logic,
            "conditions": [_condition_to_dict(c) for c in condition.conditions if c is not None],
        }
    return {
        "field_id": condition.field_ref,
        "operator": to_wire(condition.operator),
        "value": condition.value,
    }


def serialize_condition(condition: Condition) -> dict[str, Any] | None:
    """Convert a condition tree to its wire payload, wrapped in the envelope.

    Nested groups are collapsed into the root group when
    ``settings.flatten_nested_groups`` is on, matching what the parser
    produces so a stored tree reads back identically.
    """
    if condition is None:
        return None
    if isinstance(condition, ConditionGroup) and settings.flatten_nested_groups:
        condition = condition.flattened()
    return {settings.envelope_key: _condition_to_dict(condition)}


def dump_condition(condition: Condition) -> str | None:
    """Serialize a condition to a JSON string, or None for no condition."""
    payload = serialize_condition(condition)
    if payload is None:
        return None
    return json.dumps(payload)
