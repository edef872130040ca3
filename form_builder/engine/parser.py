"""Condition parser - wire payload (dict or JSON string) to condition tree."""

from __future__ import annotations

import json
import logging
from typing import Any

from ..config import settings
from .conditions import Condition, ConditionGroup, ConditionParseError, SimpleCondition
from .normalizer import from_wire, unwrap_envelope
from .operators import OPERATOR_ARITY, Operator, ValueArity

logger = logging.getLogger(__name__)


def parse_condition(payload: Any, *, strict: bool = False) -> Condition:
    """Parse a stored visibility condition.

    Accepts None, a JSON string, or an already-decoded dict, optionally
    wrapped in the envelope key (``{"show_when": ...}``).

    By default parsing fails open: anything malformed comes back as None
    (no constraint), so bad storage never blocks rendering. With
    ``strict=True`` a ConditionParseError is raised instead.
    """
    if payload is None:
        return None

    if isinstance(payload, str):
        text = payload.strip()
        if not text:
            return None
        try:
            payload = json.loads(text)
        except (ValueError, RecursionError) as e:
            if strict:
                raise ConditionParseError(f"Invalid condition JSON: {e}") from e
            logger.debug("Undecodable condition JSON, treating as no condition: %s", e)
            return None

    return _map_node(payload, strict)


def _map_node(node: Any, strict: bool) -> Condition:
    if node is None:
        return None
    if not isinstance(node, dict):
        return _reject(f"Condition must be an object, got {type(node).__name__}", strict)

    if settings.envelope_key in node:
        return _map_node(unwrap_envelope(node), strict)

    if "logic" in node and isinstance(node.get("conditions"), list):
        return _map_group(node, strict)

    return _map_simple(node, strict)


def _map_group(node: dict, strict: bool) -> ConditionGroup:
    logic = "or" if node.get("logic") == "or" else "and"

    if settings.flatten_nested_groups:
        leaves: list[SimpleCondition] = []
        _collect_leaves(node, leaves, strict)
        return ConditionGroup(logic=logic, conditions=leaves)

    children = [_map_node(child, strict) for child in node["conditions"]]
    return ConditionGroup(logic=logic, conditions=[c for c in children if c is not None])


def _collect_leaves(node: Any, leaves: list[SimpleCondition], strict: bool) -> None:
    """Gather every simple condition under a group, at any depth."""
    if isinstance(node, dict) and "logic" in node and isinstance(node.get("conditions"), list):
        for child in node["conditions"]:
            _collect_leaves(child, leaves, strict)
        return

    mapped = _map_node(node, strict)
    if isinstance(mapped, ConditionGroup):
        leaves.extend(mapped.leaves())
    elif mapped is not None:
        leaves.append(mapped)


def _map_simple(node: dict, strict: bool) -> SimpleCondition | None:
    field_ref = node.get("field_id")
    if field_ref is None:
        field_ref = node.get("fieldid")
    if field_ref is None or isinstance(field_ref, bool) or not isinstance(field_ref, (str, int)):
        return _reject(f"Condition has no usable field reference: {node!r}", strict)

    raw_operator = node.get("operator")
    if not isinstance(raw_operator, str):
        return _reject(f"Condition operator must be a string: {node!r}", strict)

    operator = from_wire(raw_operator)
    if not isinstance(operator, Operator):
        try:
            operator = Operator(raw_operator)
        except ValueError:
            if strict:
                raise ConditionParseError(f"Unknown operator {raw_operator!r}") from None
            logger.debug("Keeping unrecognised operator %r verbatim", raw_operator)

    value = node.get("value")
    if isinstance(operator, Operator) and OPERATOR_ARITY[operator] is ValueArity.NONE:
        value = None

    return SimpleCondition(field_ref=field_ref, operator=operator, value=value)


def _reject(message: str, strict: bool) -> None:
    if strict:
        raise ConditionParseError(message)
    logger.debug("Dropping malformed condition node: %s", message)
    return None
