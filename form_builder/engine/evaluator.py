"""Condition evaluator for stage, section, field and transition visibility."""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Mapping
from typing import Any, Callable

from ..config import settings
from .conditions import Condition, ConditionGroup, SimpleCondition
from .context import FieldValues, as_field_values
from .normalizer import resolve_operator
from .operators import Operator

logger = logging.getLogger(__name__)


def to_text(value: Any) -> str:
    """String form of a field or condition value."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        return ",".join(to_text(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, separators=(",", ":"), sort_keys=True)
    return str(value)


_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INFINITY = re.compile(r"([+-]?)Infinity")
_RADIX = re.compile(r"0([xXoObB])([0-9a-fA-F]+)")
_RADIX_BASES = {"x": 16, "o": 8, "b": 2}


def _int_to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def to_number(value: Any) -> float:
    """Numeric form of a value; NaN when it has none.

    Strings must be plain ASCII decimals (optionally with an exponent),
    ``Infinity``, or ``0x``/``0o``/``0b`` literals. Spellings such as
    ``"inf"``, ``"nan"`` or non-ASCII digits are not numbers.
    """
    if value is None:
        return math.nan
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, int):
        return _int_to_float(value)
    if isinstance(value, float):
        return value
    if not isinstance(value, str):
        return math.nan

    text = value.strip()
    if not text:
        return 0.0
    if _DECIMAL.fullmatch(text):
        return float(text)
    match = _INFINITY.fullmatch(text)
    if match:
        return -math.inf if match.group(1) == "-" else math.inf
    match = _RADIX.fullmatch(text)
    if match:
        try:
            return _int_to_float(int(match.group(2), _RADIX_BASES[match.group(1).lower()]))
        except ValueError:
            # digits outside the radix, e.g. "0b12"
            return math.nan
    return math.nan


def _is_numeric(value: Any) -> bool:
    return isinstance(value, (int, float))  # bool is an int


def loose_equals(a: Any, b: Any) -> bool:
    """Coercing equality: numeric strings equal their numeric counterpart."""
    if a is None or b is None:
        return a is None and b is None
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        return list(a) == list(b)
    if isinstance(a, (list, tuple)):
        return loose_equals(to_text(a), b)
    if isinstance(b, (list, tuple)):
        return loose_equals(a, to_text(b))
    if _is_numeric(a) or _is_numeric(b):
        return to_number(a) == to_number(b)
    return a == b


def strict_equals(a: Any, b: Any) -> bool:
    """Type-aware equality used for list membership."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if _is_numeric(a) and _is_numeric(b):
        return a == b
    return type(a) is type(b) and a == b


def _is_filled(actual: Any) -> bool:
    return actual is not None and to_text(actual).strip() != ""


def _contains(actual: Any, expected: Any) -> bool:
    if isinstance(actual, (list, tuple)):
        return any(strict_equals(item, expected) for item in actual)
    return to_text(expected) in to_text(actual)


def _in_list(actual: Any, expected: Any) -> bool:
    if not isinstance(expected, (list, tuple)):
        return False
    return to_text(actual) in [to_text(item) for item in expected]


def _not_in_list(actual: Any, expected: Any) -> bool:
    if not isinstance(expected, (list, tuple)):
        return True
    return to_text(actual) not in [to_text(item) for item in expected]


# Supported operators: (actual field value, condition value) -> bool
OPERATORS: dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.FILLED: lambda a, _: _is_filled(a),
    Operator.EMPTY: lambda a, _: not _is_filled(a),
    Operator.EQUALS: loose_equals,
    Operator.NOT_EQUALS: lambda a, b: not loose_equals(a, b),
    Operator.GREATER_THAN: lambda a, b: to_number(a) > to_number(b),
    Operator.LESS_THAN: lambda a, b: to_number(a) < to_number(b),
    Operator.GREATER_OR_EQUAL: lambda a, b: to_number(a) >= to_number(b),
    Operator.LESS_OR_EQUAL: lambda a, b: to_number(a) <= to_number(b),
    Operator.CONTAINS: _contains,
    Operator.NOT_CONTAINS: lambda a, b: not _contains(a, b),
    Operator.STARTS_WITH: lambda a, b: to_text(a).startswith(to_text(b)),
    Operator.ENDS_WITH: lambda a, b: to_text(a).endswith(to_text(b)),
    Operator.IN: _in_list,
    Operator.NOT_IN: _not_in_list,
}


def evaluate_condition(
    condition: Condition,
    values: FieldValues | Mapping[Any, Any] | None = None,
) -> bool:
    """Decide whether a condition holds for the current field values.

    None (no condition) is always true. Groups reduce their children with
    ``all`` for "and" and ``any`` for "or", so an empty "and" group is true
    and an empty "or" group is false. Never raises: missing values, type
    mismatches and unknown operators all resolve to a definite bool.
    """
    return _evaluate(condition, as_field_values(values))


def _evaluate(condition: Condition, values: FieldValues) -> bool:
    if condition is None:
        return True

    if isinstance(condition, ConditionGroup):
        results = [_evaluate(c, values) for c in condition.conditions]
        if condition.logic == "or":
            return any(results)
        return all(results)

    if isinstance(condition, SimpleCondition):
        return _evaluate_simple(condition, values)

    logger.debug("Unsupported condition node %r, treating as unmet", condition)
    return False


def _evaluate_simple(condition: SimpleCondition, values: FieldValues) -> bool:
    operator = resolve_operator(condition.operator)
    if operator is None:
        logger.debug("Unrecognised operator %r, treating as unmet", condition.operator)
        return False

    actual = values.get(condition.field_ref)
    try:
        result = OPERATORS[operator](actual, condition.value)
    except (TypeError, ValueError, ArithmeticError):
        result = False

    if settings.trace_evaluations:
        logger.debug(
            "field %s %s %r -> %s (actual=%r)",
            condition.field_ref, operator.value, condition.value, result, actual,
        )
    return result
