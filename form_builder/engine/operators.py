"""Operator table - the catalog of comparison operators and their value arity."""

from __future__ import annotations

from enum import Enum
from typing import Any


class Operator(str, Enum):
    """Comparison operators, valued by their internal spelling."""
    FILLED = "filled"
    EMPTY = "empty"
    EQUALS = "equals"
    NOT_EQUALS = "notequals"
    GREATER_THAN = "greaterthan"
    LESS_THAN = "lessthan"
    GREATER_OR_EQUAL = "greaterorequal"
    LESS_OR_EQUAL = "lessorequal"
    CONTAINS = "contains"
    NOT_CONTAINS = "notcontains"
    STARTS_WITH = "startswith"
    ENDS_WITH = "endswith"
    IN = "in"
    NOT_IN = "notin"


class ValueArity(Enum):
    """What kind of comparison value an operator takes."""
    NONE = "none"
    SCALAR = "scalar"
    ARRAY = "array"


# Maps each operator to its value arity
OPERATOR_ARITY = {
    Operator.FILLED: ValueArity.NONE,
    Operator.EMPTY: ValueArity.NONE,
    Operator.EQUALS: ValueArity.SCALAR,
    Operator.NOT_EQUALS: ValueArity.SCALAR,
    Operator.GREATER_THAN: ValueArity.SCALAR,
    Operator.LESS_THAN: ValueArity.SCALAR,
    Operator.GREATER_OR_EQUAL: ValueArity.SCALAR,
    Operator.LESS_OR_EQUAL: ValueArity.SCALAR,
    Operator.CONTAINS: ValueArity.SCALAR,
    Operator.NOT_CONTAINS: ValueArity.SCALAR,
    Operator.STARTS_WITH: ValueArity.SCALAR,
    Operator.ENDS_WITH: ValueArity.SCALAR,
    Operator.IN: ValueArity.ARRAY,
    Operator.NOT_IN: ValueArity.ARRAY,
}

OPERATOR_LABELS = {
    Operator.FILLED: "Has Value",
    Operator.EMPTY: "Is Empty",
    Operator.EQUALS: "Equals",
    Operator.NOT_EQUALS: "Not Equals",
    Operator.GREATER_THAN: "Greater Than",
    Operator.LESS_THAN: "Less Than",
    Operator.GREATER_OR_EQUAL: "Greater or Equal",
    Operator.LESS_OR_EQUAL: "Less or Equal",
    Operator.CONTAINS: "Contains",
    Operator.NOT_CONTAINS: "Does Not Contain",
    Operator.STARTS_WITH: "Starts With",
    Operator.ENDS_WITH: "Ends With",
    Operator.IN: "In List",
    Operator.NOT_IN: "Not In List",
}

NUMERIC_OPERATORS = frozenset({
    Operator.GREATER_THAN,
    Operator.LESS_THAN,
    Operator.GREATER_OR_EQUAL,
    Operator.LESS_OR_EQUAL,
})


def normalize_condition_value(operator: Operator, raw: Any) -> Any:
    """Shape an editor-entered value to fit the operator's arity.

    No-value operators clear the value, list operators accept a
    comma-separated string, and numeric comparisons coerce to a float
    (falling back to 0 for unparseable input).
    """
    arity = OPERATOR_ARITY[operator]
    if arity is ValueArity.NONE:
        return None

    if arity is ValueArity.ARRAY:
        if raw is None:
            return []
        if isinstance(raw, str):
            return [part.strip() for part in raw.split(",") if part.strip()]
        if isinstance(raw, (list, tuple)):
            return list(raw)
        return [raw]

    if operator in NUMERIC_OPERATORS:
        try:
            return float(raw)
        except (TypeError, ValueError):
            return 0.0

    return raw
