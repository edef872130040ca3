"""Visibility condition engine for multi-step dynamic forms.

Parse stored conditions, evaluate them against live field values, and
serialize edited conditions back to their wire form.
"""

from .operators import (
    Operator,
    ValueArity,
    OPERATOR_ARITY,
    OPERATOR_LABELS,
    normalize_condition_value,
)
from .normalizer import (
    INTERNAL_TO_WIRE,
    WIRE_TO_INTERNAL,
    from_wire,
    to_wire,
    resolve_operator,
    unwrap_envelope,
)
from .conditions import (
    Condition,
    ConditionGroup,
    ConditionParseError,
    FieldRef,
    SimpleCondition,
    referenced_fields,
)
from .context import FieldValues
from .parser import parse_condition
from .serializer import dump_condition, serialize_condition
from .evaluator import evaluate_condition
from .visibility import (
    VisibilityMap,
    VisibilityResult,
    build_visibility_map,
    evaluate_visibility,
    visible_fields,
)
from .transitions import (
    ResolvedTransition,
    SubmitButtonState,
    TransitionsResolution,
    find_transition_by_id,
    get_primary_transition,
    get_submit_button_state,
    get_visible_transition_labels,
    has_completion_transition,
    resolve_transitions,
    validate_transition_execution,
)

__all__ = [
    "Operator",
    "ValueArity",
    "OPERATOR_ARITY",
    "OPERATOR_LABELS",
    "normalize_condition_value",
    "INTERNAL_TO_WIRE",
    "WIRE_TO_INTERNAL",
    "from_wire",
    "to_wire",
    "resolve_operator",
    "unwrap_envelope",
    "Condition",
    "ConditionGroup",
    "ConditionParseError",
    "FieldRef",
    "SimpleCondition",
    "referenced_fields",
    "FieldValues",
    "parse_condition",
    "serialize_condition",
    "dump_condition",
    "evaluate_condition",
    "VisibilityMap",
    "VisibilityResult",
    "build_visibility_map",
    "evaluate_visibility",
    "visible_fields",
    "ResolvedTransition",
    "SubmitButtonState",
    "TransitionsResolution",
    "find_transition_by_id",
    "get_primary_transition",
    "get_submit_button_state",
    "get_visible_transition_labels",
    "has_completion_transition",
    "resolve_transitions",
    "validate_transition_execution",
]
