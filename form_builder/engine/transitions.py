"""Transition resolver - which stage transitions are currently actionable."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..schemas.form import FormTransition
from .context import FieldValues, as_field_values
from .visibility import evaluate_visibility

# Label keywords -> priority, checked in order
_LABEL_PRIORITIES = (
    (("next", "continue", "proceed", "submit"), 80),
    (("save", "draft"), 60),
    (("back", "previous", "return"), 50),
)
COMPLETION_PRIORITY = 100
DEFAULT_PRIORITY = 40
DEFAULT_SUBMIT_LABEL = "Submit"


@dataclass
class ResolvedTransition:
    transition_id: int
    label: str
    to_stage_id: int | None
    to_stage_name: str | None
    is_complete: bool
    is_visible: bool
    is_disabled: bool
    priority: int = DEFAULT_PRIORITY


@dataclass
class SubmitButtonState:
    available_transitions: list[ResolvedTransition] = field(default_factory=list)
    can_submit: bool = False
    submit_label: str = DEFAULT_SUBMIT_LABEL
    selected_transition_id: int | None = None


@dataclass
class TransitionsResolution:
    available_transitions: list[ResolvedTransition]
    primary_transition: ResolvedTransition | None
    submit_button_state: SubmitButtonState
    has_multiple_transitions: bool


def transition_priority(transition: FormTransition) -> int:
    """Higher priority transitions sort first and become the primary one."""
    if transition.to_complete:
        return COMPLETION_PRIORITY
    label = transition.label.lower()
    for keywords, priority in _LABEL_PRIORITIES:
        if any(word in label for word in keywords):
            return priority
    return DEFAULT_PRIORITY


def _is_condition_met(transition: FormTransition, values: FieldValues) -> bool:
    return evaluate_visibility(transition.condition, values).is_visible


def resolve_transition(
    transition: FormTransition,
    values: FieldValues | Mapping[Any, Any] | None,
    is_form_valid: bool,
) -> ResolvedTransition:
    is_visible = _is_condition_met(transition, as_field_values(values))
    return ResolvedTransition(
        transition_id=transition.transition_id,
        label=transition.label,
        to_stage_id=transition.to_stage_id,
        to_stage_name=transition.to_stage_name,
        is_complete=transition.to_complete,
        is_visible=is_visible,
        is_disabled=not is_visible or (transition.to_complete and not is_form_valid),
        priority=transition_priority(transition),
    )


def resolve_transitions(
    transitions: list[FormTransition],
    values: FieldValues | Mapping[Any, Any] | None,
    is_form_valid: bool,
) -> TransitionsResolution:
    """Resolve visibility, ordering and the submit button for a stage's transitions."""
    field_values = as_field_values(values)
    resolved = [resolve_transition(t, field_values, is_form_valid) for t in transitions]
    visible = [t for t in resolved if t.is_visible]
    ordered = sorted(visible, key=lambda t: t.priority, reverse=True)

    primary = ordered[0] if ordered else None
    button = SubmitButtonState(
        available_transitions=ordered,
        can_submit=primary is not None and not primary.is_disabled,
        submit_label=(primary.label if primary and primary.label else DEFAULT_SUBMIT_LABEL),
        selected_transition_id=primary.transition_id if primary else None,
    )
    return TransitionsResolution(
        available_transitions=ordered,
        primary_transition=primary,
        submit_button_state=button,
        has_multiple_transitions=len(visible) > 1,
    )


def get_submit_button_state(
    transitions: list[FormTransition],
    values: FieldValues | Mapping[Any, Any] | None,
    is_form_valid: bool,
    is_submitting: bool = False,
) -> SubmitButtonState:
    state = resolve_transitions(transitions, values, is_form_valid).submit_button_state
    state.can_submit = state.can_submit and not is_submitting
    return state


def get_primary_transition(
    transitions: list[FormTransition],
    values: FieldValues | Mapping[Any, Any] | None,
    is_form_valid: bool,
) -> ResolvedTransition | None:
    return resolve_transitions(transitions, values, is_form_valid).primary_transition


def get_visible_transition_labels(
    transitions: list[FormTransition],
    values: FieldValues | Mapping[Any, Any] | None,
    is_form_valid: bool,
) -> list[str]:
    resolution = resolve_transitions(transitions, values, is_form_valid)
    return [t.label for t in resolution.available_transitions]


def has_completion_transition(transitions: list[FormTransition]) -> bool:
    return any(t.to_complete for t in transitions)


def find_transition_by_id(
    transitions: list[FormTransition], transition_id: int
) -> FormTransition | None:
    return next((t for t in transitions if t.transition_id == transition_id), None)


def validate_transition_execution(
    transition: FormTransition,
    values: FieldValues | Mapping[Any, Any] | None,
    is_form_valid: bool,
) -> tuple[bool, str | None]:
    """Check a chosen transition can run; returns (valid, reason)."""
    if not _is_condition_met(transition, as_field_values(values)):
        return False, "Transition conditions not met"
    if transition.to_complete and not is_form_valid:
        return False, "Please fix form errors before submitting"
    return True, None
