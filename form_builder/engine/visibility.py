"""Visibility map - resolve which stages, sections, fields and transitions to show."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..schemas.form import FormField, FormStage, FormTransition, StoredCondition
from .conditions import ConditionGroup
from .context import FieldValues, as_field_values
from .evaluator import evaluate_condition
from .parser import parse_condition

logger = logging.getLogger(__name__)


@dataclass
class VisibilityResult:
    is_visible: bool
    reason: str


@dataclass
class VisibilityMap:
    """Visibility by id for every element of a stage.

    Sections inside a hidden stage and fields inside a hidden section are
    reported hidden. ``own`` keeps each element's result before that
    cascade, keyed the same way.
    """
    stages: dict[int, bool] = field(default_factory=dict)
    sections: dict[int, bool] = field(default_factory=dict)
    fields: dict[int, bool] = field(default_factory=dict)
    transitions: dict[int, bool] = field(default_factory=dict)
    own: dict[str, dict[int, bool]] = field(default_factory=dict)

    def visible_field_ids(self) -> list[int]:
        return [fid for fid, visible in self.fields.items() if visible]


def evaluate_visibility(
    stored: StoredCondition,
    values: FieldValues | Mapping[Any, Any] | None = None,
) -> VisibilityResult:
    """Parse a stored condition (fail-open) and evaluate it."""
    condition = parse_condition(stored)
    if condition is None:
        return VisibilityResult(is_visible=True, reason="No condition")

    kind = "Complex" if isinstance(condition, ConditionGroup) else "Simple"
    is_visible = evaluate_condition(condition, values)
    outcome = "passed" if is_visible else "failed"
    return VisibilityResult(is_visible=is_visible, reason=f"{kind} condition {outcome}")


def build_visibility_map(
    stage: FormStage,
    transitions: list[FormTransition] | None = None,
    values: FieldValues | Mapping[Any, Any] | None = None,
) -> VisibilityMap:
    """Evaluate every visibility condition in a stage and its transitions.

    When ``values`` is omitted the fields' ``current_value`` entries are used.
    """
    field_values = FieldValues.from_stage(stage) if values is None else as_field_values(values)
    vmap = VisibilityMap(own={"stages": {}, "sections": {}, "fields": {}, "transitions": {}})

    stage_visible = evaluate_visibility(stage.visibility_condition, field_values).is_visible
    vmap.own["stages"][stage.stage_id] = stage_visible
    vmap.stages[stage.stage_id] = stage_visible

    for section in stage.sections:
        section_own = evaluate_visibility(section.visibility_condition, field_values).is_visible
        section_visible = stage_visible and section_own
        vmap.own["sections"][section.section_id] = section_own
        vmap.sections[section.section_id] = section_visible

        for form_field in section.fields:
            field_own = evaluate_visibility(form_field.visibility_condition, field_values).is_visible
            vmap.own["fields"][form_field.field_id] = field_own
            vmap.fields[form_field.field_id] = section_visible and field_own

    for transition in transitions or []:
        visible = evaluate_visibility(transition.condition, field_values).is_visible
        vmap.own["transitions"][transition.transition_id] = visible
        vmap.transitions[transition.transition_id] = visible

    logger.debug(
        "Visibility map for stage %s: %d/%d fields, %d/%d sections, %d/%d transitions visible",
        stage.stage_id,
        sum(vmap.fields.values()), len(vmap.fields),
        sum(vmap.sections.values()), len(vmap.sections),
        sum(vmap.transitions.values()), len(vmap.transitions),
    )
    return vmap


def visible_fields(
    stage: FormStage,
    values: FieldValues | Mapping[Any, Any] | None = None,
) -> list[FormField]:
    """Fields of a stage that should currently be rendered, in section order."""
    vmap = build_visibility_map(stage, values=values)
    return [f for f in stage.iter_fields() if vmap.fields.get(f.field_id)]
