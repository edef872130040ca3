"""Pydantic models for the runtime form structure."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Stored visibility conditions stay in wire form: {"show_when": {...}}, a JSON string, or None
StoredCondition = dict[str, Any] | str | None


class FormField(BaseModel):
    field_id: int
    field_type: str = "text"
    label: str = ""
    placeholder: str | None = None
    helper_text: str | None = None
    default_value: Any = None
    current_value: Any = None
    visibility_condition: StoredCondition = None


class FormSection(BaseModel):
    section_id: int
    section_name: str = ""
    section_order: int = 0
    visibility_condition: StoredCondition = None
    fields: list[FormField] = Field(default_factory=list)


class FormStage(BaseModel):
    stage_id: int
    stage_name: str = ""
    is_initial: bool = False
    visibility_condition: StoredCondition = None
    sections: list[FormSection] = Field(default_factory=list)

    def iter_fields(self):
        for section in sorted(self.sections, key=lambda s: s.section_order):
            yield from section.fields


class TransitionAction(BaseModel):
    action_id: int
    action_name: str


class FormTransition(BaseModel):
    transition_id: int
    label: str
    to_stage_id: int | None = None
    to_stage_name: str | None = None
    to_complete: bool = False
    condition: StoredCondition = None
    actions: list[TransitionAction] = Field(default_factory=list)


class FormStructure(BaseModel):
    form_version_id: int
    form_name: str = ""
    version_number: int = 1
    stage: FormStage
    available_transitions: list[FormTransition] = Field(default_factory=list)
