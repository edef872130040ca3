"""Shared fixtures for visibility engine tests."""

from __future__ import annotations

import pytest

from form_builder.config import settings
from form_builder.schemas.form import FormStage, FormTransition

# Sample field ids used across tests
AGE_FIELD = 101
COUNTRY_FIELD = 102
STATE_FIELD = 103
CONSENT_FIELD = 104
GUARDIAN_FIELD = 105


@pytest.fixture
def flatten_off(monkeypatch):
    """Preserve nested groups on both parse and serialize."""
    monkeypatch.setattr(settings, "flatten_nested_groups", False)


@pytest.fixture
def stage() -> FormStage:
    return FormStage.model_validate({
        "stage_id": 1,
        "stage_name": "Applicant",
        "is_initial": True,
        "visibility_condition": None,
        "sections": [
            {
                "section_id": 10,
                "section_name": "Basics",
                "section_order": 0,
                "visibility_condition": None,
                "fields": [
                    {"field_id": AGE_FIELD, "field_type": "number", "label": "Age"},
                    {"field_id": COUNTRY_FIELD, "field_type": "select", "label": "Country"},
                    {
                        "field_id": STATE_FIELD,
                        "field_type": "text",
                        "label": "State",
                        "visibility_condition": {
                            "show_when": {
                                "field_id": COUNTRY_FIELD,
                                "operator": "in",
                                "value": ["US", "CA"],
                            }
                        },
                    },
                ],
            },
            {
                "section_id": 20,
                "section_name": "Minors",
                "section_order": 1,
                "visibility_condition": (
                    '{"show_when": {"field_id": 101, "operator": "less_than", "value": 18}}'
                ),
                "fields": [
                    {
                        "field_id": GUARDIAN_FIELD,
                        "field_type": "text",
                        "label": "Guardian name",
                    },
                    {
                        "field_id": CONSENT_FIELD,
                        "field_type": "checkbox",
                        "label": "Guardian consent",
                        "visibility_condition": {
                            "show_when": {
                                "field_id": GUARDIAN_FIELD,
                                "operator": "filled",
                                "value": None,
                            }
                        },
                    },
                ],
            },
        ],
    })


@pytest.fixture
def transitions() -> list[FormTransition]:
    return [
        FormTransition(transition_id=1, label="Back", to_stage_id=0, to_stage_name="Start"),
        FormTransition(
            transition_id=2,
            label="Continue to review",
            to_stage_id=2,
            to_stage_name="Review",
            condition={"show_when": {"field_id": AGE_FIELD, "operator": "filled", "value": None}},
        ),
        FormTransition(
            transition_id=3,
            label="Finish",
            to_complete=True,
            condition={
                "show_when": {
                    "logic": "and",
                    "conditions": [
                        {"field_id": AGE_FIELD, "operator": "greater_or_equal", "value": 18},
                        {"field_id": COUNTRY_FIELD, "operator": "equals", "value": "US"},
                    ],
                }
            },
        ),
        FormTransition(transition_id=4, label="Save draft", to_stage_id=1),
    ]
