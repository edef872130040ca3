"""Tests for resolving stage transitions."""

from __future__ import annotations

import pytest

from form_builder.engine.transitions import (
    find_transition_by_id,
    get_primary_transition,
    get_submit_button_state,
    get_visible_transition_labels,
    has_completion_transition,
    resolve_transitions,
    transition_priority,
    validate_transition_execution,
)
from form_builder.schemas.form import FormTransition

ADULT_US = {101: "30", 102: "US"}


class TestPriority:
    @pytest.mark.parametrize(
        "label,expected",
        [
            ("Next", 80),
            ("Proceed to payment", 80),
            ("Submit application", 80),
            ("Save for later", 60),
            ("Draft", 60),
            ("Go back", 50),
            ("Return to start", 50),
            ("Escalate", 40),
        ],
    )
    def test_label_priority(self, label, expected):
        assert transition_priority(FormTransition(transition_id=1, label=label)) == expected

    def test_completion_wins(self):
        t = FormTransition(transition_id=1, label="Back", to_complete=True)
        assert transition_priority(t) == 100


class TestResolve:
    def test_all_visible(self, transitions):
        result = resolve_transitions(transitions, ADULT_US, is_form_valid=True)
        assert [t.transition_id for t in result.available_transitions] == [3, 2, 4, 1]
        assert result.primary_transition.transition_id == 3
        assert result.has_multiple_transitions is True
        state = result.submit_button_state
        assert state.can_submit is True
        assert state.submit_label == "Finish"
        assert state.selected_transition_id == 3

    def test_invalid_form_disables_completion(self, transitions):
        result = resolve_transitions(transitions, ADULT_US, is_form_valid=False)
        assert result.primary_transition.is_disabled is True
        assert result.submit_button_state.can_submit is False
        continue_ = next(t for t in result.available_transitions if t.transition_id == 2)
        assert continue_.is_disabled is False

    def test_hidden_transitions_excluded(self, transitions):
        result = resolve_transitions(transitions, {}, is_form_valid=True)
        assert [t.transition_id for t in result.available_transitions] == [4, 1]
        assert result.primary_transition.label == "Save draft"

    def test_no_transitions(self):
        result = resolve_transitions([], {}, is_form_valid=True)
        assert result.primary_transition is None
        assert result.has_multiple_transitions is False
        assert result.submit_button_state.can_submit is False
        assert result.submit_button_state.submit_label == "Submit"
        assert result.submit_button_state.selected_transition_id is None

    def test_equal_priority_keeps_order(self):
        transitions = [
            FormTransition(transition_id=7, label="Next"),
            FormTransition(transition_id=8, label="Continue"),
        ]
        result = resolve_transitions(transitions, {}, is_form_valid=True)
        assert [t.transition_id for t in result.available_transitions] == [7, 8]


class TestHelpers:
    def test_submit_button_while_submitting(self, transitions):
        assert get_submit_button_state(transitions, ADULT_US, True).can_submit is True
        assert get_submit_button_state(transitions, ADULT_US, True, is_submitting=True).can_submit is False

    def test_primary(self, transitions):
        assert get_primary_transition(transitions, {101: "5"}, True).transition_id == 2

    def test_labels(self, transitions):
        assert get_visible_transition_labels(transitions, {}, True) == ["Save draft", "Back"]

    def test_has_completion(self, transitions):
        assert has_completion_transition(transitions) is True
        assert has_completion_transition(transitions[:2]) is False

    def test_find_by_id(self, transitions):
        assert find_transition_by_id(transitions, 4).label == "Save draft"
        assert find_transition_by_id(transitions, 99) is None


class TestValidateExecution:
    def test_conditions_not_met(self, transitions):
        assert validate_transition_execution(transitions[2], {101: "12"}, True) == (
            False,
            "Transition conditions not met",
        )

    def test_form_errors(self, transitions):
        assert validate_transition_execution(transitions[2], ADULT_US, False) == (
            False,
            "Please fix form errors before submitting",
        )

    def test_valid(self, transitions):
        assert validate_transition_execution(transitions[2], ADULT_US, True) == (True, None)
        assert validate_transition_execution(transitions[0], {}, False) == (True, None)
