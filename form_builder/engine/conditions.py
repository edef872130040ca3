"""Condition tree data model.

A condition is one of three variants:

    None                 - no constraint, always visible
    SimpleCondition      - a single field comparison
    ConditionGroup       - an and/or combination of child conditions
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Union

from .operators import OPERATOR_ARITY, Operator, ValueArity

FieldRef = Union[str, int]
Logic = Literal["and", "or"]


class ConditionParseError(ValueError):
    """Raised by strict parsing when a stored condition is malformed."""


@dataclass
class SimpleCondition:
    field_ref: FieldRef
    operator: Operator | str  # raw string when the operator is unrecognised
    value: Any = None

    def with_operator(self, operator: Operator) -> SimpleCondition:
        """Copy with a new operator, clearing the value when it takes none."""
        value = self.value
        if OPERATOR_ARITY[operator] is ValueArity.NONE:
            value = None
        return SimpleCondition(field_ref=self.field_ref, operator=operator, value=value)


@dataclass
class ConditionGroup:
    logic: Logic = "and"
    conditions: list[Condition] = field(default_factory=list)

    def leaves(self) -> list[SimpleCondition]:
        """All simple conditions under this group, depth-first."""
        found: list[SimpleCondition] = []
        for child in self.conditions:
            if isinstance(child, ConditionGroup):
                found.extend(child.leaves())
            elif isinstance(child, SimpleCondition):
                found.append(child)
        return found

    def flattened(self) -> ConditionGroup:
        return ConditionGroup(logic=self.logic, conditions=list(self.leaves()))

    @property
    def depth(self) -> int:
        nested = [c.depth for c in self.conditions if isinstance(c, ConditionGroup)]
        return 1 + max(nested, default=0)


Condition = Union[SimpleCondition, ConditionGroup, None]


def referenced_fields(condition: Condition) -> list[FieldRef]:
    """Field refs a condition inspects, in first-seen order."""
    if condition is None:
        return []
    leaves = condition.leaves() if isinstance(condition, ConditionGroup) else [condition]
    refs: list[FieldRef] = []
    for leaf in leaves:
        if leaf.field_ref not in refs:
            refs.append(leaf.field_ref)
    return refs
