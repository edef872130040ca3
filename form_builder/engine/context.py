"""Field values - the runtime snapshot a condition is evaluated against."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..schemas.form import FormStage


class FieldValues:
    """Read-only view of current field values keyed by field ref.

    Field ids are usually integers but JSON object keys are always
    strings, so ``12`` and ``"12"`` name the same field here.
    """

    def __init__(self, values: Mapping[Any, Any] | None = None):
        self._data: dict[Any, Any] = dict(values or {})

    @classmethod
    def from_stage(cls, stage: FormStage) -> FieldValues:
        """Collect each field's current value from a stage."""
        return cls({f.field_id: f.current_value for f in stage.iter_fields()})

    def get(self, ref: Any, default: Any = None) -> Any:
        if ref in self._data:
            return self._data[ref]
        alias = _alias_key(ref)
        if alias is not None and alias in self._data:
            return self._data[alias]
        return default

    def __contains__(self, ref: Any) -> bool:
        sentinel = object()
        return self.get(ref, sentinel) is not sentinel

    def __len__(self) -> int:
        return len(self._data)

    def to_dict(self) -> dict:
        return dict(self._data)


def _alias_key(ref: Any) -> Any:
    """The other spelling of a field ref: ``12`` <-> ``"12"``, else None."""
    try:
        if isinstance(ref, str):
            if ref.isascii() and ref.isdecimal():
                return int(ref)
            return None
        if isinstance(ref, int) and not isinstance(ref, bool):
            return str(ref)
    except ValueError:
        # digit strings past the int conversion limit
        return None
    return None


def as_field_values(values: FieldValues | Mapping[Any, Any] | None) -> FieldValues:
    if isinstance(values, FieldValues):
        return values
    return FieldValues(values)
