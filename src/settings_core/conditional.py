"""Conditional visibility rules: `{field, value, operator}` triples.

The rule is data: it is validated at definition time, passed unchanged to the
page as `data-conditional*` attributes and re-evaluated in the browser when
the controlling field changes. `is_visible` mirrors the browser evaluation so
the first render already hides fields whose condition does not hold.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .errors import DefinitionError
from .sanitizers import scalar_to_str

OPERATORS = ("==", "!=", "in", "not in")


@dataclass(frozen=True)
class Conditional:
    """Show a field only when another field's value satisfies `operator`."""

    field: str
    value: str
    operator: str = "=="

    @classmethod
    def from_config(cls, config: Any) -> Conditional:
        if isinstance(config, Conditional):
            return config
        if not isinstance(config, Mapping):
            raise DefinitionError("Conditional must be a mapping with 'field' and 'value'.")

        field_id = config.get("field")
        if not isinstance(field_id, str) or not field_id.strip():
            raise DefinitionError("Conditional 'field' must be a non-empty string.")
        if "value" not in config:
            raise DefinitionError(f"Conditional on '{field_id}' is missing 'value'.")

        operator = config.get("operator") or "=="
        if operator not in OPERATORS:
            raise DefinitionError(f"Unsupported conditional operator: {operator!r}")

        raw_value = config["value"]
        if isinstance(raw_value, (list, tuple)):
            value = ",".join(scalar_to_str(item) or "" for item in raw_value)
        else:
            value = scalar_to_str(raw_value)
            if value is None:
                raise DefinitionError(f"Conditional value on '{field_id}' must be a scalar or a list.")
        return cls(field=field_id, value=value, operator=operator)

    def to_data_attributes(self) -> dict[str, str]:
        return {
            "data-conditional": self.field,
            "data-conditional-value": self.value,
            "data-conditional-operator": self.operator,
        }


def _current_as_text(current: Any) -> str:
    # Checkboxes report their checked state as "1"/"0" in the browser.
    if isinstance(current, bool):
        return "1" if current else "0"
    return scalar_to_str(current) or ""


def is_visible(condition: Conditional, current: Any) -> bool:
    """Evaluate `condition` against the controlling field's current value.

    For `in`/`not in` a list value (multiselect) is checked for containing the
    condition value, while a scalar value is looked up in the comma-separated
    condition value.
    """
    if condition.operator in ("in", "not in"):
        if isinstance(current, (list, tuple)):
            found = condition.value in [_current_as_text(item) for item in current]
        else:
            found = _current_as_text(current) in condition.value.split(",")
        return found if condition.operator == "in" else not found

    equal = _current_as_text(current) == condition.value
    return equal if condition.operator == "==" else not equal
