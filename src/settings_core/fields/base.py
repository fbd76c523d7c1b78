"""Common behavior shared by every field type."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..sanitizers import scalar_to_str

if TYPE_CHECKING:
    from ..definitions import FieldDefinition, Labels

_CLASS_ALIASES = ("cls", "klass", "_class", "class_")


def attr_key(key: str) -> str:
    """Map the keyword spellings FastHTML accepts for `class` onto `class`."""
    return "class" if key in _CLASS_ALIASES else key


def join_classes(*classes: Any) -> str:
    seen: list[str] = []
    for chunk in classes:
        for name in str(chunk or "").split():
            if name not in seen:
                seen.append(name)
    return " ".join(seen)


def display_value(value: Any) -> str:
    """Text shown inside a control for a stored value."""
    text = scalar_to_str(value)
    return "" if text is None else text


class FieldBehavior(ABC):
    """Render, sanitize and default-value strategy for one field type.

    Subclasses set `empty_value` (returned by `get_default_value` when the
    definition has no explicit default), `default_attributes` (merged under the
    caller's attributes) and optionally `forced_class`, a CSS hook that client
    widgets bind to and that caller attributes cannot remove.
    """

    empty_value: Any = ""
    default_attributes: Mapping[str, Any] = {}
    forced_class: str = ""

    def __init__(self, definition: FieldDefinition):
        self.definition = definition

    @property
    def prefix(self) -> str:
        return self.definition.html_prefix

    @property
    def labels(self) -> Labels:
        from ..definitions import Labels

        return self.definition.labels or Labels()

    def get_default_value(self) -> Any:
        if self.definition.has_default:
            return self.definition.default
        return copy.copy(self.empty_value)

    def forced_classes(self) -> str:
        return self.forced_class.format(prefix=self.prefix) if self.forced_class else ""

    def merge_attributes(self, attributes: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Merge caller attributes over the defaults; the caller wins except for forced classes."""
        merged: dict[str, Any] = {}
        for key, value in self.default_attributes.items():
            merged[attr_key(key)] = value.format(prefix=self.prefix) if isinstance(value, str) else value
        for key, value in (attributes or {}).items():
            merged[attr_key(key)] = value
        for key, value in merged.items():
            # Numbers go out as text so that a literal 0 is not dropped as falsy.
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                merged[key] = display_value(value)

        forced = self.forced_classes()
        if forced:
            merged["class"] = join_classes(forced, merged.get("class"))
        elif "class" in merged:
            merged["class"] = join_classes(merged["class"])
        return merged

    def control_attributes(self, attributes: Mapping[str, Any] | None = None, **fixed: Any) -> dict[str, Any]:
        """Merged attributes plus the id/name pair that ties a control to its field."""
        merged = self.merge_attributes(attributes)
        merged["id"] = self.definition.id
        merged["name"] = self.definition.name
        merged.update(fixed)
        return merged

    @abstractmethod
    def render(self, value: Any, attributes: Mapping[str, Any] | None = None):
        """Return the FastHTML component for the control showing `value`."""

    @abstractmethod
    def sanitize(self, value: Any) -> Any:
        """Return the canonical storage form of a raw submitted value; never raises."""
