"""Text inputs enhanced by client-side pickers (color, date and time)."""

from __future__ import annotations

from typing import Any

from fasthtml.common import Input

from ..sanitizers import sanitize_hex_color, sanitize_text
from .base import FieldBehavior, display_value


class ColorField(FieldBehavior):
    empty_value = "#000000"
    forced_class = "{prefix}-color-picker"

    def get_default_value(self) -> str:
        if self.definition.has_default and self.definition.default is not None:
            return str(self.definition.default)
        return self.empty_value

    def render(self, value, attributes=None):
        return Input(**self.control_attributes(attributes, type="text", value=display_value(value)))

    def sanitize(self, value: Any) -> str:
        return sanitize_hex_color(value) or self.get_default_value()


class DateField(FieldBehavior):
    """Read-only text input; the flatpickr hook class selects the picker mode."""

    default_attributes = {"class": "regular-text", "readonly": True}
    forced_class = "{prefix}-flatpickr-date"

    def render(self, value, attributes=None):
        return Input(**self.control_attributes(attributes, type="text", value=display_value(value)))

    def sanitize(self, value: Any) -> str:
        return sanitize_text(value)


class DateTimeField(DateField):
    forced_class = "{prefix}-flatpickr-datetime"


class TimeField(DateField):
    forced_class = "{prefix}-flatpickr-time"
