"""Boolean and option-list field types."""

from __future__ import annotations

import re
from html import escape
from typing import Any

from fasthtml.common import Button, Div, Input, Label, NotStr, Option, Select, Span

from ..sanitizers import is_truthy_token, scalar_to_str
from .base import FieldBehavior, display_value

_KEY_RE = re.compile(r"[^a-z0-9_\-]")


def option_key(value: str) -> str:
    """Lowercase id fragment for an option value."""
    return _KEY_RE.sub("", value.lower())


class CheckboxField(FieldBehavior):
    empty_value = False

    def _controls(self, value, attributes):
        # The hidden input keeps an unchecked box in the submitted payload.
        return (
            Input(type="hidden", name=self.definition.name, value="0"),
            Input(**self.control_attributes(attributes, type="checkbox", value="1", checked=is_truthy_token(value))),
        )

    def render(self, value, attributes=None):
        hidden, box = self._controls(value, attributes)
        return Span(hidden, box)

    def sanitize(self, value: Any) -> bool:
        return is_truthy_token(value)


class ToggleField(CheckboxField):
    def render(self, value, attributes=None):
        hidden, box = self._controls(value, attributes)
        return Label(hidden, box, Span(cls=f"{self.prefix}-toggle-slider"), cls=f"{self.prefix}-toggle")


class ChoiceField(FieldBehavior):
    """Single value that must be one of the configured option keys."""

    @property
    def options(self) -> dict[str, str]:
        return self.definition.options

    def is_selected(self, value: Any, option_value: str) -> bool:
        return display_value(value) == option_value

    def sanitize(self, value: Any) -> str:
        text = scalar_to_str(value)
        if text is not None and text in self.options:
            return text
        return ""


class SelectField(ChoiceField):
    forced_class = "{prefix}-select2-field"

    def render(self, value, attributes=None):
        attrs = self.control_attributes(attributes)
        options = [Option(label, value=key, selected=self.is_selected(value, key)) for key, label in self.options.items()]
        placeholder = attrs.get("data-placeholder", attrs.get("data_placeholder"))
        if placeholder is not None:
            # Written out so the empty value attribute is kept.
            options.insert(0, NotStr(f'<option value="">{escape(str(placeholder))}</option>'))
        return Select(*options, **attrs)


class RadioField(ChoiceField):
    def render(self, value, attributes=None):
        attrs = self.merge_attributes(attributes)
        radios = []
        for key, label in self.options.items():
            radio_id = f"{self.definition.id}_{option_key(key)}"
            radios.append(
                Label(
                    Input(
                        **{
                            **attrs,
                            "type": "radio",
                            "id": radio_id,
                            "name": self.definition.name,
                            "value": key,
                            "checked": self.is_selected(value, key),
                        }
                    ),
                    f" {label}",
                    fr=radio_id,
                    cls=f"{self.prefix}-radio-label",
                )
            )
        return Div(*radios, cls=f"{self.prefix}-radio-group")


class ButtonGroupField(ChoiceField):
    def render(self, value, attributes=None):
        hidden = Input(**self.control_attributes(attributes, type="hidden", value=display_value(value)))
        buttons = [
            Button(
                label,
                type="button",
                cls=f"{self.prefix}-buttongroup-option" + (" active" if self.is_selected(value, key) else ""),
                data_value=key,
            )
            for key, label in self.options.items()
        ]
        return Div(hidden, Div(*buttons, cls=f"{self.prefix}-buttongroup-container"))


class MultiSelectField(ChoiceField):
    empty_value: list = []
    default_attributes = {"multiple": True}
    forced_class = "{prefix}-select2-field"

    def render(self, value, attributes=None):
        selected = {display_value(v) for v in value} if isinstance(value, (list, tuple)) else set()
        name = f"{self.definition.name}[]"
        attrs = self.control_attributes(attributes, name=name)
        return Span(
            # Empty member so clearing every option still submits the key.
            Input(type="hidden", name=name, value=""),
            Select(
                *[Option(label, value=key, selected=key in selected) for key, label in self.options.items()],
                **attrs,
            ),
        )

    def sanitize(self, value: Any) -> list[str]:
        if not isinstance(value, (list, tuple)):
            return []
        kept = []
        for item in value:
            text = scalar_to_str(item)
            if text is not None and text in self.options:
                kept.append(text)
        return kept
