"""Free-text field types."""

from __future__ import annotations

from typing import Any

from fasthtml.common import Div, Input, NotStr, Textarea

from ..sanitizers import sanitize_code, sanitize_text, sanitize_url, scalar_to_str
from .base import FieldBehavior, display_value


class TextField(FieldBehavior):
    input_type = "text"
    default_attributes = {"class": "regular-text"}

    def render(self, value, attributes=None):
        return Input(**self.control_attributes(attributes, type=self.input_type, value=display_value(value)))

    def sanitize(self, value: Any) -> str:
        return sanitize_text(value)


class EmailField(TextField):
    input_type = "email"


class UrlField(TextField):
    input_type = "url"

    def sanitize(self, value: Any) -> str:
        return sanitize_url(value)


class PasswordField(TextField):
    """Stored exactly as typed; only non-string scalars are converted."""

    input_type = "password"

    def sanitize(self, value: Any) -> str:
        return scalar_to_str(value) or ""


class TextareaField(FieldBehavior):
    default_attributes = {"rows": 5, "cols": 50, "class": "large-text"}

    def render(self, value, attributes=None):
        return Textarea(display_value(value), **self.control_attributes(attributes))

    def sanitize(self, value: Any) -> str:
        return sanitize_text(value, keep_newlines=True)


class CodeField(FieldBehavior):
    """Trusted code: markup is kept, only NUL bytes and line endings change."""

    default_attributes = {"rows": 10, "cols": 50, "class": "large-text"}
    forced_class = "{prefix}-code-editor"

    def render(self, value, attributes=None):
        attrs = self.control_attributes(attributes)
        attrs.setdefault("data-language", self.definition.language)
        return Textarea(display_value(value), **attrs)

    def sanitize(self, value: Any) -> str:
        return sanitize_code(value)


class DescriptionField(FieldBehavior):
    """Read-only block of help text; it never stores a value."""

    empty_value = None

    def get_default_value(self) -> None:
        return None

    def render(self, value, attributes=None):
        if not self.definition.description:
            return Div(cls=f"{self.prefix}-description")
        return Div(NotStr(self.definition.description), cls=f"{self.prefix}-description")

    def sanitize(self, value: Any) -> None:
        return None
