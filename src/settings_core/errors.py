"""Exceptions raised while defining settings pages and processing submissions."""

from __future__ import annotations

from .notices import Notice


class SettingsError(Exception):
    """Base class for settings-page errors."""


class DefinitionError(SettingsError, ValueError):
    """A settings page was defined inconsistently (fatal at build time)."""


class UnsupportedFieldType(DefinitionError):
    """The requested field type is not in the registry."""

    def __init__(self, field_type: str):
        super().__init__(f"Unsupported field type: {field_type}")
        self.field_type = field_type


class SubmissionError(SettingsError):
    """Recoverable problem with a submitted form; surfaces as a notice."""

    code = "submission_error"
    severity = "error"

    def to_notice(self) -> Notice:
        return Notice(code=self.code, message=str(self), severity=self.severity)


class MalformedSubmissionError(SubmissionError):
    """The submitted payload is not a mapping; nothing is persisted."""

    code = "malformed_submission"


class FieldValidationError(SubmissionError):
    """A custom validator rejected a sanitized value for one field."""

    def __init__(self, message: str, field_id: str = "", label: str = ""):
        super().__init__(message)
        self.field_id = field_id
        self.label = label

    @property
    def code(self) -> str:  # type: ignore[override]
        return f"validation_error_{self.field_id}"
