"""Field behaviors: one render/sanitize/default strategy per field type."""

from .base import FieldBehavior, attr_key, display_value, join_classes
from .choice import ButtonGroupField, CheckboxField, MultiSelectField, RadioField, SelectField, ToggleField
from .numeric import MediaField, NumberField, RangeField
from .picker import ColorField, DateField, DateTimeField, TimeField
from .text import CodeField, DescriptionField, EmailField, PasswordField, TextareaField, TextField, UrlField

__all__ = [
    "ButtonGroupField",
    "CheckboxField",
    "CodeField",
    "ColorField",
    "DateField",
    "DateTimeField",
    "DescriptionField",
    "EmailField",
    "FieldBehavior",
    "MediaField",
    "MultiSelectField",
    "NumberField",
    "PasswordField",
    "RadioField",
    "RangeField",
    "SelectField",
    "TextField",
    "TextareaField",
    "TimeField",
    "ToggleField",
    "UrlField",
    "attr_key",
    "display_value",
    "join_classes",
]
