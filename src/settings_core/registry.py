"""Field type registry: maps a type name to its behavior class."""

from __future__ import annotations

from enum import Enum

from .errors import DefinitionError, UnsupportedFieldType
from .fields import (
    ButtonGroupField,
    CheckboxField,
    CodeField,
    ColorField,
    DateField,
    DateTimeField,
    DescriptionField,
    EmailField,
    FieldBehavior,
    MediaField,
    MultiSelectField,
    NumberField,
    PasswordField,
    RadioField,
    RangeField,
    SelectField,
    TextareaField,
    TextField,
    TimeField,
    ToggleField,
    UrlField,
)
from .logger import get_logger

logger = get_logger(__name__)


class FieldType(str, Enum):
    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    NUMBER = "number"
    URL = "url"
    TEXTAREA = "textarea"
    CHECKBOX = "checkbox"
    TOGGLE = "toggle"
    SELECT = "select"
    MULTISELECT = "multiselect"
    RADIO = "radio"
    BUTTONGROUP = "buttongroup"
    COLOR = "color"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    RANGE = "range"
    MEDIA = "media"
    CODE = "code"
    DESCRIPTION = "description"


BUILTIN_FIELDS: dict[FieldType, type[FieldBehavior]] = {
    FieldType.TEXT: TextField,
    FieldType.EMAIL: EmailField,
    FieldType.PASSWORD: PasswordField,
    FieldType.NUMBER: NumberField,
    FieldType.URL: UrlField,
    FieldType.TEXTAREA: TextareaField,
    FieldType.CHECKBOX: CheckboxField,
    FieldType.TOGGLE: ToggleField,
    FieldType.SELECT: SelectField,
    FieldType.MULTISELECT: MultiSelectField,
    FieldType.RADIO: RadioField,
    FieldType.BUTTONGROUP: ButtonGroupField,
    FieldType.COLOR: ColorField,
    FieldType.DATE: DateField,
    FieldType.DATETIME: DateTimeField,
    FieldType.TIME: TimeField,
    FieldType.RANGE: RangeField,
    FieldType.MEDIA: MediaField,
    FieldType.CODE: CodeField,
    FieldType.DESCRIPTION: DescriptionField,
}


class FieldRegistry:
    """Type name -> behavior class table, seeded with the built-in types."""

    def __init__(self, include_builtins: bool = True):
        self._types: dict[str, type[FieldBehavior]] = {}
        if include_builtins:
            for field_type, behavior_cls in BUILTIN_FIELDS.items():
                self._types[field_type.value] = behavior_cls

    def register(self, type_name: str, behavior_cls: type[FieldBehavior], replace: bool = False) -> None:
        """Add a custom field type; existing names are only overwritten with `replace=True`."""
        if not isinstance(type_name, str) or not type_name.strip():
            raise DefinitionError("Field type name cannot be empty.")
        if not isinstance(behavior_cls, type) or not issubclass(behavior_cls, FieldBehavior):
            raise DefinitionError(f"Behavior for '{type_name}' must be a FieldBehavior subclass.")
        if type_name in self._types and not replace:
            raise DefinitionError(f"Field type '{type_name}' is already registered.")
        self._types[type_name] = behavior_cls
        logger.debug("Registered field type %s -> %s", type_name, behavior_cls.__name__)

    def get_supported_types(self) -> tuple[str, ...]:
        return tuple(self._types)

    def create(self, field_type: str, definition) -> FieldBehavior:
        key = field_type.value if isinstance(field_type, FieldType) else field_type
        behavior_cls = self._types.get(key)
        if behavior_cls is None:
            raise UnsupportedFieldType(key)
        return behavior_cls(definition)

