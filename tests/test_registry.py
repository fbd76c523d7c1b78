import pytest

from settings_core.definitions import SettingsDefinitionStore
from settings_core.errors import DefinitionError, UnsupportedFieldType
from settings_core.fields import FieldBehavior, TextField
from settings_core.registry import FieldRegistry, FieldType


class _SlugField(TextField):
    def sanitize(self, value):
        return super().sanitize(value).lower().replace(" ", "-")


def test_supported_types_follow_builtin_order():
    """All twenty built-in types are registered in declaration order."""
    types = FieldRegistry().get_supported_types()
    assert types == tuple(t.value for t in FieldType)
    assert len(types) == 20


def test_create_rejects_unknown_type():
    with pytest.raises(UnsupportedFieldType) as excinfo:
        FieldRegistry().create("wysiwyg", None)
    assert excinfo.value.field_type == "wysiwyg"
    assert isinstance(excinfo.value, DefinitionError)
    assert isinstance(excinfo.value, ValueError)


def test_create_accepts_enum_members():
    store = SettingsDefinitionStore("opts")
    store.add_section("main", "Main").add_field("f", "main", FieldType.EMAIL, "Email")
    definition = store.get_field("f")
    assert definition.type == "email"
    behavior = store.registry.create(FieldType.EMAIL, definition)
    assert isinstance(behavior, FieldBehavior)


def test_register_custom_type_is_usable_by_definitions():
    registry = FieldRegistry()
    registry.register("slug", _SlugField)
    store = SettingsDefinitionStore("opts", registry=registry)
    store.add_section("main", "Main").add_field("s", "main", "slug", "Slug")
    behavior = registry.create("slug", store.get_field("s"))
    assert behavior.sanitize("Hello World") == "hello-world"
    assert "slug" not in FieldRegistry().get_supported_types()


def test_register_validates_immediately():
    registry = FieldRegistry()
    with pytest.raises(DefinitionError):
        registry.register("", _SlugField)
    with pytest.raises(DefinitionError):
        registry.register("thing", object)
    with pytest.raises(DefinitionError, match="already registered"):
        registry.register("text", _SlugField)

    registry.register("text", _SlugField, replace=True)
    assert registry.create("text", None).__class__ is _SlugField
