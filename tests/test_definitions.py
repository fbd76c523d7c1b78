import pytest

from settings_core.conditional import Conditional
from settings_core.definitions import Labels, PageOptions, SettingsDefinitionStore, normalize_options
from settings_core.errors import DefinitionError, UnsupportedFieldType


def _tabbed_store():
    store = SettingsDefinitionStore("opts")
    store.add_tab("general", "General").add_tab("advanced", "Advanced")
    store.add_section("basics", "Basics", tab_id="general")
    store.add_section("extras", "Extras", tab_id="advanced")
    store.add_field("title", "basics", "text", "Title")
    store.add_field("debug", "extras", "checkbox", "Debug")
    return store


def test_field_before_section_is_rejected():
    store = SettingsDefinitionStore("opts")
    with pytest.raises(DefinitionError, match="must be added before adding fields"):
        store.add_field("title", "missing", "text", "Title")


def test_section_with_unknown_tab_is_rejected():
    store = SettingsDefinitionStore("opts")
    with pytest.raises(DefinitionError, match="must be added before adding sections"):
        store.add_section("basics", "Basics", tab_id="nope")


def test_empty_identifiers_are_rejected():
    store = SettingsDefinitionStore("opts")
    with pytest.raises(DefinitionError):
        store.add_tab("", "Tab")
    with pytest.raises(DefinitionError):
        store.add_section("", "Section")
    store.add_section("main", "Main")
    with pytest.raises(DefinitionError):
        store.add_field("", "main", "text", "Nameless")
    with pytest.raises(DefinitionError):
        SettingsDefinitionStore("")


def test_unknown_field_type_is_rejected():
    store = SettingsDefinitionStore("opts").add_section("main", "Main")
    with pytest.raises(UnsupportedFieldType, match="Unsupported field type: wysiwyg"):
        store.add_field("body", "main", "wysiwyg", "Body")


def test_bad_conditional_and_validator_are_rejected():
    store = SettingsDefinitionStore("opts").add_section("main", "Main")
    with pytest.raises(DefinitionError):
        store.add_field("a", "main", "text", "A", conditional={"value": "x"})
    with pytest.raises(DefinitionError):
        store.add_field("b", "main", "text", "B", conditional={"field": "a", "value": "x", "operator": ">"})
    with pytest.raises(DefinitionError):
        store.add_field("c", "main", "text", "C", validate_callback="not callable")


def test_field_definition_is_fully_resolved():
    store = SettingsDefinitionStore("opts", html_prefix="acme").add_section("main", "Main")
    store.add_field(
        "mode",
        "main",
        "select",
        "Mode",
        options=["fast", "slow"],
        default="fast",
        conditional={"field": "enabled", "value": "1"},
        resolve_url=None,
    )
    definition = store.get_field("mode")
    assert definition.name == "opts[mode]"
    assert definition.options == {"fast": "fast", "slow": "slow"}
    assert definition.has_default is True
    assert definition.default == "fast"
    assert definition.conditional == Conditional(field="enabled", value="1", operator="==")
    assert definition.html_prefix == "acme"
    assert "resolve_url" in definition.extra


def test_has_default_tracks_presence_not_truthiness():
    store = SettingsDefinitionStore("opts").add_section("main", "Main")
    store.add_field("a", "main", "text", "A", default="")
    store.add_field("b", "main", "text", "B")
    assert store.get_field("a").has_default is True
    assert store.get_field("b").has_default is False


def test_normalize_options_accepts_mappings_pairs_and_values():
    assert normalize_options({"a": "A", 1: "One"}) == {"a": "A", "1": "One"}
    assert normalize_options([("a", "A"), ("b", "B")]) == {"a": "A", "b": "B"}
    assert normalize_options(["x", "y"]) == {"x": "x", "y": "y"}
    assert normalize_options(None) == {}
    with pytest.raises(DefinitionError):
        normalize_options("abc")


def test_resolve_active_tab_falls_back_to_first_tab():
    store = _tabbed_store()
    assert store.resolve_active_tab("advanced") == "advanced"
    assert store.resolve_active_tab("unknown") == "general"
    assert store.resolve_active_tab(None) == "general"
    assert SettingsDefinitionStore("opts").resolve_active_tab("anything") == ""


def test_fields_in_scope_follow_the_active_tab():
    store = _tabbed_store()
    assert [f.id for f in store.fields_in_scope("general")] == ["title"]
    assert [f.id for f in store.fields_in_scope("advanced")] == ["debug"]

    untabbed = SettingsDefinitionStore("opts").add_section("main", "Main")
    untabbed.add_field("a", "main", "text", "A").add_field("b", "main", "number", "B")
    assert [f.id for f in untabbed.fields_in_scope("")] == ["a", "b"]


def test_page_options_build_merges_overrides():
    page = PageOptions.build(
        "opts",
        "my-page",
        {"page_title": "Acme", "labels": {"save_button": "Store", "bogus": "x"}, "asset_packages": {"select2": {}}},
    )
    assert page.option_group == "opts_group"
    assert page.page_title == "Acme"
    assert page.menu_title == "Settings"
    assert page.labels.save_button == "Store"
    assert page.labels.settings_saved == Labels().settings_saved
    assert page.asset_packages == {"select2": {}}


def test_page_options_require_identifiers():
    with pytest.raises(DefinitionError, match="Option name cannot be empty"):
        PageOptions.build("", "slug")
    with pytest.raises(DefinitionError, match="Page slug cannot be empty"):
        PageOptions.build("opts", "")


def test_re_adding_a_field_replaces_it_in_place():
    store = SettingsDefinitionStore("opts").add_section("main", "Main")
    store.add_field("a", "main", "text", "A").add_field("b", "main", "text", "B")
    store.add_field("a", "main", "number", "A again")
    assert list(store.fields) == ["a", "b"]
    assert store.get_field("a").type == "number"


def test_empty_conditional_is_rejected():
    store = SettingsDefinitionStore("opts").add_section("main", "Main")
    with pytest.raises(DefinitionError):
        store.add_field("a", "main", "text", "A", conditional={})
