import pytest

from settings_core.definitions import FieldDefinition, Labels, SettingsDefinitionStore
from settings_core.errors import FieldValidationError
from settings_core.pipeline import sanitize_submission


def _store():
    store = SettingsDefinitionStore("opts")
    store.add_tab("general", "General").add_tab("advanced", "Advanced")
    store.add_section("basics", "Basics", tab_id="general")
    store.add_section("extras", "Extras", tab_id="advanced")
    store.add_field("title", "basics", "text", "Title")
    store.add_field("enabled", "basics", "checkbox", "Enabled")
    store.add_field("note", "basics", "description", "Note", description="Read me")
    store.add_field("color", "extras", "color", "Color", default="#336699")
    return store


def _run(store, raw, prior=None, tab="general", notices=None):
    return sanitize_submission(
        raw,
        store.fields_in_scope(tab),
        prior,
        registry=store.registry,
        labels=store.labels,
        notices=notices,
    )


def test_fields_outside_the_active_tab_keep_their_prior_values():
    """Saving one tab must not wipe values stored by the other tabs."""
    store = _store()
    prior = {"color": "#ff0000", "legacy": "kept"}
    record = _run(store, {"title": "  Hello  ", "enabled": "1", "color": "#00ff00"}, prior)
    assert record == {"color": "#ff0000", "legacy": "kept", "title": "Hello", "enabled": True}


def test_omitted_checkbox_takes_its_default():
    store = _store()
    record = _run(store, {"title": "x"}, {"enabled": True})
    assert record["enabled"] is False


def test_description_fields_are_never_stored():
    store = _store()
    record = _run(store, {"note": "injected", "title": "x"})
    assert "note" not in record


def test_malformed_submission_returns_prior_and_a_notice():
    store = _store()
    notices = []
    prior = {"title": "old"}
    record = _run(store, ["not", "a", "mapping"], prior, notices=notices)
    assert record == prior
    assert [n.code for n in notices] == ["malformed_submission"]
    assert notices[0].message == Labels().malformed_submission


def test_non_mapping_prior_is_treated_as_empty():
    store = _store()
    record = _run(store, {"title": "x"}, prior="garbage")
    assert record == {"title": "x", "enabled": False}


def test_validation_failure_reverts_only_that_field():
    store = SettingsDefinitionStore("opts").add_section("main", "Main")
    store.add_field("code", "main", "text", "Promo code", default="NONE", validate_callback=lambda v: v.isupper())
    store.add_field("city", "main", "text", "City")
    notices = []
    record = _run(store, {"code": "lower", "city": "Rome"}, tab="", notices=notices)

    assert record == {"code": "NONE", "city": "Rome"}
    assert len(notices) == 1
    assert notices[0].code == "validation_error_code"
    assert notices[0].severity == "error"
    assert "Promo code" in notices[0].message


def test_validator_can_raise_its_own_message():
    def _no_spaces(value):
        if " " in value:
            raise FieldValidationError("Spaces are not allowed")
        return True

    store = SettingsDefinitionStore("opts").add_section("main", "Main")
    store.add_field("slug", "main", "text", "Slug", validate_callback=_no_spaces)
    notices = []
    record = _run(store, {"slug": "a b"}, tab="", notices=notices)
    assert record["slug"] == ""
    assert notices[0].message == "Spaces are not allowed"
    assert notices[0].code == "validation_error_slug"


def test_validators_receive_the_sanitized_value():
    seen = []
    store = SettingsDefinitionStore("opts").add_section("main", "Main")
    store.add_field("size", "main", "number", "Size", validate_callback=lambda v: seen.append(v) or True)
    _run(store, {"size": "12.5"}, tab="")
    assert seen == [12.5]


def test_unknown_runtime_type_falls_back_to_default():
    store = SettingsDefinitionStore("opts")
    ghost = FieldDefinition(id="ghost", section_id="main", type="ghost", label="Ghost", default="boo")
    record = sanitize_submission({"ghost": "x"}, [ghost], {}, registry=store.registry)
    assert record == {"ghost": "boo"}


@pytest.mark.parametrize("raw", [None, "text", 42, [("title", "x")]])
def test_non_mapping_payloads_are_rejected(raw):
    store = _store()
    notices = []
    assert _run(store, raw, {"title": "old"}, notices=notices) == {"title": "old"}
    assert notices and notices[0].code == "malformed_submission"


def test_crashing_validator_rejects_only_its_field():
    store = SettingsDefinitionStore("opts").add_section("main", "Main")
    store.add_field("title", "main", "text", "Title")
    store.add_field("ratio", "main", "number", "Ratio", default=5, validate_callback=lambda v: 10 / v > 1)
    notices = []
    record = _run(store, {"title": "ok", "ratio": "0"}, tab="", notices=notices)

    assert record == {"title": "ok", "ratio": 5}
    assert [n.code for n in notices] == ["validation_error_ratio"]
    assert "Ratio" in notices[0].message


def test_oversized_number_does_not_abort_the_submission():
    store = SettingsDefinitionStore("opts").add_section("main", "Main")
    store.add_field("title", "main", "text", "Title")
    store.add_field("size", "main", "number", "Size")
    store.add_field("image", "main", "media", "Image")
    record = _run(store, {"title": "ok", "size": "1" * 5000, "image": "2" * 5000}, tab="")
    assert record == {"title": "ok", "size": 0, "image": 0}


def test_validation_label_may_contain_percent_signs():
    store = SettingsDefinitionStore("opts", labels=Labels(validation_error="100% sure %s is wrong")).add_section(
        "main", "Main"
    )
    store.add_field("code", "main", "text", "Code", validate_callback=lambda v: False)
    notices = []
    _run(store, {"code": "x"}, tab="", notices=notices)
    assert notices[0].message == "100% sure Code is wrong"
