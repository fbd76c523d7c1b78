from settings_core.config_manager import ConfigManager, deep_merge
from settings_core.logger import get_logger, safe_display


def test_safe_display_masks_secret_keys_and_truncates():
    assert safe_display("api_key", "abc") == "<masked>"
    assert safe_display("db_password", "abc") == "<masked>"
    assert safe_display("title", "abc") == "abc"
    assert safe_display("size", 3) == "3"
    long_value = safe_display("body", "x" * 200)
    assert len(long_value) == 120
    assert long_value.endswith("...")


def test_get_logger_is_namespaced():
    assert get_logger("settings_core.pipeline").name == "settings_studio.settings_core.pipeline"
    assert get_logger("settings_core.pipeline").parent is get_logger("settings_core")


def test_config_manager_creates_defaults_and_round_trips(tmp_path):
    path = tmp_path / "config.json"
    cm = ConfigManager.load(path)
    assert path.exists()
    assert cm.get_setting("ui.html_prefix") == "settings-studio"
    assert cm.get_setting("missing.key", "fallback") == "fallback"

    cm.set_setting("ui.toast_duration", 5000)
    cm.set_setting("feature.flags.beta", True)
    cm.save()

    reloaded = ConfigManager.load(path)
    assert reloaded.get_setting("ui.toast_duration") == 5000
    assert reloaded.get_setting("feature.flags.beta") is True
    assert reloaded.get_setting("logging.level") == "INFO"


def test_config_manager_ignores_corrupt_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{broken", encoding="utf-8")
    cm = ConfigManager.load(path)
    assert cm.get_setting("ui.toast_duration") == 3000


def test_deep_merge_recurses_into_nested_dicts():
    dst = {"a": {"b": 1, "c": 2}, "d": 1}
    assert deep_merge(dst, {"a": {"c": 3}, "e": 4}) == {"a": {"b": 1, "c": 3}, "d": 1, "e": 4}
