"""UI-side access to the runtime configuration."""

from typing import Any

from settings_core.config_manager import get_config_manager


def get_setting(path: str, default: Any = None) -> Any:
    """Read a dotted key under `settings` from config.json."""
    return get_config_manager().get_setting(path, default)


def get_html_prefix() -> str:
    return str(get_setting("ui.html_prefix", "settings-studio") or "settings-studio")
