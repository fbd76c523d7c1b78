"""Local configuration manager for the settings studio runtime.

Runtime knobs (log level, where the option store lives, UI defaults) are kept
in a local `config.json`. This is the application's own configuration, not the
records produced by settings pages: those go through an option store.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_JSON: dict[str, Any] = {
    "paths": {
        "logs_dir": "data/local/logs",
        "options_file": "data/local/options.json",
    },
    "settings": {
        "logging": {
            "level": "INFO",
        },
        "ui": {
            "html_prefix": "settings-studio",
            "toast_duration": 3000,
        },
    },
    "security": {
        "allowed_origins": ["*"],
    },
}


def deep_merge(dst: dict[str, Any], src: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge `src` into `dst` in place and return `dst`."""
    for k, v in (src or {}).items():
        if isinstance(v, dict) and isinstance(dst.get(k), dict):
            deep_merge(dst[k], v)
        else:
            dst[k] = v
    return dst


def _warn(msg: str, *args: Any) -> None:
    # Plain logger lookup: the logging setup reads its level from this module.
    logging.getLogger("settings_studio.config_manager").warning(msg, *args)


def _try_make_parent_writable(path: Path) -> bool:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        test = path.parent / ".write_test"
        test.write_text("ok", encoding="utf-8")
        test.unlink(missing_ok=True)
        return True
    except OSError:
        return False


def default_config_path() -> Path:
    """Pick a sensible config.json location.

    Priority:
    1) `./config.json` if writable
    2) `~/.settings-studio/config.json`
    """
    cwd_candidate = Path.cwd() / "config.json"
    if _try_make_parent_writable(cwd_candidate):
        return cwd_candidate
    return Path.home() / ".settings-studio" / "config.json"


@dataclass
class ConfigManager:
    """Manages reading and writing the local config.json file."""

    path: Path
    _data: dict[str, Any]

    @classmethod
    def load(cls, path: Path | None = None) -> ConfigManager:
        """Load the configuration from disk, creating defaults if necessary."""
        cfg_path = path or default_config_path()
        data: dict[str, Any] = json.loads(json.dumps(DEFAULT_CONFIG_JSON))

        if cfg_path.exists():
            try:
                loaded = json.loads(cfg_path.read_text(encoding="utf-8") or "{}")
                if isinstance(loaded, dict):
                    deep_merge(data, loaded)
            except (OSError, json.JSONDecodeError) as exc:
                _warn("Failed to read config.json at %s: %s", cfg_path, exc)
        else:
            try:
                cfg_path.parent.mkdir(parents=True, exist_ok=True)
                cfg_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
            except OSError as exc:
                _warn("Unable to create default config.json at %s: %s", cfg_path, exc)

        return cls(path=cfg_path, _data=data)

    @property
    def data(self) -> dict[str, Any]:
        """Get the full config data dictionary."""
        return self._data

    def save(self) -> None:
        """Persist the current config data to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._data, indent=2, ensure_ascii=False), encoding="utf-8")

    def set_logs_dir(self, value: str) -> None:
        """Set the logs directory path."""
        self._data.setdefault("paths", {})["logs_dir"] = (value or "data/local/logs").strip()

    def set_options_file(self, value: str) -> None:
        """Set the JSON file backing the default option store."""
        self._data.setdefault("paths", {})["options_file"] = (value or "data/local/options.json").strip()

    def resolve_path(self, key: str, default_rel: str) -> Path:
        """Resolve a path from config, making it absolute."""
        raw = (self._data.get("paths", {}) or {}).get(key) or default_rel
        p = Path(str(raw)).expanduser()
        if p.is_absolute():
            return p
        return (Path.cwd() / p).resolve()

    def get_setting(self, dotted_path: str, default: Any = None) -> Any:
        """Read a nested value from `settings` using a dotted path.

        Example: `get_setting("logging.level", "INFO")`.
        """
        node: Any = self._data.get("settings", {}) or {}
        for part in (dotted_path or "").split("."):
            if not part:
                continue
            if not isinstance(node, dict):
                return default
            node = node.get(part)
        return default if node is None else node

    def set_setting(self, dotted_path: str, value: Any) -> None:
        """Set a nested value in `settings` using a dotted path."""
        if not dotted_path:
            return

        root = self._data.setdefault("settings", {})
        if not isinstance(root, dict):
            self._data["settings"] = {}
            root = self._data["settings"]

        parts = [p for p in dotted_path.split(".") if p]
        node: dict[str, Any] = root
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value

    def get_logs_dir(self) -> Path:
        """Get the logs directory path, creating it if needed."""
        path = self.resolve_path("logs_dir", "data/local/logs")
        path.mkdir(parents=True, exist_ok=True)
        return path

    def get_options_file(self) -> Path:
        """Get the path of the JSON option store file."""
        return self.resolve_path("options_file", "data/local/options.json")


@lru_cache(maxsize=1)
def get_config_manager() -> ConfigManager:
    """Get the singleton config manager."""
    return ConfigManager.load()
