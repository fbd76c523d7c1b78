"""Option stores: where a settings page keeps its persisted record."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Protocol

from .logger import get_logger

logger = get_logger(__name__)


class OptionStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: dict[str, Any]) -> None: ...


class MemoryOptionStore:
    """Dict-backed store; handy for tests and for embedding."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, Any] = copy.deepcopy(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: dict[str, Any]) -> None:
        self._data[key] = copy.deepcopy(value)


class JsonOptionStore:
    """All option records in a single JSON document, keyed by option name."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Cannot read option store %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Option store %s does not hold an object; ignoring it", self.path)
            return {}
        return data

    def get(self, key: str, default: Any = None) -> Any:
        return self._read_all().get(key, default)

    def set(self, key: str, value: dict[str, Any]) -> None:
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp.replace(self.path)
        logger.debug("Stored option %s in %s", key, self.path)


def default_option_store() -> JsonOptionStore:
    """Store backed by the `paths.options_file` entry of config.json."""
    from .config_manager import get_config_manager

    return JsonOptionStore(get_config_manager().get_options_file())
