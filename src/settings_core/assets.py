"""Which client-side libraries a settings page needs, and where to load them from.

Only the field types actually in use pull in their library: a page without
date fields never loads flatpickr. Package definitions can be overridden per
page through `PageOptions.asset_packages`, deep-merged over `LIBRARY_PACKAGES`.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from typing import Any

from .config_manager import deep_merge
from .logger import get_logger

logger = get_logger(__name__)

CDN = "https://cdnjs.cloudflare.com/ajax/libs"
CODEMIRROR_VERSION = "5.65.16"

LIBRARY_PACKAGES: dict[str, dict[str, Any]] = {
    "jquery": {
        "handle": "jquery",
        "script": {"src": f"{CDN}/jquery/3.7.1/jquery.min.js", "deps": [], "version": "3.7.1"},
    },
    "select2": {
        "handle": "select2",
        "script": {"src": f"{CDN}/select2/4.0.13/js/select2.min.js", "deps": ["jquery"], "version": "4.0.13"},
        "style": {"src": f"{CDN}/select2/4.0.13/css/select2.min.css", "version": "4.0.13"},
    },
    "flatpickr": {
        "handle": "flatpickr",
        "script": {"src": f"{CDN}/flatpickr/4.6.13/flatpickr.min.js", "deps": [], "version": "4.6.13"},
        "style": {"src": f"{CDN}/flatpickr/4.6.13/flatpickr.min.css", "version": "4.6.13"},
    },
    "coloris": {
        "handle": "coloris",
        "script": {"src": "https://cdn.jsdelivr.net/gh/mdbassit/Coloris@v0.24.0/dist/coloris.min.js", "deps": [], "version": "0.24.0"},
        "style": {"src": "https://cdn.jsdelivr.net/gh/mdbassit/Coloris@v0.24.0/dist/coloris.min.css", "version": "0.24.0"},
    },
    "codemirror": {
        "handle": "codemirror",
        "script": {"src": f"{CDN}/codemirror/{CODEMIRROR_VERSION}/codemirror.min.js", "deps": [], "version": CODEMIRROR_VERSION},
        "style": {"src": f"{CDN}/codemirror/{CODEMIRROR_VERSION}/codemirror.min.css", "version": CODEMIRROR_VERSION},
    },
}

CODE_MODES = {
    "css": "css",
    "js": "javascript",
    "javascript": "javascript",
    "html": "htmlmixed",
    "xml": "xml",
}

# htmlmixed embeds the css, javascript and xml modes.
_MODE_DEPS = {"htmlmixed": ["codemirror-mode-xml", "codemirror-mode-javascript", "codemirror-mode-css"]}

FIELD_TYPE_PACKAGES = {
    "select": "select2",
    "multiselect": "select2",
    "date": "flatpickr",
    "datetime": "flatpickr",
    "time": "flatpickr",
    "color": "coloris",
}


def mode_package(mode: str) -> dict[str, Any]:
    """Package definition for one CodeMirror language mode."""
    deps = ["codemirror", *_MODE_DEPS.get(mode, [])]
    return {
        "handle": f"codemirror-mode-{mode}",
        "script": {
            "src": f"{CDN}/codemirror/{CODEMIRROR_VERSION}/mode/{mode}/{mode}.min.js",
            "deps": deps,
            "version": CODEMIRROR_VERSION,
        },
    }


for _mode in dict.fromkeys(CODE_MODES.values()):
    LIBRARY_PACKAGES[f"codemirror-mode-{_mode}"] = mode_package(_mode)


def required_library_packages(field_definitions: Iterable[Any]) -> tuple[str, ...]:
    """Package ids needed by the given fields, in first-use order."""
    required: dict[str, None] = {}
    for definition in field_definitions:
        field_type = getattr(definition, "type", "")
        package = FIELD_TYPE_PACKAGES.get(field_type)
        if package:
            required.setdefault(package)
        elif field_type == "code":
            required.setdefault("codemirror")
            mode = CODE_MODES.get(str(getattr(definition, "language", "css") or "css").lower())
            if mode:
                required.setdefault(f"codemirror-mode-{mode}")
    return tuple(required)


def resolve_packages(package_ids: Iterable[str], overrides: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
    """Return package definitions for `package_ids`, dependencies first.

    Unknown ids (in the ids or in a package's `deps`) are logged and skipped.
    """
    catalogue = deep_merge(copy.deepcopy(LIBRARY_PACKAGES), copy.deepcopy(dict(overrides or {})))
    ordered: dict[str, dict[str, Any]] = {}

    def visit(package_id: str, trail: tuple[str, ...]) -> None:
        if package_id in ordered or package_id in trail:
            return
        package = catalogue.get(package_id)
        if not isinstance(package, dict):
            logger.warning("Unknown asset package: %s", package_id)
            return
        for dep in (package.get("script") or {}).get("deps", []):
            visit(dep, (*trail, package_id))
        package.setdefault("handle", package_id)
        ordered[package_id] = package

    for package_id in package_ids:
        visit(package_id, ())
    return list(ordered.values())
