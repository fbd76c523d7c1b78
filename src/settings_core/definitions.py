"""In-memory definitions of a settings page: tabs, sections and fields.

The store is populated once per request through the fluent `add_*` methods.
Every call validates immediately so mistakes surface while the page is being
defined rather than when it is rendered or saved.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from .conditional import Conditional
from .config_manager import deep_merge
from .errors import DefinitionError, UnsupportedFieldType
from .logger import get_logger
from .registry import FieldRegistry
from .sanitizers import scalar_to_str

logger = get_logger(__name__)


@dataclass(frozen=True)
class TabDefinition:
    id: str
    title: str
    icon: str = ""


@dataclass(frozen=True)
class SectionDefinition:
    id: str
    title: str
    description: str = ""
    tab_id: str = ""


@dataclass(frozen=True)
class FieldDefinition:
    """Configuration of one field; behaviors read it and never mutate it."""

    id: str
    section_id: str
    type: str
    label: str
    name: str = ""
    description: str = ""
    default: Any = None
    has_default: bool = False
    options: dict[str, str] = field(default_factory=dict)
    attributes: dict[str, Any] = field(default_factory=dict)
    conditional: Conditional | None = None
    validate_callback: Callable[[Any], Any] | None = None
    language: str = "css"
    html_prefix: str = "settings-studio"
    labels: Labels | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Labels:
    """User-facing strings; hosts pass already-translated text."""

    no_permission: str = "You do not have permission to access this page."
    add_media_title: str = "Add media"
    select_media_text: str = "Select"
    remove_media_text: str = "Remove"
    validation_error: str = "Invalid value for %s. The setting has been reverted to its default value."
    malformed_submission: str = "The submitted data is not in the expected format. Nothing was saved."
    settings_saved: str = "Settings saved."
    save_button: str = "Save Settings"

    @classmethod
    def from_mapping(cls, overrides: Mapping[str, Any] | None) -> Labels:
        known = {f.name for f in fields(cls)}
        return cls(**{k: str(v) for k, v in (overrides or {}).items() if k in known})


@dataclass(frozen=True)
class PageOptions:
    """Typed page configuration with deep-merged overrides."""

    option_name: str
    page_slug: str
    option_group: str = ""
    page_title: str = "Settings"
    menu_title: str = "Settings"
    html_prefix: str = "settings-studio"
    labels: Labels = field(default_factory=Labels)
    asset_packages: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def build(cls, option_name: str, page_slug: str, overrides: Mapping[str, Any] | None = None) -> PageOptions:
        if not option_name:
            raise DefinitionError("Option name cannot be empty.")
        if not page_slug:
            raise DefinitionError("Page slug cannot be empty.")

        data: dict[str, Any] = {
            "option_group": f"{option_name}_group",
            "page_title": "Settings",
            "menu_title": "Settings",
            "html_prefix": "settings-studio",
            "labels": {},
            "asset_packages": {},
        }
        deep_merge(data, dict(overrides or {}))
        unknown = sorted(set(data) - {f.name for f in fields(cls)})
        if unknown:
            logger.warning("Ignoring unknown page options: %s", ", ".join(unknown))

        return cls(
            option_name=option_name,
            page_slug=page_slug,
            option_group=str(data["option_group"] or f"{option_name}_group"),
            page_title=str(data["page_title"]),
            menu_title=str(data["menu_title"]),
            html_prefix=str(data["html_prefix"] or "settings-studio"),
            labels=Labels.from_mapping(data["labels"]),
            asset_packages=dict(data["asset_packages"] or {}),
        )


def normalize_options(options: Any) -> dict[str, str]:
    """Turn a mapping, a list of pairs or a list of values into value->label."""
    if options is None:
        return {}
    if isinstance(options, Mapping):
        items: Iterable[Any] = options.items()
    elif isinstance(options, (list, tuple)):
        items = [item if isinstance(item, (list, tuple)) and len(item) == 2 else (item, item) for item in options]
    else:
        raise DefinitionError("Field options must be a mapping or a list.")

    normalized: dict[str, str] = {}
    for key, label in items:
        text_key = scalar_to_str(key)
        if text_key is None:
            raise DefinitionError(f"Option values must be scalars, got {key!r}.")
        normalized[text_key] = str(label)
    return normalized


_FIELD_ARGS = ("description", "default", "options", "attributes", "conditional", "validate_callback", "language")


class SettingsDefinitionStore:
    """Ordered tabs, sections and fields for one option name."""

    def __init__(
        self,
        option_name: str,
        *,
        option_group: str = "",
        html_prefix: str = "settings-studio",
        labels: Labels | None = None,
        registry: FieldRegistry | None = None,
    ):
        if not option_name:
            raise DefinitionError("Option name cannot be empty.")
        self.option_name = option_name
        self.option_group = option_group or f"{option_name}_group"
        self.html_prefix = html_prefix
        self.labels = labels or Labels()
        self.registry = registry or FieldRegistry()
        self.tabs: dict[str, TabDefinition] = {}
        self.sections: dict[str, SectionDefinition] = {}
        self.fields: dict[str, FieldDefinition] = {}

    @property
    def uses_tabs(self) -> bool:
        return bool(self.tabs)

    def add_tab(self, tab_id: str, title: str, icon: str = "") -> SettingsDefinitionStore:
        if not tab_id:
            raise DefinitionError("Tab id cannot be empty.")
        self.tabs[tab_id] = TabDefinition(id=tab_id, title=title, icon=icon)
        return self

    def add_section(
        self, section_id: str, title: str, description: str = "", tab_id: str = ""
    ) -> SettingsDefinitionStore:
        if not section_id:
            raise DefinitionError("Section id cannot be empty.")
        if tab_id and tab_id not in self.tabs:
            raise DefinitionError(f"Tab '{tab_id}' must be added before adding sections to it.")
        self.sections[section_id] = SectionDefinition(
            id=section_id, title=title, description=description, tab_id=tab_id
        )
        return self

    def add_field(self, field_id: str, section_id: str, field_type: str, label: str, **args: Any) -> SettingsDefinitionStore:
        if not field_id:
            raise DefinitionError("Field id cannot be empty.")
        if section_id not in self.sections:
            raise DefinitionError(f"Section '{section_id}' must be added before adding fields to it.")
        field_type = getattr(field_type, "value", field_type)
        if field_type not in self.registry.get_supported_types():
            raise UnsupportedFieldType(field_type)

        validate_callback = args.get("validate_callback")
        if validate_callback is not None and not callable(validate_callback):
            raise DefinitionError(f"validate_callback for '{field_id}' must be callable.")

        conditional = args.get("conditional")
        self.fields[field_id] = FieldDefinition(
            id=field_id,
            section_id=section_id,
            type=field_type,
            label=label,
            name=f"{self.option_name}[{field_id}]",
            description=str(args.get("description") or ""),
            default=args.get("default"),
            has_default="default" in args,
            options=normalize_options(args.get("options")),
            attributes=dict(args.get("attributes") or {}),
            conditional=Conditional.from_config(conditional) if conditional is not None else None,
            validate_callback=validate_callback,
            language=str(args.get("language") or "css"),
            html_prefix=self.html_prefix,
            labels=self.labels,
            extra={k: v for k, v in args.items() if k not in _FIELD_ARGS},
        )
        return self

    def get_field(self, field_id: str) -> FieldDefinition | None:
        return self.fields.get(field_id)

    def resolve_active_tab(self, requested: str | None = None) -> str:
        """Return the requested tab when known, else the first registered one."""
        if not self.tabs:
            return ""
        if requested and requested in self.tabs:
            return requested
        return next(iter(self.tabs))

    def sections_for_tab(self, active_tab: str = "") -> list[SectionDefinition]:
        if not self.uses_tabs:
            return list(self.sections.values())
        return [s for s in self.sections.values() if s.tab_id == active_tab]

    def fields_for_section(self, section_id: str) -> list[FieldDefinition]:
        return [f for f in self.fields.values() if f.section_id == section_id]

    def fields_in_scope(self, active_tab: str = "") -> list[FieldDefinition]:
        """Fields a submission for `active_tab` is allowed to touch."""
        if not self.uses_tabs:
            return list(self.fields.values())
        section_ids = {s.id for s in self.sections_for_tab(active_tab)}
        return [f for f in self.fields.values() if f.section_id in section_ids]

