"""`Settings`: the entry point a host uses to define, read and save a settings page."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from .assets import required_library_packages, resolve_packages
from .definitions import FieldDefinition, PageOptions, SettingsDefinitionStore
from .logger import get_logger
from .notices import Notice
from .option_store import OptionStore, default_option_store
from .pipeline import sanitize_submission
from .registry import FieldRegistry

logger = get_logger(__name__)


class Settings:
    """One settings page bound to one option name.

    Build it fresh per request: define tabs, sections and fields with the
    fluent `add_*` methods, then render it or feed it a submission.

        settings = (
            Settings("my_plugin_settings", "my-plugin")
            .add_section("general", "General")
            .add_field("api_key", "general", "text", "API key")
        )
        settings.get("api_key", "")
    """

    def __init__(
        self,
        option_name: str,
        page_slug: str,
        options: dict[str, Any] | None = None,
        *,
        store: OptionStore | None = None,
        registry: FieldRegistry | None = None,
    ):
        self.page = PageOptions.build(option_name, page_slug, options)
        self.registry = registry or FieldRegistry()
        self.definitions = SettingsDefinitionStore(
            option_name,
            option_group=self.page.option_group,
            html_prefix=self.page.html_prefix,
            labels=self.page.labels,
            registry=self.registry,
        )
        self.store = store if store is not None else default_option_store()
        self._record: dict[str, Any] | None = None

    @property
    def option_name(self) -> str:
        return self.page.option_name

    @property
    def labels(self):
        return self.page.labels

    # --- definition ---------------------------------------------------------

    def set_page_title(self, page_title: str) -> Settings:
        self.page = replace(self.page, page_title=page_title)
        return self

    def set_menu_title(self, menu_title: str) -> Settings:
        self.page = replace(self.page, menu_title=menu_title)
        return self

    def add_tab(self, tab_id: str, title: str, icon: str = "") -> Settings:
        self.definitions.add_tab(tab_id, title, icon)
        return self

    def add_section(self, section_id: str, title: str, description: str = "", tab_id: str = "") -> Settings:
        self.definitions.add_section(section_id, title, description, tab_id)
        return self

    def add_field(self, field_id: str, section_id: str, field_type: str, label: str, **args: Any) -> Settings:
        self.definitions.add_field(field_id, section_id, field_type, label, **args)
        return self

    # --- reading ------------------------------------------------------------

    def get_record(self) -> dict[str, Any]:
        """The persisted record, read from the store at most once per instance."""
        if self._record is None:
            stored = self.store.get(self.option_name, {})
            if not isinstance(stored, dict):
                logger.warning("Stored record for %s is not a mapping; treating it as empty", self.option_name)
                stored = {}
            self._record = stored
        return self._record

    def get(self, key: str, default: Any = None) -> Any:
        """Stored value, else the field's configured default, else `default`."""
        record = self.get_record()
        if record.get(key) is not None:
            return record[key]
        definition = self.definitions.get_field(key)
        if definition is not None and definition.default is not None:
            return definition.default
        return default

    def resolve_active_tab(self, requested: str | None = None) -> str:
        return self.definitions.resolve_active_tab(requested)

    def fields_in_scope(self, active_tab: str = "") -> list[FieldDefinition]:
        return self.definitions.fields_in_scope(active_tab)

    # --- saving -------------------------------------------------------------

    def save_submission(self, raw_input: Any, requested_tab: str | None = None) -> list[Notice]:
        """Sanitize and persist a submission; return the notices to show."""
        active_tab = self.resolve_active_tab(requested_tab)
        notices: list[Notice] = []
        prior = self.store.get(self.option_name, {})

        new_record = sanitize_submission(
            raw_input,
            self.fields_in_scope(active_tab),
            prior,
            registry=self.registry,
            labels=self.labels,
            notices=notices,
        )
        if any(n.code == "malformed_submission" for n in notices):
            return notices

        self.store.set(self.option_name, new_record)
        self._record = None
        logger.info("Saved %s (tab=%s, %d notices)", self.option_name, active_tab or "-", len(notices))
        notices.append(Notice(code="settings_updated", message=self.labels.settings_saved, severity="success"))
        return notices

    # --- assets and rendering -----------------------------------------------

    def required_library_packages(self) -> tuple[str, ...]:
        return required_library_packages(self.definitions.fields.values())

    def asset_packages(self) -> list[dict[str, Any]]:
        """Resolved package definitions, dependencies first."""
        return resolve_packages(self.required_library_packages(), self.page.asset_packages)

    def render_page(self, requested_tab: str | None = None, notices: list[Notice] | None = None):
        from settings_ui.components.page import settings_page_content

        return settings_page_content(self, requested_tab, notices or [])

    def render_field(self, field_id: str, active_tab: str = ""):
        from settings_ui.components.page import render_field

        return render_field(self, field_id, active_tab)

