"""Settings page and field rendering."""

from __future__ import annotations

from fasthtml.common import A, H2, H3, Button, Div, Form, Label, Nav, NotStr, P, Span

from settings_core.conditional import is_visible
from settings_core.errors import UnsupportedFieldType
from settings_core.logger import get_logger
from settings_core.notices import Notice
from settings_ui.common.toasts import notice_tone, toast_card

from .assets import init_script, inline_styles

logger = get_logger(__name__)


def _tab_nav(settings, active_tab: str):
    prefix = settings.page.html_prefix
    links = []
    for tab in settings.definitions.tabs.values():
        classes = "nav-tab nav-tab-active" if tab.id == active_tab else "nav-tab"
        icon = Span(cls=f"dashicons {tab.icon}") if tab.icon else ""
        links.append(A(icon, tab.title, href=f"?tab={tab.id}", cls=classes, data_tab=tab.id))
    return Nav(*links, cls=f"nav-tab-wrapper {prefix}-tabs")


def _notices_block(notices: list[Notice]):
    cards = [toast_card(n.message, notice_tone(n), code=n.code) for n in notices]
    return Div(*cards, cls="settings-notices")


def render_field(settings, field_id: str, active_tab: str = ""):
    """Render one field row: label, control, description and conditional hooks."""
    definition = settings.definitions.get_field(field_id)
    if definition is None:
        logger.warning("render_field called for unknown field %s", field_id)
        return P(f"Unknown field: {field_id}", cls="settings-field-error")

    prefix = definition.html_prefix
    try:
        behavior = settings.registry.create(definition.type, definition)
    except UnsupportedFieldType as exc:
        logger.error("Cannot render field %s: %s", field_id, exc)
        return P(str(exc), cls="settings-field-error")

    value = settings.get(field_id, behavior.get_default_value())
    control = behavior.render(value, definition.attributes)

    attrs: dict[str, str] = {}
    style = None
    if definition.conditional is not None:
        attrs.update(definition.conditional.to_data_attributes())
        if not is_visible(definition.conditional, settings.get(definition.conditional.field)):
            style = "display: none;"
    if active_tab:
        attrs["data-tab"] = active_tab

    description = ""
    if definition.description and definition.type != "description":
        description = P(NotStr(definition.description), cls="description")

    return Div(
        Label(definition.label, fr=field_id, cls=f"{prefix}-field-label"),
        Div(control, description, cls=f"{prefix}-field-control"),
        cls=f"{prefix}-field-container",
        style=style,
        **attrs,
    )


def _section(settings, section, active_tab: str):
    description = P(NotStr(section.description), cls="section-description") if section.description else ""
    rows = [render_field(settings, f.id, active_tab) for f in settings.definitions.fields_for_section(section.id)]
    return Div(H3(section.title), description, *rows, cls="settings-section", id=f"section-{section.id}")


def settings_page_content(settings, requested_tab: str | None = None, notices: list[Notice] | None = None) -> Div:
    """Full settings page body: title, notices, tabs and the form for the active tab."""
    active_tab = settings.resolve_active_tab(requested_tab)
    prefix = settings.page.html_prefix
    labels = settings.labels

    sections = [_section(settings, s, active_tab) for s in settings.definitions.sections_for_tab(active_tab)]
    save_url = f"/settings/save?tab={active_tab}" if active_tab else "/settings/save"

    form = Form(
        *sections,
        Div(Button(labels.save_button, type="submit", cls="button button-primary"), cls="submit"),
        hx_post=save_url,
        hx_swap="none",
        method="post",
        action=save_url,
        cls="settings-form",
        data_option_name=settings.option_name,
    )

    return Div(
        H2(settings.page.page_title),
        _notices_block(notices or []),
        _tab_nav(settings, active_tab) if settings.definitions.uses_tabs else "",
        form,
        inline_styles(prefix),
        init_script(prefix, labels),
        cls=f"wrap {prefix}-page",
    )
