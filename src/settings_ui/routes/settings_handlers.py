import json
import re
from collections.abc import Iterable
from typing import Any

from starlette.responses import PlainTextResponse

from settings_core.logger import get_logger, safe_display, setup_logging
from settings_core.notices import Notice
from settings_ui.common.toasts import build_notice_toasts, build_toast
from settings_ui.components.layout import base_layout
from settings_ui.components.page import settings_page_content

# Initialize logging
setup_logging()
logger = get_logger(__name__)

_UNPARSED = object()


def _control_pattern(option_name: str) -> re.Pattern:
    return re.compile(rf"^{re.escape(option_name)}\[([^\[\]]+)\](\[\])?$")


def parse_form_submission(form_items: Iterable[tuple[str, Any]], option_name: str) -> dict[str, Any] | None:
    """Collect `<option_name>[<field>]` form entries into the raw submission mapping.

    - a repeated scalar key keeps its last value (checkbox hidden "0" then "1")
    - `<option_name>[<field>][]` entries become a list, empty members dropped
    - entries for other names are ignored

    Returns None when the form carries no control for `option_name` at all, which
    the pipeline reports as a malformed submission.
    """
    pattern = _control_pattern(option_name)
    payload: dict[str, Any] = {}
    found = False
    for raw_key, raw_val in form_items:
        match = pattern.match(str(raw_key))
        if not match:
            continue
        found = True
        field_id, is_list = match.group(1), bool(match.group(2))
        if is_list:
            members = payload.setdefault(field_id, [])
            if not isinstance(members, list):
                members = payload[field_id] = []
            if raw_val != "":
                members.append(raw_val)
        else:
            payload[field_id] = raw_val
        logger.debug("Form entry %s=%s", field_id, safe_display(field_id, raw_val))
    return payload if found else None


def _parse_json(raw: bytes) -> Any:
    """Try JSON parsing and return a sentinel on failure."""
    try:
        return json.loads(raw or b"null")
    except ValueError:
        return _UNPARSED


async def _read_submission(request, option_name: str) -> Any:
    content_type = request.headers.get("content-type", "")
    if "application/json" in content_type:
        body = _parse_json(await request.body())
        if body is _UNPARSED:
            logger.warning("Invalid JSON body posted for %s", option_name)
            return None
        if isinstance(body, dict) and isinstance(body.get(option_name), dict):
            return body[option_name]
        return body
    form = await request.form()
    return parse_form_submission(form.multi_items(), option_name)


def forbidden(request, settings) -> PlainTextResponse:
    """403 answer carrying the page's no-permission label."""
    logger.warning("Denied %s %s for %s", request.method, request.url.path, settings.option_name)
    return PlainTextResponse(settings.labels.no_permission, status_code=403)


def settings_page(request, settings):
    """Render the settings page for the requested tab."""
    requested_tab = request.query_params.get("tab")
    content = settings_page_content(settings, requested_tab, [])
    if request.headers.get("HX-Request") == "true":
        return content
    return base_layout(title=settings.page.page_title, content=content, packages=settings.asset_packages())


async def save_settings(request, settings):
    """Sanitize and persist a submitted settings form; answer with toasts.

    Accepts urlencoded/multipart forms with `<option_name>[<field>]` keys or a
    JSON body (either the raw field mapping or `{<option_name>: {...}}`).
    """
    requested_tab = request.query_params.get("tab")
    raw_input = await _read_submission(request, settings.option_name)

    try:
        notices: list[Notice] = settings.save_submission(raw_input, requested_tab)
    except OSError as exc:
        logger.exception("Failed to persist settings for %s", settings.option_name)
        return build_toast(f"Error while saving: {exc}", "danger")

    return tuple(build_notice_toasts(notices))
