"""Toast notifications for the settings UI."""

from __future__ import annotations

from fasthtml.common import Button, Div, Span

from settings_core.notices import Notice
from settings_ui.config import get_setting

_ICONS = {"success": "✅", "info": "ℹ️", "danger": "⚠️"}
_MIN_TIMEOUT_MS = 1000
_MAX_TIMEOUT_MS = 15000

_TONE_STYLES = {
    "success": "background: #065f46; border: 1px solid #10b981;",
    "info": "background: #0c4a6e; border: 1px solid #0ea5e9;",
    "danger": "background: #7f1d1d; border: 1px solid #ef4444;",
}

# Notice severities mapped onto the three toast tones.
_SEVERITY_TONES = {"error": "danger", "warning": "danger", "success": "success", "info": "info"}

TOAST_HOLDER_ID = "settings-toast-holder"


def _coerce_timeout_ms(duration_ms: int | None) -> int:
    """Return a bounded timeout used by the toast dismiss script."""
    configured = duration_ms if duration_ms is not None else get_setting("ui.toast_duration", 3000)
    try:
        timeout = int(configured)
    except (TypeError, ValueError):
        timeout = 3000
    return max(_MIN_TIMEOUT_MS, min(timeout, _MAX_TIMEOUT_MS))


def toast_card(message: str, tone: str = "info", duration_ms: int | None = None, code: str = "") -> Div:
    """Return the toast element itself."""
    normalized_tone = tone if tone in _TONE_STYLES else "info"
    timeout_ms = _coerce_timeout_ms(duration_ms)
    safe_message = (message or "").strip() or "Done."
    attrs = {"data-toast-timeout": str(timeout_ms)}
    if code:
        attrs["data-notice-code"] = code
    return Div(
        Span(_ICONS[normalized_tone], cls="toast-icon"),
        Div(safe_message, cls="toast-message"),
        Button("✕", type="button", cls="toast-close", aria_label="Close notification", **{"data-toast-close": "true"}),
        role="status",
        aria_live="polite",
        style=_TONE_STYLES[normalized_tone] + " color: #f8fafc; border-radius: 0.8rem;",
        cls=f"settings-toast settings-toast-{normalized_tone}",
        **attrs,
    )


def build_toast(message: str, tone: str = "info", duration_ms: int | None = None, code: str = "") -> Div:
    """Return an out-of-band toast fragment appended to the global holder."""
    return Div(
        toast_card(message, tone, duration_ms, code),
        hx_swap_oob=f"beforeend:#{TOAST_HOLDER_ID}",
    )


def notice_tone(notice: Notice) -> str:
    return _SEVERITY_TONES.get(notice.severity, "info")


def build_notice_toasts(notices: list[Notice]) -> list[Div]:
    """One out-of-band toast per notice, in order."""
    return [build_toast(n.message, notice_tone(n), code=n.code) for n in notices]
