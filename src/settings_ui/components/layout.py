"""Base page shell for settings pages."""

from fasthtml.common import Body, Div, Head, Html, Main, Meta, Script, Title

from settings_core import __version__
from settings_ui.common.toasts import TOAST_HOLDER_ID

from .assets import package_tags


def base_layout(title: str, content, packages: list | None = None) -> Html:
    """Wrap `content` in the HTML shell with HTMX, the toast holder and the field libraries."""
    return Html(
        Head(
            Meta(charset="utf-8"),
            Meta(name="viewport", content="width=device-width, initial-scale=1"),
            Meta(name="generator", content=f"settings-studio {__version__}"),
            Title(title),
            # HTMX
            Script(src="https://unpkg.com/htmx.org@1.9.10"),
            *package_tags(packages or []),
        ),
        Body(
            Main(content, id="app-main", cls="settings-main"),
            Div(id=TOAST_HOLDER_ID, cls="settings-toast-holder"),
            Script("""
                (function () {
                    if (window.__settingsToastSystemBound) return;
                    window.__settingsToastSystemBound = true;

                    function dismiss(toast) {
                        if (!toast || toast.dataset.toastClosing === 'true') return;
                        toast.dataset.toastClosing = 'true';
                        toast.remove();
                    }

                    function arm(toast) {
                        if (toast.dataset.toastArmed === 'true') return;
                        toast.dataset.toastArmed = 'true';
                        const timeout = parseInt(toast.dataset.toastTimeout || '3000', 10);
                        setTimeout(() => dismiss(toast), timeout);
                    }

                    document.addEventListener('click', (event) => {
                        const close = event.target.closest('[data-toast-close]');
                        if (close) dismiss(close.closest('.settings-toast'));
                    });

                    const holder = document.getElementById('settings-toast-holder');
                    if (holder) {
                        new MutationObserver(() => holder.querySelectorAll('.settings-toast').forEach(arm))
                            .observe(holder, { childList: true, subtree: true });
                    }
                    document.querySelectorAll('.settings-toast').forEach(arm);
                })();
            """),
        ),
    )
