from collections.abc import Awaitable, Callable

from fasthtml.common import RedirectResponse, fast_app, serve
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import Response

from settings_core import __version__
from settings_core.config_manager import get_config_manager
from settings_core.logger import get_logger, setup_logging
from settings_core.option_store import default_option_store
from settings_core.settings import Settings
from settings_ui.config import get_html_prefix
from settings_ui.routes.settings import setup_settings_routes

# Initialize logging
setup_logging()
logger = get_logger(__name__)

# Initialize configuration
config = get_config_manager()

OPTION_NAME = "studio_demo_options"
PAGE_SLUG = "studio-demo"


def _valid_phone(value) -> bool:
    digits = [c for c in str(value or "") if c.isdigit()]
    return not value or len(digits) >= 6


def build_settings(store=None) -> Settings:
    """Demo page exercising every field type across three tabs."""
    settings = Settings(
        OPTION_NAME,
        PAGE_SLUG,
        {
            "page_title": "Settings Demo (Tabs)",
            "menu_title": "Settings Demo",
            "html_prefix": get_html_prefix(),
        },
        store=store if store is not None else default_option_store(),
    )

    settings.add_tab("inputs", "Inputs & Text", "dashicons-edit-page").add_tab(
        "choices", "Choices & UI", "dashicons-forms"
    ).add_tab("advanced", "Advanced & Conditional", "dashicons-admin-settings")

    (
        settings.add_section("text_inputs", "Text-Based Inputs", "Fields for text, numbers, and passwords.", "inputs")
        .add_section("choice_inputs", "Choice-Based Inputs", "Fields for selecting one or more options.", "choices")
        .add_section("ui_inputs", "Enhanced UI Inputs", "Fields with special user interfaces.", "choices")
        .add_section("advanced_inputs", "Advanced & Special Inputs", "Media, code, and other powerful fields.", "advanced")
        .add_section(
            "conditional_section",
            "Conditional Logic Demo",
            "Show and hide fields based on other fields' values.",
            "advanced",
        )
    )

    (
        settings.add_field("demo_text", "text_inputs", "text", "Text Field")
        .add_field("demo_email", "text_inputs", "email", "Email Field")
        .add_field("demo_password", "text_inputs", "password", "Password Field")
        .add_field("demo_number", "text_inputs", "number", "Number Field", default=42)
        .add_field("demo_url", "text_inputs", "url", "URL Field")
        .add_field("demo_textarea", "text_inputs", "textarea", "Textarea Field")
    )

    (
        settings.add_field("demo_checkbox", "choice_inputs", "checkbox", "Checkbox Field")
        .add_field("demo_toggle", "choice_inputs", "toggle", "Toggle Switch", default=True)
        .add_field("demo_select", "choice_inputs", "select", "Select Dropdown", options={"a": "Option A", "b": "Option B"})
        .add_field(
            "demo_multiselect",
            "choice_inputs",
            "multiselect",
            "Multi-Select",
            options={"a": "Choice A", "b": "Choice B", "c": "Choice C"},
        )
        .add_field("demo_radio", "choice_inputs", "radio", "Radio Buttons", options={"yes": "Yes", "no": "No"})
        .add_field(
            "demo_buttongroup",
            "choice_inputs",
            "buttongroup",
            "Button Group",
            options={"left": "Left", "center": "Center", "right": "Right"},
        )
        .add_field("demo_color", "ui_inputs", "color", "Color Picker")
        .add_field("demo_date", "ui_inputs", "date", "Date Picker")
        .add_field("demo_datetime", "ui_inputs", "datetime", "Date & Time Picker")
        .add_field("demo_time", "ui_inputs", "time", "Time Picker")
        .add_field("demo_range", "ui_inputs", "range", "Range Slider", default=75)
    )

    (
        settings.add_field("demo_media", "advanced_inputs", "media", "Media Uploader")
        .add_field(
            "demo_code_html",
            "advanced_inputs",
            "code",
            "Code Editor (HTML)",
            description="A code editor with HTML syntax highlighting.",
            language="html",
        )
        .add_field(
            "demo_code_css",
            "advanced_inputs",
            "code",
            "Code Editor (CSS)",
            description="A code editor with CSS syntax highlighting.",
            language="css",
        )
        .add_field(
            "demo_code_js",
            "advanced_inputs",
            "code",
            "Code Editor (JS)",
            description="A code editor with JavaScript syntax highlighting.",
            language="javascript",
        )
        .add_field(
            "demo_description",
            "advanced_inputs",
            "description",
            "Description Field",
            description="This is a read-only field used to display important information. It supports <strong>HTML</strong>.",
        )
        .add_field(
            "demo_contact_method",
            "conditional_section",
            "radio",
            "Preferred Contact Method",
            description="Select a method to see different conditional fields appear.",
            options={"email": "Email", "phone": "Phone Call", "none": "No Contact"},
            default="none",
        )
        .add_field(
            "demo_conditional_email",
            "conditional_section",
            "email",
            "Contact Email Address",
            description='This only appears if "Email" is selected.',
            conditional={"field": "demo_contact_method", "value": "email"},
        )
        .add_field(
            "demo_conditional_phone",
            "conditional_section",
            "text",
            "Contact Phone Number",
            description='This only appears if "Phone Call" is selected.',
            conditional={"field": "demo_contact_method", "value": "phone"},
            validate_callback=_valid_phone,
        )
    )
    return settings


# Create FastHTML app
app, rt = fast_app(
    pico=False,  # Don't use PicoCSS
)

allowed_origins = config.data.get("security", {}).get("allowed_origins", ["*"])
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_methods=["GET", "HEAD", "POST"],
    allow_headers=["*"],
)


# Request Logging Middleware
class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log incoming requests."""

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Dispatch the request and log the response."""
        logger.info("[%s] %s", request.method, request.url.path)
        return await call_next(request)


app.add_middleware(LoggingMiddleware)

# Settings page routes
setup_settings_routes(app, build_settings)


# Root redirect
@rt("/")
def index():
    """Redirect root to the settings page."""
    return RedirectResponse(url="/settings")


# Health check
@rt("/health")
def health():
    """Simple health check endpoint."""
    return {"status": "ok", "version": __version__}


def main():
    """Entry point for the settings-studio command."""
    logger.info("Starting Settings Studio demo")
    logger.info("Options file: %s", config.get_options_file())
    serve(
        appname="settings_app",
        port=8000,
        reload=True,
        reload_includes=["*.py"],
        reload_excludes=["data/*", "logs/*"],
    )


if __name__ == "__main__":
    main()
