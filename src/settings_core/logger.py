"""Logging for settings studio: one `settings_studio` logger tree, console plus daily files."""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from .config_manager import get_config_manager

LOG_FILE_NAME = "settings.log"

CONSOLE_FORMAT = logging.Formatter("%(levelname)s | %(name)s | %(message)s")
FILE_FORMAT = logging.Formatter(
    "%(asctime)s [%(levelname)s] [%(name)s.%(funcName)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

_SECRET_HINTS = ("password", "token", "secret", "key", "api")

app_logger = logging.getLogger("settings_studio")


def _configured_level() -> int:
    name = str(get_config_manager().get_setting("logging.level", "INFO") or "INFO").upper()
    return getattr(logging, name, logging.INFO)


def _resolve_logs_dir() -> Path:
    """Configured logs dir, or `./logs` when that one cannot be created."""
    try:
        return get_config_manager().get_logs_dir()
    except OSError:
        fallback = Path("logs")
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


LOG_BASE_DIR = _resolve_logs_dir()


def setup_logging():
    """Attach the console and rotating file handlers once; later calls only re-apply the level."""
    level = _configured_level()
    app_logger.setLevel(level)
    if app_logger.handlers:
        for handler in app_logger.handlers:
            handler.setLevel(level)
        return

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(CONSOLE_FORMAT)
    console.setLevel(level)
    app_logger.addHandler(console)

    log_file = LOG_BASE_DIR / LOG_FILE_NAME
    try:
        LOG_BASE_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(log_file, when="midnight", backupCount=30, encoding="utf-8")
    except OSError as exc:
        app_logger.error("File logging disabled, cannot open %s: %s", log_file, exc)
        return
    file_handler.setFormatter(FILE_FORMAT)
    file_handler.setLevel(level)
    app_logger.addHandler(file_handler)
    app_logger.debug("Logging to %s at %s", log_file, logging.getLevelName(level))


def safe_display(key: str | None, value) -> str:
    """Return a log-safe representation, masking values of secret-looking keys."""
    key_value = str(key or "").lower()
    if any(hint in key_value for hint in _SECRET_HINTS):
        return "<masked>"
    if not isinstance(value, str):
        return repr(value)
    if len(value) > 120:
        return value[:117] + "..."
    return value


def get_logger(name: str) -> logging.Logger:
    """Module logger as a child of `settings_studio`."""
    setup_logging()
    return app_logger.getChild(name)
