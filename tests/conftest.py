"""Test bootstrap.

Ensures the project root and `src/` are importable and keeps logs, config and
the option store inside temporary folders.
"""

from __future__ import annotations

import contextlib
import sys
import tempfile
from pathlib import Path

import pytest

# Add SRC to path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

SRC = ROOT / "src"
if SRC.exists() and str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def _config_manager():
    from settings_core.config_manager import get_config_manager

    return get_config_manager()


def pytest_configure():
    """Redirect session logging to a temporary folder before test collection."""
    cm = _config_manager()
    session_logs_dir = Path(tempfile.mkdtemp(prefix="settings-pytest-logs-")) / "logs"
    cm.set_logs_dir(str(session_logs_dir))

    from settings_core import logger as logger_mod

    session_logs_dir.mkdir(parents=True, exist_ok=True)
    logger_mod.LOG_BASE_DIR = session_logs_dir
    for handler in list(logger_mod.app_logger.handlers):
        logger_mod.app_logger.removeHandler(handler)
        with contextlib.suppress(Exception):
            handler.close()


def _redirect_test_logging(monkeypatch, tmp_path):
    from settings_core import logger as logger_mod

    test_logs_dir = tmp_path / "logs"
    test_logs_dir.mkdir(parents=True, exist_ok=True)

    for handler in list(logger_mod.app_logger.handlers):
        logger_mod.app_logger.removeHandler(handler)
        with contextlib.suppress(Exception):
            handler.close()

    monkeypatch.setattr(logger_mod, "LOG_BASE_DIR", test_logs_dir)
    logger_mod.setup_logging()


@pytest.fixture(autouse=True)
def _isolate_runtime_paths(monkeypatch, tmp_path):
    """Point logs and the JSON option store at the test's tmp folder."""
    cm = _config_manager()
    original_paths = {
        "logs": cm.resolve_path("logs_dir", "data/local/logs"),
        "options": cm.resolve_path("options_file", "data/local/options.json"),
    }
    cm.set_logs_dir(str(tmp_path / "logs"))
    cm.set_options_file(str(tmp_path / "options.json"))
    _redirect_test_logging(monkeypatch, tmp_path)

    yield

    cm.set_logs_dir(str(original_paths["logs"]))
    cm.set_options_file(str(original_paths["options"]))
