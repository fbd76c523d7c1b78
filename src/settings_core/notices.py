"""User-visible notices accumulated while handling a settings request."""

from __future__ import annotations

from dataclasses import dataclass

SEVERITIES = ("error", "warning", "success", "info")


@dataclass(frozen=True)
class Notice:
    """One message rendered above the settings form."""

    code: str
    message: str
    severity: str = "error"

    def __post_init__(self):
        if self.severity not in SEVERITIES:
            object.__setattr__(self, "severity", "info")
