"""
Error taxonomy.

CollectorFailure is recovered locally (the affected factor or category
degrades). ConfigurationError and PersistenceError are fatal and reach the
caller.
"""

from __future__ import annotations

from typing import Any


class RiskForecastError(Exception):
    """Base class for all engine errors."""


class CollectorFailure(RiskForecastError):
    """A collaborator could not answer: VCS absent, file unreadable, tool missing."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


class ConfigurationError(RiskForecastError):
    """Invalid run parameters. Raised before any collection begins."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or [message]


class PersistenceError(RiskForecastError):
    """The assembled report could not be written.

    The in-memory report is attached so callers can retry persistence. The
    worker fills in run_id so the failure can be matched to its audit entry.
    """

    def __init__(self, path: str, message: str, report: Any = None, run_id: str | None = None) -> None:
        super().__init__(f"Failed to write report to {path}: {message}")
        self.path = path
        self.report = report
        self.run_id = run_id
