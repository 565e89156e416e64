"""
Audit Logger — JSON-lines trail of analysis runs.

One line per run: timestamp, run_id, project, categories analysed, unknown
categories, overall score, recommendation count, duration and report path.
Audit failures are logged and never fail a run.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path

from riskforecast.config import settings
from riskforecast.models.analysis_models import AuditEntry

logger = logging.getLogger("riskforecast.audit")


class AuditLogger:
    """Appends AuditEntry records to a JSON-lines file."""

    def __init__(self, log_path: str | None = None) -> None:
        self.log_path = Path(log_path or settings.audit_log_path)

    def log(self, entry: AuditEntry) -> None:
        record = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "event": "risk_analysis",
            **entry.model_dump(),
        }
        try:
            with self.log_path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(record) + "\n")
        except OSError as e:
            logger.error(f"[{entry.run_id}] Failed to write audit log: {e}")

    def read_recent(self, count: int = 50, project_path: str | None = None) -> list[dict]:
        """
        Most recent `count` entries, oldest first.

        Malformed lines are skipped. When project_path is given only runs for
        that project are returned.
        """
        if count <= 0 or not self.log_path.exists():
            return []

        try:
            lines = self.log_path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            logger.warning(f"Cannot read audit log {self.log_path}: {e}")
            return []

        entries: list[dict] = []
        for line in lines:
            if not line.strip():
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError:
                continue
            if project_path is None or record.get("project_path") == project_path:
                entries.append(record)

        return entries[-count:]
