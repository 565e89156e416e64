"""
Report Writer — Persists a RiskReport as date-stamped JSON.

File name: risk-analysis-YYYY-MM-DD.json inside the output directory.
A later run on the same day overwrites the earlier file.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from riskforecast.config import settings
from riskforecast.errors import PersistenceError
from riskforecast.models.report_models import RiskReport

logger = logging.getLogger("riskforecast.persistence")


def report_filename(date: str | None = None) -> str:
    return f"risk-analysis-{date or time.strftime('%Y-%m-%d', time.gmtime())}.json"


class ReportWriter:
    """Writes reports into a single output directory."""

    def __init__(self, output_dir: str | None = None) -> None:
        self.output_dir = Path(output_dir or settings.output_dir)

    def path_for(self, report: RiskReport) -> Path:
        # Report timestamps are ISO-8601 UTC, so the first 10 chars are the date
        return self.output_dir / report_filename(report.timestamp[:10])

    def write(self, report: RiskReport) -> Path:
        """
        Write the report and return its path.

        Raises PersistenceError (carrying the report) if the directory cannot be
        created or the file cannot be written.
        """
        path = self.path_for(report)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(report.to_json(), encoding="utf-8")
        except OSError as e:
            raise PersistenceError(str(path), str(e), report=report) from e

        logger.info(f"Risk analysis saved to: {path}")
        return path
