"""
Report Assembler — Builds the immutable RiskReport from a finished RunContext.
"""

from __future__ import annotations

import time

from riskforecast.models.analysis_models import RunContext
from riskforecast.models.report_models import ReportSummary, RiskReport
from riskforecast.models.risk_models import RiskLevel


def _utc_timestamp() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


def assemble_report(context: RunContext, timestamp: str | None = None) -> RiskReport:
    if context.overall is None:
        raise ValueError("Cannot assemble a report before the overall risk is computed")

    levels = [r.level for r in context.risks.values()]
    summary = ReportSummary(
        overall_level=context.overall.level,
        total_risks=len(levels),
        high_risks=levels.count(RiskLevel.HIGH),
        medium_risks=levels.count(RiskLevel.MEDIUM),
        unknown_risks=levels.count(RiskLevel.UNKNOWN),
    )

    return RiskReport(
        timestamp=timestamp or _utc_timestamp(),
        parameters=context.parameters,
        risks=dict(context.risks),
        overall=context.overall,
        predictions=context.predictions,
        recommendations=list(context.recommendations),
        summary=summary,
    )
