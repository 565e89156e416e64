"""
Analyze Route — POST /analyze, GET /audit/recent

Runs the risk pipeline against a project path on the server's filesystem and
returns the full RiskReport.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from riskforecast.api.dependencies import get_analysis_worker, get_audit_logger
from riskforecast.audit.logger import AuditLogger
from riskforecast.errors import ConfigurationError, PersistenceError
from riskforecast.models.analysis_models import AnalyzeRequest, AnalyzeResponse
from riskforecast.workers.analysis_worker import RiskAnalysisWorker

logger = logging.getLogger("riskforecast.api.analyze")

router = APIRouter()


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(
    request: AnalyzeRequest,
    worker: RiskAnalysisWorker = Depends(get_analysis_worker),
):
    """
    Analyze a project's risks.

    Request body (all optional, defaults from settings):
        - project_path, analysis_period_days, enabled_categories
        - thresholds: partial {high, medium, low} overrides
        - deadline_seconds, apply_neutral_defaults
        - persist: write the JSON report to the output directory

    Response:
        - report: the full RiskReport
        - persisted_path: where the JSON was written, if persisted
    """
    try:
        result = await worker.analyze(
            persist=request.persist,
            project_path=request.project_path,
            analysis_period_days=request.analysis_period_days,
            enabled_categories=request.enabled_categories,
            thresholds=request.thresholds,
            deadline_seconds=request.deadline_seconds,
            apply_neutral_defaults=request.apply_neutral_defaults,
        )
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail={"message": str(e), "errors": e.errors})
    except PersistenceError as e:
        logger.error(f"Report persistence failed: {e}")
        return AnalyzeResponse(
            message="persistence_failed",
            run_id=e.run_id or "",
            report=e.report,
            errors=[str(e)],
        )

    return AnalyzeResponse(
        run_id=result.run_id,
        report=result.report,
        persisted_path=result.persisted_path,
    )


@router.get("/audit/recent")
async def recent_runs(
    count: int = Query(default=20, ge=1, le=500),
    project_path: str | None = None,
    audit: AuditLogger = Depends(get_audit_logger),
):
    """Most recent audit entries, optionally filtered by project."""
    return {"entries": audit.read_recent(count, project_path=project_path)}
