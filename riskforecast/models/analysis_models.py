"""
Analysis Request/Response Models — API contract, run context, audit entries.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from riskforecast.models.factor_models import FactorSet
from riskforecast.models.report_models import AnalysisParameters, RiskReport
from riskforecast.models.risk_models import (
    CategoryRisk,
    MitigationStrategy,
    OverallRisk,
    Prediction,
)


class RunContext(BaseModel):
    """State threaded through the pipeline stages.

    Each stage returns a new context (model_copy) instead of mutating this one.
    """

    model_config = {"frozen": True}

    run_id: str
    parameters: AnalysisParameters
    factor_sets: dict[str, FactorSet] = Field(default_factory=dict)
    failed_categories: list[str] = Field(default_factory=list)
    risks: dict[str, CategoryRisk] = Field(default_factory=dict)
    overall: OverallRisk | None = None
    predictions: dict[str, dict[str, Prediction]] = Field(default_factory=dict)
    recommendations: list[MitigationStrategy] = Field(default_factory=list)


class AnalyzeRequest(BaseModel):
    """Request body for POST /analyze. Omitted fields fall back to settings."""

    project_path: str | None = None
    analysis_period_days: int | None = None
    enabled_categories: list[str] | None = None
    thresholds: dict[str, float] | None = Field(
        default=None, description="Overrides for any of high / medium / low"
    )
    deadline_seconds: float | None = None
    apply_neutral_defaults: bool | None = None
    persist: bool = Field(default=True, description="Write the report JSON to output_dir")


class AnalyzeResponse(BaseModel):
    """Top-level response for the analyze endpoint."""

    message: str = "analysis_complete"
    run_id: str = ""
    report: RiskReport | None = None
    persisted_path: str | None = None
    errors: list[str] = Field(default_factory=list)


class AuditEntry(BaseModel):
    """Audit metadata for a run."""

    run_id: str
    project_path: str
    categories_analyzed: list[str]
    unknown_categories: list[str] = Field(default_factory=list)
    overall_score: float
    recommendations: int = 0
    duration_ms: float = 0.0
    persisted_path: str | None = None
