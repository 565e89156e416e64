"""
Report Data Models — Run parameters and the RiskReport root aggregate.

RiskReport is the sole contract with the external renderer: it is serialized
to JSON as-is by the report writer.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

from riskforecast.config import ALL_CATEGORIES
from riskforecast.models.risk_models import (
    CategoryRisk,
    MitigationStrategy,
    OverallRisk,
    Prediction,
    RiskLevel,
)


class Thresholds(BaseModel):
    """Score cut-offs for level assignment. Must satisfy low < medium < high."""

    model_config = {"frozen": True}

    high: float = Field(default=80, ge=0, le=100)
    medium: float = Field(default=60, ge=0, le=100)
    low: float = Field(default=40, ge=0, le=100)

    @model_validator(mode="after")
    def _check_ordering(self) -> "Thresholds":
        if not (self.low < self.medium < self.high):
            raise ValueError(
                f"thresholds must satisfy low < medium < high "
                f"(got low={self.low}, medium={self.medium}, high={self.high})"
            )
        return self


class AnalysisParameters(BaseModel):
    """Validated inputs of a single analysis run."""

    model_config = {"frozen": True}

    project_path: str = "."
    analysis_period_days: int = Field(default=30, gt=0)
    enabled_categories: list[str] = Field(default_factory=lambda: list(ALL_CATEGORIES))
    thresholds: Thresholds = Field(default_factory=Thresholds)
    output_dir: str = "risk-prediction"
    deadline_seconds: float | None = Field(default=None, gt=0)
    apply_neutral_defaults: bool = False

    @field_validator("enabled_categories")
    @classmethod
    def _check_categories(cls, value: list[str]) -> list[str]:
        unknown = [c for c in value if c not in ALL_CATEGORIES]
        if unknown:
            raise ValueError(
                f"unknown categories: {', '.join(sorted(set(unknown)))} "
                f"(known: {', '.join(ALL_CATEGORIES)})"
            )
        if not value:
            raise ValueError("at least one category must be enabled")
        # Registry order, duplicates dropped
        return [c for c in ALL_CATEGORIES if c in value]


class ReportSummary(BaseModel):
    """Headline numbers for the renderer."""

    model_config = {"frozen": True}

    overall_level: RiskLevel
    total_risks: int = 0
    high_risks: int = 0
    medium_risks: int = 0
    unknown_risks: int = 0


class RiskReport(BaseModel):
    """Root aggregate of one analysis run."""

    model_config = {"frozen": True}

    title: str = "Project Risk Analysis Report"
    timestamp: str
    parameters: AnalysisParameters
    risks: dict[str, CategoryRisk] = Field(default_factory=dict)
    overall: OverallRisk
    predictions: dict[str, dict[str, Prediction]] = Field(default_factory=dict)
    recommendations: list[MitigationStrategy] = Field(default_factory=list)
    summary: ReportSummary

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)
