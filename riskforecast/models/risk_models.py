"""
Risk Data Models — Category scores, overall score, predictions, mitigations.

Every model here is frozen: created once per run and never mutated.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class RiskLevel(str, Enum):
    VERY_LOW = "very-low"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    UNKNOWN = "unknown"


# Rank used for monotonicity checks; unknown sits below every measured level
LEVEL_RANK: dict[RiskLevel, int] = {
    RiskLevel.UNKNOWN: -1,
    RiskLevel.VERY_LOW: 0,
    RiskLevel.LOW: 1,
    RiskLevel.MEDIUM: 2,
    RiskLevel.HIGH: 3,
}


class Timeframe(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class Trend(str, Enum):
    INCREASING = "increasing"
    STABLE = "stable"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"


class Effort(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CategoryRisk(BaseModel):
    """Scored risk for one category."""

    model_config = {"frozen": True}

    category: str
    name: str = Field(default="", description="Human-readable category title")
    score: float = Field(..., ge=0, le=100)
    level: RiskLevel
    probability: float = Field(default=0.0, ge=0, le=100)
    impact: float = Field(default=0.0, ge=0, le=100)
    indicators: list[str] = Field(default_factory=list)
    factors: dict[str, float] = Field(
        default_factory=dict, description="Factor values that contributed to the score"
    )
    factor_status: dict[str, str] = Field(
        default_factory=dict, description="Status of every declared factor"
    )


class OverallRisk(BaseModel):
    """Weighted project-wide risk."""

    model_config = {"frozen": True}

    score: float = Field(..., ge=0, le=100)
    level: RiskLevel
    total_weight: float = Field(default=0.0, ge=0)
    formula: str = Field(
        default="overall = Σ(score × weight) / Σ(enabled weight)",
        description="Human-readable formula used",
    )


class Prediction(BaseModel):
    """Extrapolated category score for one timeframe."""

    model_config = {"frozen": True}

    score: float = Field(..., ge=0, le=100)
    trend: Trend
    confidence: float = Field(..., ge=0, le=95)


class MitigationStrategy(BaseModel):
    """A recommended action for a medium or high risk category."""

    model_config = {"frozen": True}

    category: str
    strategy: str
    priority: Priority
    effort: Effort
