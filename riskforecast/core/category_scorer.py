"""
Category Scorer — Turns a category's FactorSet into a CategoryRisk.

score       = mean of present declared factors (absent factors are excluded)
probability = mean of all present factor values
impact      = mean of present critical factors
level       = threshold bucket of score

A category with no present factor degrades to score 0, level "unknown".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from riskforecast.core.registry import RiskCategoryDefinition
from riskforecast.models.factor_models import FactorSet
from riskforecast.models.report_models import Thresholds
from riskforecast.models.risk_models import CategoryRisk, RiskLevel

CRITICAL_FACTORS = ("complexity", "dependencies", "vulnerabilities", "team_size")


@dataclass(frozen=True)
class IndicatorRule:
    """Fires `message` when `factor` is present and `predicate(value)` holds."""

    factor: str
    predicate: Callable[[float], bool]
    message: str


# Evaluated in order; every rule that fires is kept
INDICATOR_RULES: tuple[IndicatorRule, ...] = (
    IndicatorRule("complexity", lambda v: v > 15, "High code complexity detected"),
    IndicatorRule("dependencies", lambda v: v > 50, "Many outdated dependencies"),
    IndicatorRule("vulnerabilities", lambda v: v > 5, "Security vulnerabilities present"),
    IndicatorRule("test_coverage", lambda v: v < 50, "Low test coverage"),
    IndicatorRule("velocity", lambda v: v < 1, "Low development velocity"),
)


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def categorize_level(score: float, thresholds: Thresholds) -> RiskLevel:
    if score >= thresholds.high:
        return RiskLevel.HIGH
    if score >= thresholds.medium:
        return RiskLevel.MEDIUM
    if score >= thresholds.low:
        return RiskLevel.LOW
    return RiskLevel.VERY_LOW


def identify_indicators(values: dict[str, float]) -> list[str]:
    return [
        rule.message
        for rule in INDICATOR_RULES
        if rule.factor in values and rule.predicate(values[rule.factor])
    ]


def unknown_risk(definition: RiskCategoryDefinition, factor_status: dict[str, str] | None = None) -> CategoryRisk:
    """The degraded result for a category whose collector produced nothing."""
    return CategoryRisk(
        category=definition.name,
        name=definition.title,
        score=0.0,
        level=RiskLevel.UNKNOWN,
        probability=0.0,
        impact=0.0,
        indicators=[],
        factors={},
        factor_status=factor_status or {},
    )


def score_category(
    definition: RiskCategoryDefinition,
    factor_set: FactorSet,
    thresholds: Thresholds | None = None,
) -> CategoryRisk:
    """
    Score one category.

    Args:
        definition: Registry entry declaring the category's factors
        factor_set: Readings from the category's collector
        thresholds: Level cut-offs (defaults 80/60/40)

    Returns:
        Frozen CategoryRisk.
    """
    thresholds = thresholds or Thresholds()
    present = factor_set.values()
    declared = {name: present[name] for name in definition.factor_names if name in present}

    if not declared:
        return unknown_risk(definition, factor_set.statuses())

    score = round(_mean(list(declared.values())), 2)
    probability = round(min(_mean(list(present.values())), 100.0), 2)
    impact = round(_mean([present[f] for f in CRITICAL_FACTORS if f in present]), 2)

    return CategoryRisk(
        category=definition.name,
        name=definition.title,
        score=score,
        level=categorize_level(score, thresholds),
        probability=probability,
        impact=impact,
        indicators=identify_indicators(present),
        factors=declared,
        factor_status=factor_set.statuses(),
    )
