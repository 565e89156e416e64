"""
Risk Aggregator — Weighted overall project risk.

overall = Σ(category.score × category.weight) / Σ(weight of enabled categories)

Unknown categories keep their weight and contribute a zero score, so missing
data pulls the overall score down instead of being silently ignored.
"""

from __future__ import annotations

from riskforecast.core.category_scorer import categorize_level
from riskforecast.core.registry import CATEGORY_REGISTRY, RiskCategoryDefinition
from riskforecast.models.report_models import Thresholds
from riskforecast.models.risk_models import CategoryRisk, OverallRisk


def compute_overall_risk(
    risks: dict[str, CategoryRisk],
    thresholds: Thresholds | None = None,
    registry: dict[str, RiskCategoryDefinition] | None = None,
) -> OverallRisk:
    thresholds = thresholds or Thresholds()
    registry = registry or CATEGORY_REGISTRY
    total_risk = 0.0
    total_weight = 0.0

    for category, risk in risks.items():
        definition = registry.get(category)
        if definition is None:
            continue
        total_risk += risk.score * definition.weight
        total_weight += definition.weight

    score = total_risk / total_weight if total_weight > 0 else 0.0
    score = round(min(100.0, max(0.0, score)), 2)

    return OverallRisk(
        score=score,
        level=categorize_level(score, thresholds),
        total_weight=round(total_weight, 4),
    )
