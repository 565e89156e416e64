"""
Mitigation Advisor — Strategy recommendations for medium and high risks.

Strategies come from each category's static list in the registry. Effort is
tagged by EFFORT_RULES: an ordered, case-sensitive substring table where the
first matching rule wins. Capitalised strategy text ("Hire ...", "Implement ...")
does not match the lower-case keywords and falls through to low effort.
"""

from __future__ import annotations

from riskforecast.core.registry import CATEGORY_REGISTRY, RiskCategoryDefinition
from riskforecast.models.risk_models import (
    CategoryRisk,
    Effort,
    MitigationStrategy,
    Priority,
    RiskLevel,
)

ACTIONABLE_LEVELS = (RiskLevel.HIGH, RiskLevel.MEDIUM)

EFFORT_RULES: tuple[tuple[tuple[str, ...], Effort], ...] = (
    (("hire", "training"), Effort.HIGH),
    (("implement", "establish"), Effort.MEDIUM),
)
DEFAULT_EFFORT = Effort.LOW


def estimate_effort(strategy: str) -> Effort:
    for keywords, effort in EFFORT_RULES:
        if any(keyword in strategy for keyword in keywords):
            return effort
    return DEFAULT_EFFORT


def strategies_for(
    risk: CategoryRisk,
    registry: dict[str, RiskCategoryDefinition] | None = None,
) -> list[MitigationStrategy]:
    definition = (registry or CATEGORY_REGISTRY).get(risk.category)
    if definition is None or risk.level not in ACTIONABLE_LEVELS:
        return []

    priority = Priority.HIGH if risk.level == RiskLevel.HIGH else Priority.MEDIUM
    return [
        MitigationStrategy(
            category=risk.category,
            strategy=text,
            priority=priority,
            effort=estimate_effort(text),
        )
        for text in definition.mitigations
    ]


def generate_mitigation_strategies(
    risks: dict[str, CategoryRisk],
    registry: dict[str, RiskCategoryDefinition] | None = None,
) -> list[MitigationStrategy]:
    """All strategies, in category order then strategy order."""
    strategies: list[MitigationStrategy] = []
    for risk in risks.values():
        strategies.extend(strategies_for(risk, registry))
    return strategies
