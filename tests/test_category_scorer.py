"""
Tests for Category Scorer — score, level, probability, impact, indicators.
"""

import pytest

from riskforecast.core.category_scorer import (
    categorize_level,
    identify_indicators,
    score_category,
)
from riskforecast.core.registry import CATEGORY_REGISTRY
from riskforecast.models.factor_models import FactorReading, FactorSet, FactorStatus
from riskforecast.models.report_models import Thresholds
from riskforecast.models.risk_models import LEVEL_RANK, RiskLevel


def _factor_set(category, **values):
    return FactorSet(
        category=category,
        readings=[FactorReading(name=k, value=v) for k, v in values.items()],
    )


def test_partial_technical_factors():
    risk = score_category(
        CATEGORY_REGISTRY["technical"],
        _factor_set("technical", complexity=90, dependencies=10),
    )
    assert risk.score == 50
    assert risk.probability == 50
    assert risk.impact == 50
    assert risk.level == RiskLevel.LOW
    assert risk.indicators == ["High code complexity detected"]
    assert risk.factors == {"complexity": 90, "dependencies": 10}


def test_absent_factor_excluded_not_zero():
    factor_set = FactorSet(
        category="technical",
        readings=[
            FactorReading(name="complexity", value=70),
            FactorReading(name="dependencies", value=None, status=FactorStatus.UNAVAILABLE),
            FactorReading(name="performance", value=None, status=FactorStatus.UNIMPLEMENTED),
        ],
    )
    risk = score_category(CATEGORY_REGISTRY["technical"], factor_set)
    assert risk.score == 70
    assert risk.factor_status["dependencies"] == "unavailable"
    assert risk.factor_status["performance"] == "unimplemented"


def test_empty_factor_set_is_unknown():
    risk = score_category(CATEGORY_REGISTRY["quality"], FactorSet(category="quality"))
    assert risk.level == RiskLevel.UNKNOWN
    assert risk.score == 0
    assert risk.probability == 0
    assert risk.impact == 0
    assert risk.indicators == []


def test_impact_uses_only_critical_factors():
    risk = score_category(
        CATEGORY_REGISTRY["resource"],
        _factor_set("resource", team_size=4, availability=80),
    )
    assert risk.score == 42
    assert risk.impact == 4
    assert risk.level == RiskLevel.LOW


def test_impact_zero_without_critical_factors():
    risk = score_category(CATEGORY_REGISTRY["schedule"], _factor_set("schedule", velocity=30))
    assert risk.impact == 0
    assert risk.probability == 30


@pytest.mark.parametrize(
    "score,expected",
    [
        (100, RiskLevel.HIGH),
        (80, RiskLevel.HIGH),
        (79.99, RiskLevel.MEDIUM),
        (60, RiskLevel.MEDIUM),
        (59.99, RiskLevel.LOW),
        (50, RiskLevel.LOW),
        (40, RiskLevel.LOW),
        (39.99, RiskLevel.VERY_LOW),
        (0, RiskLevel.VERY_LOW),
    ],
)
def test_default_level_thresholds(score, expected):
    assert categorize_level(score, Thresholds()) == expected


def test_custom_thresholds():
    thresholds = Thresholds(high=50, medium=30, low=10)
    risk = score_category(
        CATEGORY_REGISTRY["technical"],
        _factor_set("technical", complexity=90, dependencies=10),
        thresholds,
    )
    assert risk.level == RiskLevel.HIGH


def test_level_monotonic_in_each_factor():
    definition = CATEGORY_REGISTRY["technical"]
    previous = LEVEL_RANK[RiskLevel.UNKNOWN]
    for complexity in range(0, 101, 5):
        risk = score_category(
            definition, _factor_set("technical", complexity=complexity, dependencies=40)
        )
        assert LEVEL_RANK[risk.level] >= previous
        previous = LEVEL_RANK[risk.level]


def test_scores_bounded():
    risk = score_category(
        CATEGORY_REGISTRY["security"],
        _factor_set("security", vulnerabilities=100, compliance=100, access_control=100, data_protection=100),
    )
    assert 0 <= risk.score <= 100
    assert risk.score == 100
    assert risk.level == RiskLevel.HIGH


def test_multiple_indicators_in_rule_order():
    indicators = identify_indicators(
        {"velocity": 0, "complexity": 20, "test_coverage": 10, "dependencies": 75}
    )
    assert indicators == [
        "High code complexity detected",
        "Many outdated dependencies",
        "Low test coverage",
        "Low development velocity",
    ]


def test_indicator_boundaries_are_strict():
    assert identify_indicators({"complexity": 15, "dependencies": 50, "vulnerabilities": 5}) == []
    assert identify_indicators({"test_coverage": 50, "velocity": 1}) == []


def test_undeclared_factor_ignored_for_score():
    risk = score_category(
        CATEGORY_REGISTRY["schedule"],
        _factor_set("schedule", velocity=20, complexity=80),
    )
    assert risk.score == 20
    assert "complexity" not in risk.factors
