"""
Quality Risk Collector — bug density from fix commits.
"""

from __future__ import annotations

import logging

from riskforecast.collectors.base import CollectionContext, FactorSetBuilder
from riskforecast.errors import CollectorFailure
from riskforecast.models.factor_models import FactorSet, FactorSpec

logger = logging.getLogger("riskforecast.collectors.quality")

CATEGORY = "quality"
TITLE = "Quality Risk"
WEIGHT = 0.15

FACTORS = (
    FactorSpec(name="test_coverage", neutral_default=50, description="Test coverage (%)"),
    FactorSpec(name="bug_density", neutral_default=25, description="Fix commits / total commits (%)"),
    FactorSpec(name="code_review", neutral_default=50, description="Code review practices"),
    FactorSpec(name="standards", neutral_default=50, description="Coding standards adherence"),
)

MITIGATIONS = (
    "Increase test coverage",
    "Implement code review process",
    "Establish coding standards",
)


def bug_density(fix_commits: int, total_commits: int) -> float:
    if total_commits == 0:
        return 0.0
    return fix_commits / total_commits * 100


def collect(context: CollectionContext) -> FactorSet:
    builder = FactorSetBuilder(CATEGORY, FACTORS, context.apply_neutral_defaults, logger)
    days = context.analysis_period_days

    try:
        fixes = context.vcs.fix_commit_count(days)
        total = context.vcs.commit_count(days)
    except CollectorFailure as e:
        builder.unavailable("bug_density", str(e))
    else:
        builder.measured("bug_density", bug_density(fixes, total), f"{fixes} of {total} commits are fixes")

    return builder.build()
