"""
Schedule Risk Collector — development velocity from commit history.
"""

from __future__ import annotations

import logging

from riskforecast.collectors.base import CollectionContext, FactorSetBuilder
from riskforecast.errors import CollectorFailure
from riskforecast.models.factor_models import FactorSet, FactorSpec

logger = logging.getLogger("riskforecast.collectors.schedule")

CATEGORY = "schedule"
TITLE = "Schedule Risk"
WEIGHT = 0.20

# Commits per day × VELOCITY_SCALE maps onto the 0-100 factor scale
VELOCITY_SCALE = 10

FACTORS = (
    FactorSpec(name="deadlines", neutral_default=50, description="Deadline pressure"),
    FactorSpec(name="milestones", neutral_default=50, description="Milestone completion"),
    FactorSpec(name="velocity", neutral_default=10, description="Commits per day × 10, capped at 100"),
    FactorSpec(name="blockers", neutral_default=50, description="Open blockers"),
)

MITIGATIONS = (
    "Review and adjust project timeline",
    "Identify and remove blockers",
    "Increase team velocity through training",
)


def velocity(commits: int, window_days: int) -> float:
    """Scaled daily commit rate, capped at 100."""
    return min(commits / window_days * VELOCITY_SCALE, 100.0)


def collect(context: CollectionContext) -> FactorSet:
    builder = FactorSetBuilder(CATEGORY, FACTORS, context.apply_neutral_defaults, logger)
    days = context.analysis_period_days

    try:
        commits = context.vcs.commit_count(days)
    except CollectorFailure as e:
        builder.unavailable("velocity", str(e))
    else:
        builder.measured("velocity", velocity(commits, days), f"{commits} commits in {days} days")

    return builder.build()
