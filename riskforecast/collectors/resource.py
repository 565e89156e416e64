"""
Resource Risk Collector — team size from distinct contributors.
"""

from __future__ import annotations

import logging

from riskforecast.collectors.base import CollectionContext, FactorSetBuilder
from riskforecast.errors import CollectorFailure
from riskforecast.models.factor_models import FactorSet, FactorSpec

logger = logging.getLogger("riskforecast.collectors.resource")

CATEGORY = "resource"
TITLE = "Resource Risk"
WEIGHT = 0.15

FACTORS = (
    FactorSpec(name="team_size", neutral_default=5, description="Distinct contributors in the window"),
    FactorSpec(name="availability", neutral_default=50, description="Team availability"),
    FactorSpec(name="skills", neutral_default=50, description="Skill distribution"),
    FactorSpec(name="budget", neutral_default=50, description="Budget headroom"),
)

MITIGATIONS = (
    "Hire additional team members if needed",
    "Provide skill development training",
    "Improve team collaboration tools",
)


def collect(context: CollectionContext) -> FactorSet:
    builder = FactorSetBuilder(CATEGORY, FACTORS, context.apply_neutral_defaults, logger)

    try:
        contributors = context.vcs.contributors(context.analysis_period_days)
    except CollectorFailure as e:
        builder.unavailable("team_size", str(e))
    else:
        builder.measured("team_size", len(contributors), f"{len(contributors)} contributors")

    return builder.build()
