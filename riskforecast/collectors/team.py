"""
Team Risk Collector — knowledge concentration across commit authors.

knowledge = share of window commits made by the single most active author.
A value near 100 means one person holds most of the recent context.
"""

from __future__ import annotations

import logging

from riskforecast.collectors.base import CollectionContext, FactorSetBuilder
from riskforecast.errors import CollectorFailure
from riskforecast.models.factor_models import FactorSet, FactorSpec

logger = logging.getLogger("riskforecast.collectors.team")

CATEGORY = "team"
TITLE = "Team Risk"
WEIGHT = 0.05

FACTORS = (
    FactorSpec(name="turnover", neutral_default=50, description="Contributor turnover"),
    FactorSpec(name="knowledge", neutral_default=50, description="Top author's share of commits (%)"),
    FactorSpec(name="collaboration", neutral_default=50, description="Collaboration patterns"),
    FactorSpec(name="communication", neutral_default=50, description="Communication quality"),
)

MITIGATIONS = (
    "Improve team communication",
    "Document knowledge and processes",
    "Implement knowledge sharing sessions",
)


def knowledge_concentration(author_commits: dict[str, int]) -> float:
    total = sum(author_commits.values())
    if total == 0:
        return 0.0
    return max(author_commits.values()) / total * 100


def collect(context: CollectionContext) -> FactorSet:
    builder = FactorSetBuilder(CATEGORY, FACTORS, context.apply_neutral_defaults, logger)

    try:
        counts = context.vcs.author_commit_counts(context.analysis_period_days)
    except CollectorFailure as e:
        builder.unavailable("knowledge", str(e))
    else:
        builder.measured(
            "knowledge",
            knowledge_concentration(counts),
            f"{len(counts)} authors, {sum(counts.values())} commits",
        )

    return builder.build()
