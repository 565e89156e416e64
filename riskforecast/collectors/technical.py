"""
Technical Risk Collector — code complexity and dependency staleness.
"""

from __future__ import annotations

import logging

from riskforecast.collectors.base import CollectionContext, FactorSetBuilder
from riskforecast.errors import CollectorFailure
from riskforecast.models.factor_models import FactorSet, FactorSpec

logger = logging.getLogger("riskforecast.collectors.technical")

CATEGORY = "technical"
TITLE = "Technical Risk"
WEIGHT = 0.25

FACTORS = (
    FactorSpec(name="complexity", neutral_default=15, description="Mean keyword complexity per source file"),
    FactorSpec(name="dependencies", neutral_default=25, description="Share of outdated packages (%)"),
    FactorSpec(name="performance", neutral_default=50, description="Performance indicators"),
    FactorSpec(name="maintainability", neutral_default=50, description="Maintainability indicators"),
)

MITIGATIONS = (
    "Refactor complex code modules",
    "Update outdated dependencies",
    "Implement performance monitoring",
)


def collect(context: CollectionContext) -> FactorSet:
    builder = FactorSetBuilder(CATEGORY, FACTORS, context.apply_neutral_defaults, logger)

    # Complexity
    try:
        mean, files_read, files_failed = context.scanner.mean_complexity(context.project_path)
    except CollectorFailure as e:
        builder.unavailable("complexity", str(e))
    else:
        if mean is None:
            builder.unavailable("complexity", f"none of {files_failed} source files could be read")
        else:
            builder.measured(
                "complexity",
                mean,
                f"mean over {files_read} files ({files_failed} unreadable)",
            )

    # Dependency staleness
    try:
        audit = context.audit_dependencies()
    except CollectorFailure as e:
        builder.unavailable("dependencies", str(e))
    else:
        if audit.outdated is None:
            builder.unavailable("dependencies", "outdated package count unknown")
        else:
            builder.measured(
                "dependencies",
                audit.outdated / max(audit.total, 1) * 100,
                f"{audit.outdated} of {audit.total} packages outdated",
            )

    return builder.build()
