"""
Dependency Risk Collector — dependency footprint and version conflicts.
"""

from __future__ import annotations

import logging

from riskforecast.collectors.base import CollectionContext, FactorSetBuilder
from riskforecast.errors import CollectorFailure
from riskforecast.models.factor_models import FactorSet, FactorSpec

logger = logging.getLogger("riskforecast.collectors.dependency")

CATEGORY = "dependency"
TITLE = "Dependency Risk"
WEIGHT = 0.10

FACTORS = (
    FactorSpec(name="external_deps", neutral_default=25, description="Declared package count"),
    FactorSpec(name="version_conflicts", neutral_default=0, description="Packages declared with differing specs"),
    FactorSpec(name="maintenance", neutral_default=50, description="Upstream maintenance activity"),
    FactorSpec(name="support", neutral_default=50, description="Upstream support status"),
)

MITIGATIONS = (
    "Update dependencies regularly",
    "Implement dependency monitoring",
    "Create fallback plans for critical dependencies",
)


def collect(context: CollectionContext) -> FactorSet:
    builder = FactorSetBuilder(CATEGORY, FACTORS, context.apply_neutral_defaults, logger)

    try:
        audit = context.audit_dependencies()
    except CollectorFailure as e:
        builder.unavailable("external_deps", str(e))
        builder.unavailable("version_conflicts", str(e))
    else:
        builder.measured("external_deps", audit.total, f"{audit.total} declared packages")
        if audit.conflicts is None:
            builder.unavailable("version_conflicts", "conflict count unknown")
        else:
            builder.measured("version_conflicts", audit.conflicts, f"{audit.conflicts} conflicting declarations")

    return builder.build()
