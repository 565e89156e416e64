"""
Security Risk Collector — vulnerable packages reported by the dependency audit.
"""

from __future__ import annotations

import logging

from riskforecast.collectors.base import CollectionContext, FactorSetBuilder
from riskforecast.errors import CollectorFailure
from riskforecast.models.factor_models import FactorSet, FactorSpec

logger = logging.getLogger("riskforecast.collectors.security")

CATEGORY = "security"
TITLE = "Security Risk"
WEIGHT = 0.10

FACTORS = (
    FactorSpec(name="vulnerabilities", neutral_default=0, description="Vulnerable package count"),
    FactorSpec(name="compliance", neutral_default=50, description="Compliance posture"),
    FactorSpec(name="access_control", neutral_default=50, description="Access control patterns"),
    FactorSpec(name="data_protection", neutral_default=50, description="Data protection"),
)

MITIGATIONS = (
    "Address security vulnerabilities immediately",
    "Implement security best practices",
    "Conduct security audits",
)


def collect(context: CollectionContext) -> FactorSet:
    builder = FactorSetBuilder(CATEGORY, FACTORS, context.apply_neutral_defaults, logger)

    try:
        audit = context.audit_dependencies()
    except CollectorFailure as e:
        builder.unavailable("vulnerabilities", str(e))
    else:
        if audit.vulnerable is None:
            builder.unavailable("vulnerabilities", "vulnerability count unknown")
        else:
            builder.measured("vulnerabilities", audit.vulnerable, f"{audit.vulnerable} vulnerable packages")

    return builder.build()
