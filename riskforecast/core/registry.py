"""
Category Registry — Static table of every risk category.

Maps category name -> weight, factors, collector and mitigation strategies.
Built once at import from the collector modules; nothing dispatches on
category name anywhere else.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from riskforecast.collectors import (
    dependency,
    quality,
    resource,
    schedule,
    security,
    team,
    technical,
)
from riskforecast.collectors.base import CollectorFn
from riskforecast.models.factor_models import FactorSpec


class RiskCategoryDefinition(BaseModel):
    """Immutable definition of one risk category."""

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    name: str
    title: str
    factors: tuple[FactorSpec, ...]
    weight: float = Field(..., gt=0, le=1)
    collector: CollectorFn
    mitigations: tuple[str, ...] = ()

    @property
    def factor_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.factors)


def _definition(module) -> RiskCategoryDefinition:
    return RiskCategoryDefinition(
        name=module.CATEGORY,
        title=module.TITLE,
        factors=module.FACTORS,
        weight=module.WEIGHT,
        collector=module.collect,
        mitigations=module.MITIGATIONS,
    )


# Registry order is report order
CATEGORY_REGISTRY: dict[str, RiskCategoryDefinition] = {
    d.name: d
    for d in (
        _definition(technical),
        _definition(schedule),
        _definition(resource),
        _definition(quality),
        _definition(security),
        _definition(dependency),
        _definition(team),
    )
}


def get_category(name: str) -> RiskCategoryDefinition:
    if name not in CATEGORY_REGISTRY:
        raise KeyError(f"Unknown risk category: {name}")
    return CATEGORY_REGISTRY[name]
