"""
Factor Data Models — Normalized signals produced by the collectors.

A reading always records *why* its value is what it is, so a factor that was
never implemented can be told apart from one that was measured at 50.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class FactorStatus(str, Enum):
    MEASURED = "measured"
    DEFAULTED = "defaulted"
    UNAVAILABLE = "unavailable"
    UNIMPLEMENTED = "unimplemented"


class FactorSpec(BaseModel):
    """Declaration of a factor a category scores."""

    model_config = {"frozen": True}

    name: str
    neutral_default: float = Field(
        ..., ge=0, le=100, description="Value used when neutral defaults are enabled"
    )
    description: str = ""


class FactorReading(BaseModel):
    """A single factor value on the 0-100 scale, or None when absent."""

    model_config = {"frozen": True}

    name: str
    value: float | None = Field(default=None, ge=0, le=100)
    status: FactorStatus = FactorStatus.MEASURED
    detail: str = Field(default="", description="Why the factor has this value")

    @property
    def present(self) -> bool:
        return self.value is not None


class FactorSet(BaseModel):
    """All readings a collector produced for one category, in declaration order."""

    model_config = {"frozen": True}

    category: str
    readings: list[FactorReading] = Field(default_factory=list)

    def values(self) -> dict[str, float]:
        """Mapping of factor name -> value for every present factor."""
        return {r.name: r.value for r in self.readings if r.value is not None}

    def statuses(self) -> dict[str, str]:
        return {r.name: r.status.value for r in self.readings}

    def get(self, name: str) -> FactorReading | None:
        for reading in self.readings:
            if reading.name == name:
                return reading
        return None

    @property
    def is_empty(self) -> bool:
        return not self.values()


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    """Clamp a raw signal into the factor scale."""
    return max(low, min(high, float(value)))
