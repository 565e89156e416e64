"""
Collector plumbing — shared context and the FactorSet builder.

Collectors are plain modules exposing CATEGORY, TITLE, WEIGHT, FACTORS,
MITIGATIONS and collect(context) -> FactorSet. They never raise on a missing
collaborator: the builder records the factor as unavailable instead.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable

from riskforecast.errors import CollectorFailure
from riskforecast.models.factor_models import (
    FactorReading,
    FactorSet,
    FactorSpec,
    FactorStatus,
    clamp,
)
from riskforecast.sources.dependencies import DependencyAudit, ManifestDependencyAuditor
from riskforecast.sources.scanner import SourceScanner
from riskforecast.sources.vcs import GitHistoryReader


@dataclass(frozen=True)
class CollectionContext:
    """Read-only inputs shared by every collector in a run."""

    project_path: str
    analysis_period_days: int
    scanner: SourceScanner
    vcs: GitHistoryReader
    auditor: ManifestDependencyAuditor
    apply_neutral_defaults: bool = False
    _audit_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)
    _audit_memo: list = field(default_factory=list, init=False, repr=False, compare=False)

    @classmethod
    def for_project(
        cls,
        project_path: str,
        analysis_period_days: int,
        apply_neutral_defaults: bool = False,
    ) -> "CollectionContext":
        """Context wired to the default filesystem / git / manifest collaborators."""
        return cls(
            project_path=project_path,
            analysis_period_days=analysis_period_days,
            scanner=SourceScanner(),
            vcs=GitHistoryReader(project_path),
            auditor=ManifestDependencyAuditor(project_path),
            apply_neutral_defaults=apply_neutral_defaults,
        )

    def audit_dependencies(self) -> DependencyAudit:
        """
        Dependency audit shared by every collector in the run.

        The auditor runs at most once per context; its result or its
        CollectorFailure is replayed to later callers.
        """
        with self._audit_lock:
            if not self._audit_memo:
                try:
                    self._audit_memo.append(self.auditor.audit())
                except CollectorFailure as e:
                    self._audit_memo.append(e)
            outcome = self._audit_memo[0]
        if isinstance(outcome, CollectorFailure):
            raise outcome
        return outcome


# Type for a collector function
CollectorFn = Callable[[CollectionContext], FactorSet]


class FactorSetBuilder:
    """
    Accumulates readings for one category.

    Declared factors that were never set come out as UNIMPLEMENTED, so a
    collector only has to handle the factors it actually measures.
    """

    def __init__(
        self,
        category: str,
        factors: tuple[FactorSpec, ...],
        apply_neutral_defaults: bool = False,
        logger: logging.Logger | None = None,
    ) -> None:
        self.category = category
        self.factors = {f.name: f for f in factors}
        self.apply_neutral_defaults = apply_neutral_defaults
        self.logger = logger or logging.getLogger(f"riskforecast.collectors.{category}")
        self._readings: dict[str, FactorReading] = {}

    def measured(self, name: str, raw: float, detail: str = "") -> None:
        self._readings[name] = FactorReading(
            name=name,
            value=round(clamp(raw), 4),
            status=FactorStatus.MEASURED,
            detail=detail,
        )

    def unavailable(self, name: str, detail: str) -> None:
        self.logger.warning(f"{self.category}.{name} unavailable: {detail}")
        self._readings[name] = self._fallback(name, FactorStatus.UNAVAILABLE, detail)

    def _fallback(self, name: str, status: FactorStatus, detail: str) -> FactorReading:
        if self.apply_neutral_defaults:
            return FactorReading(
                name=name,
                value=self.factors[name].neutral_default,
                status=FactorStatus.DEFAULTED,
                detail=f"{status.value}: {detail}",
            )
        return FactorReading(name=name, value=None, status=status, detail=detail)

    def build(self) -> FactorSet:
        readings = [
            self._readings.get(name)
            or self._fallback(name, FactorStatus.UNIMPLEMENTED, "no collector for this factor")
            for name in self.factors
        ]
        return FactorSet(category=self.category, readings=readings)
