"""
Analysis Worker — Async orchestrator running the full risk pipeline.

Pipeline:
1. Resolve and validate run parameters (fails fast with ConfigurationError)
2. Run enabled collectors concurrently, bounded by deadline / cancellation
3. Score each category (failed or abandoned collectors degrade to unknown)
4. Aggregate the overall weighted risk
5. Predict short/medium/long-term trends
6. Recommend mitigation strategies
7. Assemble the immutable RiskReport
8. Persist the report JSON and write the audit entry

Each stage takes a RunContext and returns a new one; nothing is shared
between runs.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import ValidationError

from riskforecast.audit.logger import AuditLogger
from riskforecast.collectors.base import CollectionContext
from riskforecast.config import settings
from riskforecast.core.aggregator import compute_overall_risk
from riskforecast.core.category_scorer import score_category, unknown_risk
from riskforecast.core.mitigation import generate_mitigation_strategies
from riskforecast.core.predictor import predict_all
from riskforecast.core.registry import CATEGORY_REGISTRY, RiskCategoryDefinition
from riskforecast.core.report_assembler import assemble_report
from riskforecast.errors import ConfigurationError, PersistenceError
from riskforecast.models.analysis_models import AuditEntry, RunContext
from riskforecast.models.factor_models import FactorSet
from riskforecast.models.report_models import AnalysisParameters, RiskReport
from riskforecast.models.risk_models import RiskLevel
from riskforecast.persistence.report_writer import ReportWriter

logger = logging.getLogger("riskforecast.worker")

ContextFactory = Callable[[AnalysisParameters], CollectionContext]


def build_parameters(**overrides: Any) -> AnalysisParameters:
    """
    Merge per-run overrides onto settings and validate.

    Overrides whose value is None are ignored. `thresholds` may override any
    subset of high / medium / low.

    Raises:
        ConfigurationError: unknown category, bad threshold ordering,
            non-positive period.
    """
    thresholds = {
        "high": settings.threshold_high,
        "medium": settings.threshold_medium,
        "low": settings.threshold_low,
    }
    thresholds.update({k: v for k, v in (overrides.pop("thresholds", None) or {}).items() if v is not None})

    values: dict[str, Any] = {
        "project_path": settings.project_path,
        "analysis_period_days": settings.analysis_period_days,
        "enabled_categories": list(settings.enabled_categories),
        "output_dir": settings.output_dir,
        "deadline_seconds": settings.deadline_seconds,
        "apply_neutral_defaults": settings.apply_neutral_defaults,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    values["thresholds"] = thresholds

    try:
        return AnalysisParameters.model_validate(values)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc']) or 'parameters'}: {err['msg']}"
            for err in e.errors()
        ]
        raise ConfigurationError("Invalid analysis configuration", errors) from e


def default_context_factory(parameters: AnalysisParameters) -> CollectionContext:
    return CollectionContext.for_project(
        parameters.project_path,
        parameters.analysis_period_days,
        parameters.apply_neutral_defaults,
    )


@dataclass(frozen=True)
class AnalysisResult:
    run_id: str
    report: RiskReport
    persisted_path: str | None = None


class RiskAnalysisWorker:
    """Async risk analysis orchestrator."""

    def __init__(
        self,
        audit_logger: AuditLogger | None = None,
        context_factory: ContextFactory | None = None,
        registry: dict[str, RiskCategoryDefinition] | None = None,
    ) -> None:
        self.audit_logger = audit_logger
        self.context_factory = context_factory or default_context_factory
        self.registry = registry or CATEGORY_REGISTRY

    async def analyze(
        self,
        cancel_event: asyncio.Event | None = None,
        persist: bool = True,
        **overrides: Any,
    ) -> AnalysisResult:
        """Validate overrides into parameters, then run the pipeline."""
        parameters = build_parameters(**overrides)
        return await self.run_analysis(parameters, cancel_event=cancel_event, persist=persist)

    async def run_analysis(
        self,
        parameters: AnalysisParameters,
        cancel_event: asyncio.Event | None = None,
        persist: bool = True,
        timestamp: str | None = None,
    ) -> AnalysisResult:
        """
        Execute the full analysis pipeline.

        Args:
            parameters: Validated run parameters
            cancel_event: Setting it abandons in-flight collectors
            persist: Write the report JSON to parameters.output_dir
            timestamp: Fixed report timestamp (defaults to now, UTC)

        Returns:
            AnalysisResult with the report and the persisted path, if any.

        Raises:
            PersistenceError: report assembled but could not be written;
                the report is attached to the exception.
        """
        run_id = str(uuid.uuid4())[:8]
        start_time = time.monotonic()

        logger.info(
            f"[{run_id}] Starting analysis of {parameters.project_path} "
            f"({len(parameters.enabled_categories)} categories, "
            f"{parameters.analysis_period_days}-day window)"
        )

        run = RunContext(run_id=run_id, parameters=parameters)
        collection = self.context_factory(parameters)

        # ── Step 2: Collect ──
        run = await self._collect(run, collection, cancel_event)

        # ── Steps 3-6: Score, aggregate, predict, advise ──
        run = self._score(run)
        run = self._aggregate(run)
        run = self._predict(run)
        run = self._advise(run)

        # ── Step 7: Assemble ──
        report = assemble_report(run, timestamp)

        # ── Step 8: Persist + audit ──
        persisted_path: str | None = None
        persistence_error: PersistenceError | None = None
        if persist:
            try:
                persisted_path = str(ReportWriter(parameters.output_dir).write(report))
            except PersistenceError as e:
                logger.error(f"[{run_id}] {e}")
                e.run_id = run_id
                persistence_error = e

        elapsed_ms = (time.monotonic() - start_time) * 1000

        if self.audit_logger is not None:
            self.audit_logger.log(
                AuditEntry(
                    run_id=run_id,
                    project_path=parameters.project_path,
                    categories_analyzed=list(run.risks),
                    unknown_categories=[
                        c for c, r in run.risks.items() if r.level == RiskLevel.UNKNOWN
                    ],
                    overall_score=report.overall.score,
                    recommendations=len(report.recommendations),
                    duration_ms=round(elapsed_ms, 2),
                    persisted_path=persisted_path,
                )
            )

        logger.info(
            f"[{run_id}] Analysis complete in {elapsed_ms:.0f}ms — "
            f"overall={report.overall.score} ({report.overall.level.value}), "
            f"{len(report.recommendations)} recommendations"
        )

        if persistence_error is not None:
            raise persistence_error

        return AnalysisResult(run_id=run_id, report=report, persisted_path=persisted_path)

    async def _collect(
        self,
        run: RunContext,
        collection: CollectionContext,
        cancel_event: asyncio.Event | None,
    ) -> RunContext:
        """
        Run every enabled collector in its own thread.

        Each collector fills only its own category slot. Collectors still
        running at the deadline or on cancellation are abandoned.
        """
        loop = asyncio.get_running_loop()
        categories = run.parameters.enabled_categories
        executor = ThreadPoolExecutor(
            max_workers=len(categories), thread_name_prefix=f"collector-{run.run_id}"
        )

        futures: dict[str, asyncio.Future] = {
            category: loop.run_in_executor(executor, self.registry[category].collector, collection)
            for category in categories
        }

        deadline_seconds = run.parameters.deadline_seconds
        deadline = loop.time() + deadline_seconds if deadline_seconds else None
        cancel_waiter = asyncio.ensure_future(cancel_event.wait()) if cancel_event else None
        pending = set(futures.values())

        try:
            while pending:
                if cancel_event is not None and cancel_event.is_set():
                    logger.warning(f"[{run.run_id}] Cancelled with {len(pending)} collectors in flight")
                    break
                timeout = None if deadline is None else deadline - loop.time()
                if timeout is not None and timeout <= 0:
                    logger.warning(f"[{run.run_id}] Deadline reached with {len(pending)} collectors in flight")
                    break
                watch = (pending | {cancel_waiter}) if cancel_waiter else pending
                done, _ = await asyncio.wait(watch, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
                pending -= done
        finally:
            if cancel_waiter is not None:
                cancel_waiter.cancel()
            for future in pending:
                future.cancel()
            # Abandoned threads run to completion; they are joined at interpreter exit
            executor.shutdown(wait=False, cancel_futures=True)

        factor_sets: dict[str, FactorSet] = {}
        failed: list[str] = []
        for category, future in futures.items():
            if future in pending or future.cancelled():
                failed.append(category)
                logger.warning(f"[{run.run_id}] {category} collector abandoned")
                continue
            error = future.exception()
            if error is not None:
                failed.append(category)
                logger.warning(f"[{run.run_id}] {category} collector failed: {error}")
                continue
            factor_sets[category] = future.result()

        logger.info(
            f"[{run.run_id}] Collected {len(factor_sets)}/{len(categories)} categories"
        )
        return run.model_copy(update={"factor_sets": factor_sets, "failed_categories": failed})

    def _score(self, run: RunContext) -> RunContext:
        thresholds = run.parameters.thresholds
        risks = {}
        for category in run.parameters.enabled_categories:
            definition = self.registry[category]
            factor_set = run.factor_sets.get(category)
            if factor_set is None:
                risks[category] = unknown_risk(definition)
            else:
                risks[category] = score_category(definition, factor_set, thresholds)
            logger.debug(
                f"[{run.run_id}] {category}: score={risks[category].score} "
                f"level={risks[category].level.value}"
            )
        return run.model_copy(update={"risks": risks})

    def _aggregate(self, run: RunContext) -> RunContext:
        overall = compute_overall_risk(run.risks, run.parameters.thresholds, self.registry)
        logger.info(f"[{run.run_id}] Overall risk: {overall.score}/100")
        return run.model_copy(update={"overall": overall})

    def _predict(self, run: RunContext) -> RunContext:
        return run.model_copy(update={"predictions": predict_all(run.risks)})

    def _advise(self, run: RunContext) -> RunContext:
        return run.model_copy(
            update={"recommendations": generate_mitigation_strategies(run.risks, self.registry)}
        )
