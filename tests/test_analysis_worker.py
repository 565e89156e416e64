"""
Tests for the Analysis Worker — end-to-end pipeline with fake collaborators.
"""

import asyncio
import json
import threading

import pytest

from riskforecast.audit.logger import AuditLogger
from riskforecast.core.registry import CATEGORY_REGISTRY
from riskforecast.errors import ConfigurationError, PersistenceError
from riskforecast.models.factor_models import FactorSet
from riskforecast.models.risk_models import RiskLevel
from riskforecast.workers.analysis_worker import RiskAnalysisWorker, build_parameters

FIXED_TS = "2026-01-15T09:30:00Z"


def _run(worker, parameters, **kwargs):
    return asyncio.run(worker.run_analysis(parameters, **kwargs))


def _params(tmp_path, **overrides):
    overrides.setdefault("output_dir", str(tmp_path / "out"))
    overrides.setdefault("project_path", str(tmp_path))
    return build_parameters(**overrides)


def test_typical_run(tmp_path, typical_context):
    worker = RiskAnalysisWorker(context_factory=lambda p: typical_context)
    result = _run(worker, _params(tmp_path), timestamp=FIXED_TS)
    report = result.report

    assert list(report.risks) == list(CATEGORY_REGISTRY)
    assert report.risks["technical"].score == 35
    assert report.risks["technical"].indicators == ["High code complexity detected"]
    assert report.risks["schedule"].score == 20
    assert report.risks["team"].score == 66.67
    assert report.risks["team"].level == RiskLevel.MEDIUM
    assert report.overall.score == pytest.approx(21.03, abs=0.01)
    assert report.summary.medium_risks == 1
    assert [r.category for r in report.recommendations] == ["team"] * 3
    assert report.predictions["short"]["team"].score == 73.34
    assert result.persisted_path.endswith("risk-analysis-2026-01-15.json")


def test_all_collectors_empty(tmp_path, empty_context):
    worker = RiskAnalysisWorker(context_factory=lambda p: empty_context)
    report = _run(worker, _params(tmp_path), persist=False).report

    assert report.overall.score == 0
    assert all(r.level == RiskLevel.UNKNOWN for r in report.risks.values())
    assert report.recommendations == []
    assert report.summary.unknown_risks == 7


def test_deterministic_json(tmp_path, typical_context):
    worker = RiskAnalysisWorker(context_factory=lambda p: typical_context)
    params = _params(tmp_path)
    first = _run(worker, params, persist=False, timestamp=FIXED_TS).report
    second = _run(worker, params, persist=False, timestamp=FIXED_TS).report
    assert first.to_json() == second.to_json()

    third = _run(worker, params, persist=False, timestamp="2026-02-01T00:00:00Z").report
    a = json.loads(first.to_json())
    b = json.loads(third.to_json())
    a.pop("timestamp")
    b.pop("timestamp")
    assert a == b


def test_enabled_categories_subset(tmp_path, typical_context):
    worker = RiskAnalysisWorker(context_factory=lambda p: typical_context)
    report = _run(worker, _params(tmp_path, enabled_categories=["team", "technical"]), persist=False).report
    assert list(report.risks) == ["technical", "team"]
    assert report.overall.total_weight == 0.3


def _registry_with(category, collector):
    registry = dict(CATEGORY_REGISTRY)
    registry[category] = registry[category].model_copy(update={"collector": collector})
    return registry


def test_failing_collector_degrades_only_its_category(tmp_path, typical_context):
    def boom(context):
        raise RuntimeError("scanner crashed")

    worker = RiskAnalysisWorker(
        context_factory=lambda p: typical_context,
        registry=_registry_with("technical", boom),
    )
    report = _run(worker, _params(tmp_path), persist=False).report
    assert report.risks["technical"].level == RiskLevel.UNKNOWN
    assert report.risks["schedule"].score == 20


def test_deadline_abandons_slow_collector(tmp_path, typical_context):
    release = threading.Event()

    def slow(context):
        release.wait(5)
        return FactorSet(category="quality")

    worker = RiskAnalysisWorker(
        context_factory=lambda p: typical_context,
        registry=_registry_with("quality", slow),
    )
    try:
        report = _run(worker, _params(tmp_path, deadline_seconds=0.2), persist=False).report
    finally:
        release.set()

    assert report.risks["quality"].level == RiskLevel.UNKNOWN
    assert report.risks["technical"].score == 35


def test_cancel_event_before_start(tmp_path, typical_context):
    worker = RiskAnalysisWorker(context_factory=lambda p: typical_context)

    async def cancelled_run():
        event = asyncio.Event()
        event.set()
        return await worker.run_analysis(_params(tmp_path), cancel_event=event, persist=False)

    report = asyncio.run(cancelled_run()).report
    assert all(r.level == RiskLevel.UNKNOWN for r in report.risks.values())
    assert report.overall.score == 0


def test_cancel_while_collector_running(tmp_path, typical_context):
    release = threading.Event()

    def slow(context):
        release.wait(5)
        return FactorSet(category="quality")

    worker = RiskAnalysisWorker(
        context_factory=lambda p: typical_context,
        registry=_registry_with("quality", slow),
    )

    async def cancelled_mid_run():
        event = asyncio.Event()
        asyncio.get_running_loop().call_later(0.2, event.set)
        return await worker.run_analysis(_params(tmp_path), cancel_event=event, persist=False)

    try:
        report = asyncio.run(cancelled_mid_run()).report
    finally:
        release.set()

    assert report.risks["quality"].level == RiskLevel.UNKNOWN
    assert report.risks["technical"].score == 35
    assert report.risks["team"].level == RiskLevel.MEDIUM


def test_injected_registry_drives_weights_and_strategies(tmp_path, typical_context):
    registry = dict(CATEGORY_REGISTRY)
    registry["team"] = registry["team"].model_copy(
        update={"weight": 0.25, "mitigations": ("Rotate on-call ownership",)}
    )
    worker = RiskAnalysisWorker(context_factory=lambda p: typical_context, registry=registry)
    report = _run(
        worker, _params(tmp_path, enabled_categories=["technical", "team"]), persist=False
    ).report

    assert report.overall.total_weight == 0.5
    assert report.overall.score == pytest.approx(50.84, abs=0.01)
    assert [r.strategy for r in report.recommendations] == ["Rotate on-call ownership"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"enabled_categories": ["technical", "external"]},
        {"enabled_categories": []},
        {"analysis_period_days": 0},
        {"analysis_period_days": -5},
        {"thresholds": {"high": 50, "medium": 60}},
        {"thresholds": {"low": 60, "medium": 60}},
        {"thresholds": {"high": 120}},
    ],
)
def test_configuration_errors_fail_before_collection(tmp_path, overrides):
    factory_calls = []
    worker = RiskAnalysisWorker(context_factory=lambda p: factory_calls.append(p))

    with pytest.raises(ConfigurationError) as exc_info:
        asyncio.run(worker.analyze(persist=False, project_path=str(tmp_path), **overrides))
    assert exc_info.value.errors
    assert factory_calls == []


def test_persistence_error_keeps_report(tmp_path, typical_context):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file in the way")
    audit = AuditLogger(str(tmp_path / "audit.jsonl"))
    worker = RiskAnalysisWorker(audit_logger=audit, context_factory=lambda p: typical_context)

    with pytest.raises(PersistenceError) as exc_info:
        _run(worker, _params(tmp_path, output_dir=str(blocker)))
    report = exc_info.value.report
    assert report is not None
    assert report.risks["technical"].score == 35
    entries = audit.read_recent()
    assert exc_info.value.run_id == entries[0]["run_id"]
    assert entries[0]["persisted_path"] is None


def test_audit_entry_written(tmp_path, empty_context):
    audit = AuditLogger(str(tmp_path / "audit.jsonl"))
    worker = RiskAnalysisWorker(audit_logger=audit, context_factory=lambda p: empty_context)
    result = _run(worker, _params(tmp_path))

    entries = audit.read_recent()
    assert len(entries) == 1
    assert entries[0]["run_id"] == result.run_id
    assert entries[0]["overall_score"] == 0
    assert len(entries[0]["unknown_categories"]) == 7
    assert entries[0]["persisted_path"] == result.persisted_path


def test_persisted_json_matches_report(tmp_path, typical_context):
    worker = RiskAnalysisWorker(context_factory=lambda p: typical_context)
    result = _run(worker, _params(tmp_path), timestamp=FIXED_TS)
    with open(result.persisted_path, encoding="utf-8") as f:
        data = json.load(f)
    assert data["timestamp"] == FIXED_TS
    assert data["parameters"]["analysis_period_days"] == 30
    assert data["risks"]["team"]["level"] == "medium"
    assert set(data["predictions"]) == {"short", "medium", "long"}
