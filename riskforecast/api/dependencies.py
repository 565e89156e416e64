"""
FastAPI Dependencies — Shared singletons injected via Depends().
"""

from __future__ import annotations

from functools import lru_cache

from riskforecast.audit.logger import AuditLogger
from riskforecast.workers.analysis_worker import RiskAnalysisWorker


@lru_cache
def get_audit_logger() -> AuditLogger:
    """Shared audit logger singleton."""
    return AuditLogger()


@lru_cache
def get_analysis_worker() -> RiskAnalysisWorker:
    """Shared analysis worker singleton. Holds no per-run state."""
    return RiskAnalysisWorker(audit_logger=get_audit_logger())
