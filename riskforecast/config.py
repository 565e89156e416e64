"""
RiskForecast Configuration — pydantic-settings based.

All settings are read from environment variables or .env file.
Every value has a default, so the engine starts without any environment;
per-run overrides come from the CLI or the /analyze request body.
"""

from pydantic_settings import BaseSettings
from pydantic import Field


ALL_CATEGORIES = [
    "technical",
    "schedule",
    "resource",
    "quality",
    "security",
    "dependency",
    "team",
]


class Settings(BaseSettings):
    """Application-wide settings sourced from environment variables."""

    # ── Analysis ──
    project_path: str = Field(default=".", description="Root of the project to analyse")
    analysis_period_days: int = Field(
        default=30, description="Look-back window for VCS signals, in days"
    )
    enabled_categories: list[str] = Field(
        default_factory=lambda: list(ALL_CATEGORIES),
        description="Risk categories to analyse",
    )
    apply_neutral_defaults: bool = Field(
        default=False,
        description="Score unimplemented/unavailable factors at their documented neutral default",
    )

    # ── Risk Thresholds ──
    threshold_high: float = Field(default=80, description="Score at or above which a risk is high")
    threshold_medium: float = Field(default=60, description="Score at or above which a risk is medium")
    threshold_low: float = Field(default=40, description="Score at or above which a risk is low")

    # ── Collection ──
    deadline_seconds: float | None = Field(
        default=60.0,
        description="Deadline for all collectors; unfinished categories degrade to unknown",
    )
    git_binary: str = Field(default="git", description="git executable used for VCS history")
    npm_binary: str = Field(default="npm", description="npm executable used for dependency audit")
    subprocess_timeout: int = Field(
        default=30, description="Timeout per collaborator subprocess in seconds"
    )

    # ── Output ──
    output_dir: str = Field(
        default="risk-prediction", description="Directory receiving the JSON risk reports"
    )

    # ── Server ──
    port: int = Field(default=5001, description="Server port")
    host: str = Field(default="0.0.0.0", description="Server bind host")

    # ── Audit ──
    audit_log_path: str = Field(
        default="audit.jsonl", description="Path to JSON-lines audit log file"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton instance, imported by other modules
settings = Settings()
