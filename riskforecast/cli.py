"""
RiskForecast CLI.

    python -m riskforecast.cli analyze --project . --period 30
    python -m riskforecast.cli report --categories technical,quality > report.json

`analyze` persists the report and prints a summary; `report` prints the
report JSON to stdout for an external renderer.

Exit codes: 0 success, 2 configuration error, 3 persistence error.

--deadline bounds the report, not the process: collector threads abandoned at
the deadline are joined at interpreter exit, so a hung git or npm call keeps
the process alive until its subprocess timeout (SUBPROCESS_TIMEOUT) expires.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from riskforecast.audit.logger import AuditLogger
from riskforecast.config import ALL_CATEGORIES
from riskforecast.errors import ConfigurationError, PersistenceError
from riskforecast.models.report_models import RiskReport
from riskforecast.workers.analysis_worker import AnalysisResult, RiskAnalysisWorker

logger = logging.getLogger("riskforecast.cli")

EXIT_OK = 0
EXIT_CONFIG = 2
EXIT_PERSISTENCE = 3


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="riskforecast",
        description="Multi-factor project risk scoring and prediction",
    )
    parser.add_argument("command", choices=["analyze", "report"], nargs="?", default="analyze")
    parser.add_argument("--project", dest="project_path", help="Project root to analyse")
    parser.add_argument("--period", dest="analysis_period_days", type=int, help="Analysis window in days")
    parser.add_argument(
        "--categories",
        help=f"Comma-separated categories (default: {','.join(ALL_CATEGORIES)})",
    )
    parser.add_argument("--high", type=float, help="High risk threshold")
    parser.add_argument("--medium", type=float, help="Medium risk threshold")
    parser.add_argument("--low", type=float, help="Low risk threshold")
    parser.add_argument("--output-dir", dest="output_dir", help="Directory for JSON reports")
    parser.add_argument(
        "--deadline",
        dest="deadline_seconds",
        type=float,
        help=(
            "Collector deadline in seconds. Late categories are reported as unknown; "
            "a hung git/npm call still holds process exit for up to its subprocess timeout"
        ),
    )
    parser.add_argument(
        "--neutral-defaults",
        dest="apply_neutral_defaults",
        action="store_true",
        default=None,
        help="Score unimplemented/unavailable factors at their neutral default",
    )
    parser.add_argument("--no-persist", dest="persist", action="store_false", help="Do not write the JSON report")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def format_summary(report: RiskReport, persisted_path: str | None) -> str:
    lines = [
        f"Overall risk: {report.overall.score:.1f}/100 ({report.overall.level.value})",
        "",
    ]
    for risk in report.risks.values():
        lines.append(f"  {risk.category:<11} {risk.score:6.1f}  {risk.level.value}")
        for indicator in risk.indicators:
            lines.append(f"      ! {indicator}")
    if report.recommendations:
        lines.append("")
        lines.append("Recommendations:")
        for rec in report.recommendations:
            lines.append(
                f"  [{rec.priority.value}/{rec.effort.value}] {rec.category}: {rec.strategy}"
            )
    if persisted_path:
        lines.append("")
        lines.append(f"Report saved to: {persisted_path}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    args = create_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    categories = (
        [c.strip() for c in args.categories.split(",") if c.strip()]
        if args.categories
        else None
    )
    worker = RiskAnalysisWorker(audit_logger=AuditLogger())

    try:
        result: AnalysisResult = asyncio.run(
            worker.analyze(
                persist=args.persist,
                project_path=args.project_path,
                analysis_period_days=args.analysis_period_days,
                enabled_categories=categories,
                thresholds={"high": args.high, "medium": args.medium, "low": args.low},
                output_dir=args.output_dir,
                deadline_seconds=args.deadline_seconds,
                apply_neutral_defaults=args.apply_neutral_defaults,
            )
        )
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        for error in e.errors:
            print(f"  - {error}", file=sys.stderr)
        return EXIT_CONFIG
    except PersistenceError as e:
        print(str(e), file=sys.stderr)
        if args.command == "report" and e.report is not None:
            print(e.report.to_json())
        return EXIT_PERSISTENCE

    if args.command == "report":
        print(result.report.to_json())
    else:
        print(format_summary(result.report, result.persisted_path))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
