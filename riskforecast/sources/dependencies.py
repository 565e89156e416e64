"""
Dependency Auditor — Package counts from project manifests.

Reads package.json and requirements.txt for declared packages. When an npm
manifest is present, `npm outdated --json` and `npm audit --json` supply the
outdated and vulnerable counts. Counts that cannot be determined are None.
"""

from __future__ import annotations

import json
import logging
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from riskforecast.config import settings
from riskforecast.errors import CollectorFailure

logger = logging.getLogger("riskforecast.sources.dependencies")

_REQUIREMENT_NAME = re.compile(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)")


@dataclass(frozen=True)
class DependencyAudit:
    """Result of auditing a project's declared dependencies."""

    total: int
    outdated: int | None
    vulnerable: int | None = None
    conflicts: int | None = None


def parse_requirements(text: str) -> list[tuple[str, str]]:
    """Parse requirements.txt content into (normalized name, full spec) pairs."""
    entries: list[tuple[str, str]] = []
    for raw in text.splitlines():
        line = raw.split("#", 1)[0].strip()
        if not line or line.startswith("-"):
            continue
        match = _REQUIREMENT_NAME.match(line)
        if match:
            name = re.sub(r"[-_.]+", "-", match.group(1)).lower()
            entries.append((name, line.replace(" ", "")))
    return entries


def count_conflicts(declarations: list[tuple[str, str]]) -> int:
    """Number of package names declared more than once with differing specs."""
    specs: dict[str, set[str]] = {}
    for name, spec in declarations:
        specs.setdefault(name, set()).add(spec)
    return sum(1 for s in specs.values() if len(s) > 1)


class ManifestDependencyAuditor:
    """Audits package.json / requirements.txt under a project root."""

    def __init__(
        self,
        root: str | Path,
        npm_binary: str | None = None,
        timeout: int | None = None,
    ) -> None:
        self.root = Path(root)
        self.npm_binary = npm_binary or settings.npm_binary
        self.timeout = timeout or settings.subprocess_timeout

    def audit(self) -> DependencyAudit:
        package_json = self.root / "package.json"
        requirements = self.root / "requirements.txt"

        declarations: list[tuple[str, str]] = []
        total = 0
        outdated: int | None = 0
        vulnerable: int | None = 0

        if package_json.exists():
            manifest = self._load_package_json(package_json)
            deps = manifest.get("dependencies") or {}
            dev_deps = manifest.get("devDependencies") or {}
            total += len(deps)
            declarations.extend((name, f"{name}@{spec}") for name, spec in deps.items())
            declarations.extend((name, f"{name}@{spec}") for name, spec in dev_deps.items())
            outdated = self._npm_outdated()
            vulnerable = self._npm_vulnerabilities()

        if requirements.exists():
            try:
                entries = parse_requirements(requirements.read_text(encoding="utf-8"))
            except OSError as e:
                raise CollectorFailure("dependency-audit", f"cannot read {requirements}: {e}")
            total += len({name for name, _ in entries})
            declarations.extend(entries)
            if entries and not package_json.exists():
                # No offline source of truth for Python package freshness
                outdated = None
                vulnerable = None

        return DependencyAudit(
            total=total,
            outdated=outdated,
            vulnerable=vulnerable,
            conflicts=count_conflicts(declarations),
        )

    @staticmethod
    def _load_package_json(path: Path) -> dict[str, Any]:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise CollectorFailure("dependency-audit", f"cannot parse {path}: {e}")
        if not isinstance(data, dict):
            raise CollectorFailure("dependency-audit", f"{path} is not a JSON object")
        return data

    def _npm_json(self, *args: str) -> dict[str, Any] | None:
        """Run an npm subcommand and parse its JSON stdout. None when unavailable."""
        try:
            proc = subprocess.run(
                [self.npm_binary, *args, "--json"],
                cwd=self.root,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (FileNotFoundError, subprocess.TimeoutExpired) as e:
            logger.warning(f"npm {' '.join(args)} unavailable: {e}")
            return None

        # npm exits non-zero when it finds outdated or vulnerable packages
        stdout = proc.stdout.strip()
        if not stdout:
            return {} if proc.returncode in (0, 1) else None
        try:
            data = json.loads(stdout)
        except json.JSONDecodeError:
            logger.warning(f"npm {' '.join(args)} returned non-JSON output")
            return None
        return data if isinstance(data, dict) else None

    def _npm_outdated(self) -> int | None:
        data = self._npm_json("outdated")
        if data is None or "error" in data:
            return None
        return len(data)

    def _npm_vulnerabilities(self) -> int | None:
        data = self._npm_json("audit")
        if data is None:
            return None
        counts = data.get("metadata", {}).get("vulnerabilities", {})
        if "total" in counts:
            return int(counts["total"])
        return sum(int(v) for k, v in counts.items() if k != "info")
