"""
VCS History Reader — Commit, fix-commit and author statistics from git.

Every query shells out to `git log` over the analysis window. Any failure
(git missing, not a repository, timeout) surfaces as CollectorFailure so
callers can degrade the affected factor.
"""

from __future__ import annotations

import logging
import subprocess
from collections import Counter
from dataclasses import dataclass
from pathlib import Path

from riskforecast.config import settings
from riskforecast.errors import CollectorFailure

logger = logging.getLogger("riskforecast.sources.vcs")


@dataclass(frozen=True)
class Contributor:
    name: str
    email: str


class GitHistoryReader:
    """Read-only git history queries scoped to one repository."""

    def __init__(
        self,
        root: str | Path,
        git_binary: str | None = None,
        timeout: int | None = None,
    ) -> None:
        self.root = str(root)
        self.git_binary = git_binary or settings.git_binary
        self.timeout = timeout or settings.subprocess_timeout

    def _git(self, *args: str) -> str:
        cmd = [self.git_binary, "-C", self.root, *args]
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise CollectorFailure("vcs", f"{self.git_binary} executable not found")
        except subprocess.TimeoutExpired:
            raise CollectorFailure("vcs", f"git timed out after {self.timeout}s")

        if proc.returncode != 0:
            raise CollectorFailure("vcs", proc.stderr.strip() or f"git exited {proc.returncode}")
        return proc.stdout

    @staticmethod
    def _since(since_days: int) -> str:
        return f"--since={since_days} days ago"

    def commit_count(self, since_days: int) -> int:
        out = self._git("log", self._since(since_days), "--oneline")
        return sum(1 for line in out.splitlines() if line.strip())

    def fix_commit_count(self, since_days: int) -> int:
        """Commits whose message mentions 'fix' (case-sensitive, as git --grep)."""
        out = self._git("log", self._since(since_days), "--grep=fix", "--oneline")
        return sum(1 for line in out.splitlines() if line.strip())

    def _author_lines(self, since_days: int) -> list[tuple[str, str]]:
        out = self._git("log", self._since(since_days), "--pretty=format:%an|%ae")
        authors: list[tuple[str, str]] = []
        for line in out.splitlines():
            if not line.strip():
                continue
            name, _, email = line.partition("|")
            authors.append((name.strip(), email.strip()))
        return authors

    def contributors(self, since_days: int) -> list[Contributor]:
        """Distinct (name, email) pairs, in first-seen order."""
        seen: dict[tuple[str, str], Contributor] = {}
        for name, email in self._author_lines(since_days):
            seen.setdefault((name, email), Contributor(name=name, email=email))
        return list(seen.values())

    def author_commit_counts(self, since_days: int) -> dict[str, int]:
        """Commit count per author email."""
        return dict(Counter(email for _, email in self._author_lines(since_days)))
