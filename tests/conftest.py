"""
Test fixtures shared across all RiskForecast tests.

Fake collaborators stand in for the filesystem scanner, git and the
dependency auditor so collectors and the worker run without I/O.
"""

import pytest

from riskforecast.collectors.base import CollectionContext
from riskforecast.errors import CollectorFailure
from riskforecast.sources.dependencies import DependencyAudit
from riskforecast.sources.vcs import Contributor


class FakeScanner:
    def __init__(self, mean=0.0, files_read=0, files_failed=0, error=None):
        self.mean = mean
        self.files_read = files_read
        self.files_failed = files_failed
        self.error = error

    def mean_complexity(self, root):
        if self.error:
            raise self.error
        return self.mean, self.files_read, self.files_failed


class FakeVCS:
    def __init__(self, commits=0, fixes=0, author_counts=None, error=None):
        self.commits = commits
        self.fixes = fixes
        self.author_counts = author_counts or {}
        self.error = error

    def _check(self):
        if self.error:
            raise self.error

    def commit_count(self, since_days):
        self._check()
        return self.commits

    def fix_commit_count(self, since_days):
        self._check()
        return self.fixes

    def contributors(self, since_days):
        self._check()
        return [Contributor(name=email.split("@")[0], email=email) for email in self.author_counts]

    def author_commit_counts(self, since_days):
        self._check()
        return dict(self.author_counts)


class FakeAuditor:
    def __init__(self, audit=None, error=None):
        self._audit = audit or DependencyAudit(total=0, outdated=0, vulnerable=0, conflicts=0)
        self.error = error

    def audit(self):
        if self.error:
            raise self.error
        return self._audit


NO_VCS = CollectorFailure("vcs", "not a git repository")


@pytest.fixture
def make_context(tmp_path):
    """Build a CollectionContext around fake collaborators."""

    def _make(
        scanner=None,
        vcs=None,
        auditor=None,
        period=30,
        apply_neutral_defaults=False,
    ):
        return CollectionContext(
            project_path=str(tmp_path),
            analysis_period_days=period,
            scanner=scanner or FakeScanner(),
            vcs=vcs or FakeVCS(),
            auditor=auditor or FakeAuditor(),
            apply_neutral_defaults=apply_neutral_defaults,
        )

    return _make


@pytest.fixture
def typical_context(make_context):
    """A moderately active project with one dominant author."""
    return make_context(
        scanner=FakeScanner(mean=20.0, files_read=12),
        vcs=FakeVCS(
            commits=60,
            fixes=15,
            author_counts={"ana@example.com": 40, "ben@example.com": 15, "cy@example.com": 5},
        ),
        auditor=FakeAuditor(DependencyAudit(total=10, outdated=5, vulnerable=2, conflicts=1)),
    )


@pytest.fixture
def empty_context(make_context):
    """Every collaborator fails: no source tree, no git, no manifest."""
    return make_context(
        scanner=FakeScanner(error=CollectorFailure("scanner", "missing")),
        vcs=FakeVCS(error=NO_VCS),
        auditor=FakeAuditor(error=CollectorFailure("dependency-audit", "no manifest")),
    )


@pytest.fixture
def sample_project(tmp_path):
    """A small on-disk project tree."""
    src = tmp_path / "src"
    src.mkdir()
    (src / "app.py").write_text(
        "def f(x):\n"
        "    if x:\n"
        "        return 1\n"
        "    else:\n"
        "        return 2\n"
    )
    (src / "util.js").write_text("function g(a, b) { return a && b ? 1 : 0; }\n")
    (tmp_path / "README.md").write_text("# not source\n")
    vendored = tmp_path / "node_modules" / "dep"
    vendored.mkdir(parents=True)
    (vendored / "index.js").write_text("if (a) { if (b) { return c; } }\n")
    return tmp_path
