"""
Source Scanner — Walks a project tree and measures keyword complexity.

Complexity is a cyclomatic proxy: 1 + number of branching, looping and
exception keywords + number of short-circuit / ternary operators.
Language agnostic on purpose, so it works across every extension listed.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from riskforecast.errors import CollectorFailure

logger = logging.getLogger("riskforecast.sources.scanner")

SOURCE_EXTENSIONS = {
    ".js", ".jsx", ".ts", ".tsx", ".py", ".java", ".cpp", ".c", ".cs",
}

EXCLUDED_DIRS = {
    "node_modules", ".git", "dist", "build", ".next",
    "__pycache__", ".venv", "venv",
}

COMPLEXITY_KEYWORDS = (
    "if", "else", "for", "while", "do", "switch", "case", "catch", "try", "return",
)

_KEYWORD_PATTERN = re.compile(r"\b(?:" + "|".join(COMPLEXITY_KEYWORDS) + r")\b")
_OPERATOR_PATTERN = re.compile(r"&&|\|\||\?")


class SourceScanner:
    """Read-only view of a project's source files."""

    def __init__(
        self,
        extensions: set[str] | None = None,
        excluded_dirs: set[str] | None = None,
    ) -> None:
        self.extensions = extensions or SOURCE_EXTENSIONS
        self.excluded_dirs = excluded_dirs or EXCLUDED_DIRS

    def list_source_files(self, root: str | Path) -> list[Path]:
        """
        Recursively list source files under root, skipping build/VC directories.

        Returns paths sorted for deterministic iteration.
        Raises CollectorFailure if root is not a readable directory.
        """
        root_path = Path(root)
        if not root_path.is_dir():
            raise CollectorFailure("scanner", f"project path {root_path} is not a directory")

        found: list[Path] = []
        for dirpath, dirnames, filenames in os.walk(root_path):
            # Prune in place so os.walk never descends into excluded dirs
            dirnames[:] = sorted(d for d in dirnames if d not in self.excluded_dirs)
            for name in filenames:
                if Path(name).suffix.lower() in self.extensions:
                    found.append(Path(dirpath) / name)

        return sorted(found)

    def read_file(self, path: str | Path) -> str:
        """Read a source file. Raises OSError when missing or unreadable."""
        return Path(path).read_text(encoding="utf-8", errors="replace")

    @staticmethod
    def file_complexity(text: str) -> int:
        """Keyword complexity of a single file's text."""
        return (
            1
            + len(_KEYWORD_PATTERN.findall(text))
            + len(_OPERATOR_PATTERN.findall(text))
        )

    def mean_complexity(self, root: str | Path) -> tuple[float | None, int, int]:
        """
        Mean complexity across all readable source files.

        Returns (mean, files_read, files_failed). mean is 0.0 when there are no
        source files, and None when files exist but none could be read.
        """
        files = self.list_source_files(root)
        total = 0
        read = 0
        failed = 0

        for path in files:
            try:
                text = self.read_file(path)
            except OSError as e:
                failed += 1
                logger.debug(f"Skipping unreadable file {path}: {e}")
                continue
            total += self.file_complexity(text)
            read += 1

        if not files:
            return 0.0, 0, 0
        if read == 0:
            return None, 0, failed
        return total / read, read, failed
