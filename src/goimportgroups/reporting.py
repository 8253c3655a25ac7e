"""
goimportgroups — Reporting and output formatting.

Handles:
- Finding dataclass
- Per-file run errors
- Human-readable output
- JSON output
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass


@dataclass
class Finding:
    """A diagnostic placed in a file. ``offset`` counts bytes from file start."""
    path: str
    offset: int
    line: int
    col: int
    message: str

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.col}: {self.message}"


@dataclass
class RunError:
    """A file that could not be checked (unreadable or unparsable)."""
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: error: {self.message}"


class Reporter:
    """Collects findings and run errors and formats them."""

    def __init__(self) -> None:
        self.findings: list[Finding] = []
        self.errors: list[RunError] = []
        self.files_checked = 0

    def add(self, finding: Finding) -> None:
        """Add a finding."""
        self.findings.append(finding)

    def add_error(self, error: RunError) -> None:
        self.errors.append(error)

    @property
    def ok(self) -> bool:
        return not self.findings and not self.errors

    def render_human(self) -> str:
        """Render findings and errors as human-readable text, one per line."""
        lines = [str(f) for f in sorted(self.findings, key=lambda f: (f.path, f.offset))]
        lines.extend(str(e) for e in sorted(self.errors, key=lambda e: e.path))
        return "\n".join(lines)

    def render_json(self) -> str:
        """Render findings and errors as JSON."""
        return json.dumps(
            {
                "files_checked": self.files_checked,
                "findings": [asdict(f) for f in self.findings],
                "errors": [asdict(e) for e in self.errors],
            },
            indent=2,
            default=str,
        )
