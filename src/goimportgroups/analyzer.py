"""
goimportgroups — Per-file analysis.

The analyzer sees a file only through an AnalysisHost: it asks for the
top-level import declarations and the source text, and hands back at most
one diagnostic. FileHost is the host used by the command line runner.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from .config import GroupRules
from .extractor import locate_import_block
from .parser import ImportDecl, parse_source
from .reporting import Finding
from .scanner import SourceFile, load_source
from .splitter import split_groups
from .validator import NOT_GROUPED, Diagnostic, validate_groups

logger = logging.getLogger(__name__)

ANALYZER_NAME = "goimportgroups"
ANALYZER_DOC = "Checks if go imports are separated into user-defined groups."


class AnalysisHost(ABC):
    """
    What the analyzer needs from its surroundings.

    Offsets exchanged through this interface are character offsets into
    the text returned by read_text().
    """

    @abstractmethod
    def import_decls(self) -> list[ImportDecl]:
        """Top-level import declarations, in source order."""
        pass

    @abstractmethod
    def read_text(self) -> str:
        """Full source text of the file."""
        pass

    @abstractmethod
    def report(self, offset: int, message: str) -> None:
        """Emit a diagnostic at the given offset."""
        pass


class FileHost(AnalysisHost):
    """Host over a loaded SourceFile; collects findings with byte positions."""

    def __init__(self, source: SourceFile) -> None:
        self.source = source
        self.findings: list[Finding] = []

    def import_decls(self) -> list[ImportDecl]:
        # ParseError / LexerError propagate: the file cannot be checked
        return parse_source(self.source.text, str(self.source.path)).imports

    def read_text(self) -> str:
        return self.source.text

    def report(self, offset: int, message: str) -> None:
        line, col = self.source.position(offset)
        self.findings.append(Finding(
            path=str(self.source.path),
            offset=self.source.byte_offset(offset),
            line=line,
            col=col,
            message=message,
        ))


class Analyzer:
    """Checks import grouping against one immutable GroupRules value."""

    name = ANALYZER_NAME
    doc = ANALYZER_DOC

    def __init__(self, group_rules: GroupRules) -> None:
        self.group_rules = group_rules

    def diagnose(self, host: AnalysisHost) -> Optional[Diagnostic]:
        """First violation in the host's file, or None."""
        span = locate_import_block(host.import_decls())
        if span.error:
            return Diagnostic(span.start, f"{NOT_GROUPED}: {span.error}")
        if span.is_empty:
            return None

        groups = split_groups(host.read_text(), span)
        return validate_groups(groups, self.group_rules.rules, span.start)

    def check(self, host: AnalysisHost) -> Optional[Diagnostic]:
        """Diagnose the file and report the violation, if any, to the host."""
        diagnostic = self.diagnose(host)
        if diagnostic is not None:
            host.report(diagnostic.offset, diagnostic.message)
        return diagnostic


def check_source(
    text: str,
    group_rules: GroupRules,
    filename: str = "<unknown>",
) -> Optional[Finding]:
    """Check Go source text; return the finding or None."""
    host = FileHost(SourceFile.from_bytes(Path(filename), text.encode("utf-8")))
    Analyzer(group_rules).check(host)
    return host.findings[0] if host.findings else None


def check_file(path: Path, group_rules: GroupRules) -> Optional[Finding]:
    """Check one Go file. OSError and parse errors propagate."""
    host = FileHost(load_source(path))
    Analyzer(group_rules).check(host)
    if host.findings:
        logger.debug("%s", host.findings[0])
    return host.findings[0] if host.findings else None
