"""
goimportgroups - Go import group linter

Checks that the import block of Go source files is split by blank lines
into groups that follow a user-declared sequence of group patterns.

Usage:
    goimportgroups [paths]
    goimportgroups --groups 'fmt:os;time;strings;regexp' ./...
    goimportgroups --json
    python -m goimportgroups [paths]
"""

__version__ = "0.1.0"

from goimportgroups.analyzer import Analyzer, AnalysisHost, FileHost, check_file, check_source
from goimportgroups.config import GroupRules, LintConfig
from goimportgroups.patterns import PatternError, match, parse_pattern
