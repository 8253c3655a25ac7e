"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from goimportgroups.config import GroupRules


# =============================================================================
# PATH FIXTURES
# =============================================================================

@pytest.fixture
def fixtures_dir():
    """Path to the Go fixture packages."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def fixture_file(fixtures_dir):
    """Return the single .go file of a fixture package by package name."""
    def _get(name: str) -> Path:
        return fixtures_dir / name / f"{name}.go"
    return _get


# =============================================================================
# RULE FIXTURES
# =============================================================================

@pytest.fixture
def default_rules():
    """The default configuration: one rule matching anything."""
    return GroupRules.parse()


@pytest.fixture
def stdlib_rules():
    """Rules used by the original analyzer test suite."""
    return GroupRules.parse("fmt:os;time;strings;regexp")


@pytest.fixture(autouse=True)
def _no_groups_env(monkeypatch):
    """Keep a developer's GOIMPORTGROUPS_GROUPS out of the tests."""
    monkeypatch.delenv("GOIMPORTGROUPS_GROUPS", raising=False)
