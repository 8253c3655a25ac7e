"""
goimportgroups — Configuration.

Group rules, runtime settings and the YAML config file loader.
For the pattern language itself, see patterns.py.

Precedence (highest first):
    --groups flag
    GOIMPORTGROUPS_GROUPS environment variable
    ``groups`` key of the YAML config file
    DEFAULT_GROUPS
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from .patterns import Expression, parse_pattern

logger = logging.getLogger(__name__)

DEFAULT_GROUPS = ".*"
GROUP_SEPARATOR = ";"
CONFIG_FILENAME = ".goimportgroups.yaml"
GROUPS_ENV_VAR = "GOIMPORTGROUPS_GROUPS"

# Default config file locations (checked in order)
CONFIG_SEARCH_PATHS = [
    Path(CONFIG_FILENAME),
]


class ConfigError(Exception):
    """The configuration file cannot be read or has the wrong shape."""


@dataclass(frozen=True)
class GroupRules:
    """
    The declared group sequence, parsed once per run.

    Immutable and shared read-only by every file check, so concurrent
    checks need no locking.
    """
    raw: str
    rules: tuple[Expression, ...]

    @classmethod
    def parse(cls, groups: str = DEFAULT_GROUPS) -> "GroupRules":
        """Parse ``a;b:c;d`` into rules. Raises PatternError on a bad regex."""
        if groups == "":
            return cls(raw=groups, rules=())
        patterns = groups.split(GROUP_SEPARATOR)
        rules = tuple(parse_pattern(p) for p in patterns)
        logger.debug("Parsed %d group rule(s) from %r", len(rules), groups)
        return cls(raw=groups, rules=rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __str__(self) -> str:
        return self.raw


@dataclass
class LintConfig:
    """Runtime configuration for a goimportgroups run."""

    paths: tuple[Path, ...] = (Path("."),)
    group_rules: GroupRules = field(default_factory=GroupRules.parse)

    # File extensions
    go_exts: tuple[str, ...] = (".go",)

    # Directory exclusions
    exclude_dirs: tuple[str, ...] = (
        ".git",
        "vendor",
        "testdata",
        "node_modules",
    )

    # Output settings
    json_output: bool = False

    # Worker threads; 1 checks files sequentially
    jobs: int = 1


def should_exclude_path(cfg: LintConfig, path: Path) -> bool:
    """Check if path should be excluded from scanning."""
    return any(d in path.parts for d in cfg.exclude_dirs)


def _groups_from_value(value: Any, source: Path) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return GROUP_SEPARATOR.join(value)
    raise ConfigError(f"{source}: 'groups' must be a string or a list of strings")


def load_config_file(explicit_path: Optional[Path] = None) -> dict[str, Any]:
    """
    Load settings from the YAML config file.

    An explicit path must exist; otherwise the search paths are tried and a
    missing file simply yields no settings. Returns a dict with the optional
    keys ``groups`` (normalized to the ``;`` string form) and ``exclude_dirs``.
    """
    if explicit_path is not None and not explicit_path.exists():
        raise ConfigError(f"Config file not found: {explicit_path}")

    search_paths = [explicit_path] if explicit_path else CONFIG_SEARCH_PATHS
    for config_path in search_paths:
        if not config_path.exists():
            continue
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load config from {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{config_path}: top level must be a mapping")

        settings: dict[str, Any] = {}
        if "groups" in data:
            settings["groups"] = _groups_from_value(data["groups"], config_path)
        if "exclude_dirs" in data:
            dirs = data["exclude_dirs"]
            if not isinstance(dirs, list) or not all(isinstance(d, str) for d in dirs):
                raise ConfigError(f"{config_path}: 'exclude_dirs' must be a list of strings")
            settings["exclude_dirs"] = tuple(dirs)
        logger.debug("Loaded config from %s", config_path)
        return settings

    return {}


def resolve_groups(flag_value: Optional[str], file_settings: dict[str, Any]) -> str:
    """Pick the group string by precedence: flag, environment, file, default."""
    if flag_value is not None:
        return flag_value
    if GROUPS_ENV_VAR in os.environ:
        return os.environ[GROUPS_ENV_VAR]
    return file_settings.get("groups", DEFAULT_GROUPS)
