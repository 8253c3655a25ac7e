"""
goimportgroups — Main runner and CLI.

Checks every Go file under the given paths and handles CLI arguments.
"""

from __future__ import annotations

import argparse
import concurrent.futures
import logging
import sys
from pathlib import Path
from typing import Optional, Union

from . import __version__
from .analyzer import ANALYZER_DOC, ANALYZER_NAME, check_file
from .config import (
    ConfigError,
    GroupRules,
    LintConfig,
    load_config_file,
    resolve_groups,
)
from .parser import LexerError, ParseError
from .patterns import PatternError
from .reporting import Finding, Reporter, RunError
from .scanner import collect_files

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_ERROR = 2

_Outcome = Union[Finding, RunError, None]


def _check_one(path: Path, group_rules: GroupRules) -> _Outcome:
    try:
        return check_file(path, group_rules)
    except OSError as e:
        logger.warning("Cannot read %s: %s", path, e)
        return RunError(path=str(path), message=f"cannot read file: {e.strerror or e}")
    except UnicodeDecodeError as e:
        logger.warning("Cannot decode %s: %s", path, e)
        return RunError(path=str(path), message=f"illegal UTF-8 encoding at byte {e.start}")
    except (LexerError, ParseError) as e:
        logger.warning("Cannot parse %s: %s", path, e)
        return RunError(path=str(path), message=str(e))


def run(cfg: Optional[LintConfig] = None) -> Reporter:
    """Check all files named by the config and return a Reporter."""
    cfg = cfg or LintConfig()
    reporter = Reporter()
    files = collect_files(cfg)

    if cfg.jobs > 1 and len(files) > 1:
        with concurrent.futures.ThreadPoolExecutor(max_workers=cfg.jobs) as pool:
            outcomes = list(pool.map(lambda p: _check_one(p, cfg.group_rules), files))
    else:
        outcomes = [_check_one(p, cfg.group_rules) for p in files]

    for outcome in outcomes:
        if isinstance(outcome, Finding):
            reporter.add(outcome)
        elif isinstance(outcome, RunError):
            reporter.add_error(outcome)

    reporter.files_checked = len(files)
    return reporter


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=ANALYZER_NAME,
        description=f"{ANALYZER_NAME} v{__version__} — {ANALYZER_DOC}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Group patterns:
    ;   separates groups, in their required order
    ,   AND of two patterns
    :   OR of two patterns
    Each leaf is a regex anchored at both ends. The operator occurring
    last in the string binds loosest: "fmt,os:io" is (fmt AND os) OR io.

Examples:
    goimportgroups ./...
    goimportgroups --groups 'fmt:os;time;strings;regexp' cmd/
    goimportgroups --groups '[a-z/]+;github\\.com/.*' --json .
""",
    )
    parser.add_argument("--version", action="version", version=f"{ANALYZER_NAME} {__version__}")
    parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Go files or directories to check (default: current directory)",
    )
    parser.add_argument(
        "--groups",
        default=None,
        help="semicolon separated group patterns (default: .*)",
    )
    parser.add_argument(
        "--config",
        metavar="FILE",
        help="YAML config file (default: ./.goimportgroups.yaml if present)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    parser.add_argument(
        "-j", "--jobs",
        type=int,
        default=1,
        help="Number of files to check in parallel (default: 1)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point."""
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    # Paths like ./... are accepted for go vet familiarity
    paths = tuple(Path(p[:-4] or ".") if p.endswith("/...") else Path(p) for p in args.paths)

    try:
        settings = load_config_file(Path(args.config) if args.config else None)
        group_rules = GroupRules.parse(resolve_groups(args.groups, settings))
    except (ConfigError, PatternError) as e:
        print(f"{ANALYZER_NAME}: {e}", file=sys.stderr)
        return EXIT_ERROR

    cfg = LintConfig(
        paths=paths,
        group_rules=group_rules,
        json_output=args.json,
        jobs=max(1, args.jobs),
    )
    if "exclude_dirs" in settings:
        cfg.exclude_dirs = settings["exclude_dirs"]

    reporter = run(cfg)

    if cfg.json_output:
        print(reporter.render_json())
    else:
        output = reporter.render_human()
        if output:
            print(output)

    if reporter.errors:
        return EXIT_ERROR
    return EXIT_FINDINGS if reporter.findings else EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
