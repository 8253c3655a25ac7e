"""
goimportgroups — Splitting an import block into groups.

Works on the raw text of the block rather than on parsed import specs:
blank lines are what separate groups, and the parser does not keep them.
"""

from __future__ import annotations

import logging
import re

from .extractor import ImportBlockSpan

logger = logging.getLogger(__name__)

# Line comments, and block comments that open and close on the same line.
# A block comment spanning lines is left partly in place.
COMMENT_RE = re.compile(r"//.*|/\*.*?\*/")


def _strip_quotes(path: str) -> str:
    """Drop the opening quote and at most one closing quote."""
    if path.startswith('"'):
        path = path[1:]
        if path.endswith('"'):
            path = path[:-1]
    return path


def import_path_of(line: str) -> str:
    """
    Import path of one trimmed, non-blank import line.

    ``"fmt"`` gives ``fmt``. For ``f "fmt"`` (or ``. "fmt"``, ``_ "fmt"``)
    the path is whatever follows the first space, so the quotes stay:
    ``"fmt"``.
    """
    if line.startswith('"'):
        return _strip_quotes(line)
    _, _, rest = line.partition(" ")
    return rest.strip()


def normalize_block(block_src: str) -> str:
    """Reduce ``import ( ... )`` or ``import "x"`` to the bare import lines."""
    src = block_src.strip()
    if src.startswith("import"):
        src = src[len("import"):]
    src = src.strip()
    if src.startswith("("):
        src = src[1:]
    if src.endswith(")"):
        src = src[:-1]
    src = src.strip()
    return COMMENT_RE.sub("", src)


def split_lines(block_src: str) -> list[list[str]]:
    """
    Split normalized import text into groups separated by blank lines.

    Every blank line closes the current group, so consecutive blank lines
    produce empty groups. The last group is always appended.
    """
    groups: list[list[str]] = []
    current: list[str] = []

    for line in block_src.split("\n"):
        line = line.strip()
        if line == "":
            groups.append(current)
            current = []
            continue
        current.append(import_path_of(line))

    groups.append(current)
    return groups


def split_groups(text: str, span: ImportBlockSpan) -> list[list[str]]:
    """Groups of import paths for the span of ``text``, in source order."""
    groups = split_lines(normalize_block(text[span.start:span.end]))
    logger.debug(
        "Split import block into %d group(s): %s",
        len(groups),
        [len(g) for g in groups],
    )
    return groups
