"""
goimportgroups — File scanning and source loading.

Handles:
- Directory walking with exclusions
- Source file loading (bytes kept alongside the decoded text)
- Character offset to byte offset / line:column conversion
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from .config import LintConfig, should_exclude_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceFile:
    """A loaded Go source file.

    Offsets handed around by the parser are character offsets into ``text``;
    diagnostics are reported in byte offsets into ``data``.
    """
    path: Path
    data: bytes
    text: str
    _line_starts: list[int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        starts = [0]
        for i, ch in enumerate(self.text):
            if ch == "\n":
                starts.append(i + 1)
        object.__setattr__(self, "_line_starts", starts)

    @classmethod
    def from_bytes(cls, path: Path, data: bytes) -> "SourceFile":
        """Decode strictly; UnicodeDecodeError propagates for illegal UTF-8."""
        return cls(path=path, data=data, text=data.decode("utf-8"))

    def byte_offset(self, char_offset: int) -> int:
        """Byte offset of a character offset (Go sources are UTF-8)."""
        return len(self.text[:char_offset].encode("utf-8"))

    def position(self, char_offset: int) -> tuple[int, int]:
        """1-based (line, column) of a character offset; columns count bytes."""
        idx = bisect.bisect_right(self._line_starts, char_offset) - 1
        line_start = self._line_starts[idx]
        col = len(self.text[line_start:char_offset].encode("utf-8")) + 1
        return idx + 1, col


def load_source(path: Path) -> SourceFile:
    """Load a single source file. OSError propagates to the caller."""
    return SourceFile.from_bytes(path, path.read_bytes())


def iter_files(cfg: LintConfig) -> Iterator[Path]:
    """Iterate over Go files named on the command line or found under directories."""
    for root in cfg.paths:
        if root.is_file():
            yield root
            continue
        if not root.is_dir():
            # Missing paths surface as read errors in the runner
            yield root
            continue
        for path in sorted(root.rglob("*")):
            if not path.is_file():
                continue
            if should_exclude_path(cfg, path.relative_to(root)):
                continue
            if path.suffix in cfg.go_exts:
                yield path


def collect_files(cfg: LintConfig) -> list[Path]:
    """All files to check, de-duplicated, in discovery order."""
    seen: set[Path] = set()
    files: list[Path] = []
    for path in iter_files(cfg):
        key = path.resolve()
        if key in seen:
            continue
        seen.add(key)
        files.append(path)
    logger.debug("Discovered %d Go file(s)", len(files))
    return files
