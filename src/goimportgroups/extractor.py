"""
goimportgroups — Import block extraction.

Finds the single import declaration of a file. A Go file may legally have
several, but this linter requires exactly one section.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .parser import ImportDecl

DUPLICATE_SECTIONS = "cannot have two import sections"


@dataclass(frozen=True)
class ImportBlockSpan:
    """Source span of the import block. (0, 0) means there is none."""
    start: int = 0
    end: int = 0
    error: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


def locate_import_block(decls: Iterable[ImportDecl]) -> ImportBlockSpan:
    """
    Locate the import block among top-level declarations.

    Zero declarations give an empty span. On a second declaration the scan
    stops and returns that declaration's span carrying DUPLICATE_SECTIONS.
    """
    found: Optional[ImportDecl] = None
    for decl in decls:
        if found is not None:
            return ImportBlockSpan(decl.start, decl.end, DUPLICATE_SECTIONS)
        found = decl

    if found is None:
        return ImportBlockSpan()
    return ImportBlockSpan(found.start, found.end)
