"""
goimportgroups — Group pattern language.

A group pattern is a boolean expression over regex literals:

    fmt:os          fmt OR os
    github\\.com/.*,.*/v2     github.com/... AND .../v2

There is no grouping syntax. The operator whose LAST occurrence lies
furthest to the right becomes the root of the expression and both halves
are parsed again the same way, so ``fmt,os:io`` reads as
``(fmt AND os) OR io`` and ``fmt:os,io`` as ``(fmt OR os) AND io``.
Every regex literal is anchored at both ends.

Since the root is always the rightmost separator, its right half is a bare
literal and the tree leans left. Parsing, evaluation and rendering walk it
without recursion, so long chains of separators are fine.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass, field
from typing import Callable, TypeVar, Union

AND_SEPARATOR = ","
OR_SEPARATOR = ":"

_SEPARATOR_RE = re.compile(f"([{AND_SEPARATOR}{OR_SEPARATOR}])")

T = TypeVar("T")


class PatternError(ValueError):
    """A regex literal inside a group pattern does not compile."""

    def __init__(self, literal: str, reason: str) -> None:
        self.literal = literal
        self.reason = reason
        super().__init__(f"cannot compile regex {literal}: {reason}")


# =============================================================================
# Expression tree
# =============================================================================

@dataclass(frozen=True)
class Literal:
    """A regex leaf, matched as ``^<source>$``."""
    source: str
    regex: re.Pattern = field(repr=False, compare=False)

    def matches(self, path: str) -> bool:
        return self.regex.search(path) is not None

    def __str__(self) -> str:
        return self.source


@dataclass(frozen=True)
class _Binary:
    left: Expression
    right: Expression

    SEPARATOR = ""

    @staticmethod
    def combine(left: bool, right: bool) -> bool:
        raise NotImplementedError

    def matches(self, path: str) -> bool:
        # Both sides are always evaluated
        return _fold(
            self,
            lambda leaf: leaf.matches(path),
            lambda node, left, right: node.combine(left, right),
        )

    def __str__(self) -> str:
        return _fold(self, str, lambda node, left, right: f"({left}{node.SEPARATOR}{right})")


class And(_Binary):
    SEPARATOR = AND_SEPARATOR

    @staticmethod
    def combine(left: bool, right: bool) -> bool:
        return left and right


class Or(_Binary):
    SEPARATOR = OR_SEPARATOR

    @staticmethod
    def combine(left: bool, right: bool) -> bool:
        return left or right


Expression = Union[Literal, And, Or]


def _fold(
    expr: Expression,
    leaf: Callable[[Literal], T],
    node: Callable[[_Binary, T, T], T],
) -> T:
    """Post-order walk with an explicit stack, left child before right."""
    stack: list[tuple[Expression, bool]] = [(expr, False)]
    values: list[T] = []
    while stack:
        current, visited = stack.pop()
        if isinstance(current, Literal):
            values.append(leaf(current))
        elif visited:
            right = values.pop()
            left = values.pop()
            values.append(node(current, left, right))
        else:
            stack.append((current, True))
            stack.append((current.right, False))
            stack.append((current.left, False))
    return values[0]


# =============================================================================
# Parsing and matching
# =============================================================================

def compile_literal(source: str) -> Literal:
    """Compile one regex literal with implicit start/end anchors."""
    try:
        regex = re.compile(f"^{source}$")
    except re.error as e:
        raise PatternError(source, str(e)) from e
    return Literal(source=source, regex=regex)


@functools.lru_cache(maxsize=None)
def parse_pattern(pattern: str) -> Expression:
    """
    Parse a group pattern into an expression tree.

    Raises PatternError if any regex literal is invalid. Results are cached;
    expression trees are immutable and safe to share between threads.
    """
    # ['a', ',', 'b', ':', 'c'] -> ((a,b):c)
    parts = _SEPARATOR_RE.split(pattern)
    expr: Expression = compile_literal(parts[0])
    for i in range(1, len(parts), 2):
        operator = And if parts[i] == AND_SEPARATOR else Or
        expr = operator(expr, compile_literal(parts[i + 1]))
    return expr


def match(path: str, pattern: str) -> bool:
    """Return True if the import path satisfies the group pattern."""
    return parse_pattern(pattern).matches(path)
