"""
goimportgroups — Group sequence validation.

Walks the declared rules and the observed groups together. Rules may be
skipped when a file has nothing for them, but the rule cursor never moves
backwards and every import of a group must satisfy the rule its first
import selected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .patterns import Expression

logger = logging.getLogger(__name__)

NOT_GROUPED = "File is not goimportgroups-ed"


@dataclass(frozen=True)
class Diagnostic:
    """A single violation: character offset into the file and message."""
    offset: int
    message: str


def validate_groups(
    groups: Sequence[Sequence[str]],
    rules: Sequence[Expression],
    block_start: int,
) -> Optional[Diagnostic]:
    """
    Check the groups against the rules; return the first violation or None.

    Violations are reported at ``block_start``.
    """
    rule_index = 0

    for group in groups:
        if not group:
            continue

        first = group[0]
        while rule_index < len(rules) and not rules[rule_index].matches(first):
            rule_index += 1

        if rule_index >= len(rules):
            logger.debug("No remaining rule matches %r", first)
            return Diagnostic(block_start, NOT_GROUPED)

        rule = rules[rule_index]
        logger.debug("Group starting with %r matched rule %d (%s)", first, rule_index, rule)

        for path in group:
            if not rule.matches(path):
                logger.debug("%r does not match rule %d (%s)", path, rule_index, rule)
                return Diagnostic(block_start, NOT_GROUPED)

    return None
