"""
Tests for group sequence validation.
"""

from goimportgroups.config import GroupRules
from goimportgroups.validator import NOT_GROUPED, Diagnostic, validate_groups

STDLIB = GroupRules.parse("fmt:os;time;strings;regexp").rules


class TestValidateGroups:
    """Rule cursor behaviour."""

    def test_no_groups(self):
        assert validate_groups([], STDLIB, 10) is None

    def test_only_empty_groups(self):
        assert validate_groups([[], []], STDLIB, 10) is None

    def test_single_group_default_rule(self):
        rules = GroupRules.parse().rules
        assert validate_groups([["fmt", "os", "github.com/a/b"]], rules, 0) is None

    def test_groups_in_declared_order(self):
        groups = [["fmt", "os"], ["time"], ["strings"], ["regexp"]]
        assert validate_groups(groups, STDLIB, 0) is None

    def test_unused_rules_are_skipped(self):
        assert validate_groups([["fmt"], ["regexp"]], STDLIB, 0) is None

    def test_empty_groups_ignored(self):
        assert validate_groups([[], ["fmt"], [], [], ["time"], []], STDLIB, 0) is None

    def test_swapped_groups(self):
        diagnostic = validate_groups([["time"], ["fmt", "os"]], STDLIB, 42)
        assert diagnostic == Diagnostic(42, NOT_GROUPED)

    def test_mixed_group(self):
        diagnostic = validate_groups([["fmt", "time"]], STDLIB, 7)
        assert diagnostic == Diagnostic(7, NOT_GROUPED)

    def test_unmatched_import(self):
        assert validate_groups([["net/http"]], STDLIB, 3) == Diagnostic(3, NOT_GROUPED)

    def test_same_rule_for_consecutive_groups(self):
        # The cursor stays on the matched rule, so a split group is accepted
        assert validate_groups([["fmt"], ["os"]], STDLIB, 0) is None

    def test_cursor_never_moves_back(self):
        assert validate_groups([["fmt"], ["time"], ["os"]], STDLIB, 0) is not None

    def test_empty_rule_sequence(self):
        assert validate_groups([[]], (), 0) is None
        assert validate_groups([["fmt"]], (), 5) == Diagnostic(5, NOT_GROUPED)

    def test_first_violation_wins(self):
        # Both groups are out of place; only one diagnostic is produced
        diagnostic = validate_groups([["regexp"], ["time"], ["fmt"]], STDLIB, 1)
        assert diagnostic == Diagnostic(1, NOT_GROUPED)
