"""
Tests for the runner and the command line interface.
"""

import json
import shutil

import pytest

from goimportgroups.config import GroupRules, LintConfig
from goimportgroups.runner import EXIT_ERROR, EXIT_FINDINGS, EXIT_OK, main, run
from goimportgroups.scanner import collect_files

STDLIB_GROUPS = "fmt:os;time;strings;regexp"


@pytest.fixture
def go_tree(tmp_path, fixtures_dir):
    """A copy of the fixture packages plus a vendored file that must be skipped."""
    root = tmp_path / "tree"
    shutil.copytree(fixtures_dir, root)
    vendored = root / "vendor" / "bad"
    vendored.mkdir(parents=True)
    (vendored / "bad.go").write_text('package bad\nimport "a"\nimport "b"\n', encoding="utf-8")
    (root / "README.md").write_text("not go\n", encoding="utf-8")
    return root


class TestScanner:

    def test_collects_go_files_only(self, go_tree):
        files = collect_files(LintConfig(paths=(go_tree,)))
        names = sorted(p.name for p in files)
        assert names == [
            "correct.go",
            "multiple_sections.go",
            "no_imports.go",
            "single_group.go",
            "single_group_no_config.go",
            "swapped_groups.go",
        ]

    def test_explicit_file_and_duplicates(self, fixture_file):
        path = fixture_file("correct")
        assert collect_files(LintConfig(paths=(path, path))) == [path]


class TestRun:

    def test_findings_for_fixture_tree(self, go_tree):
        cfg = LintConfig(paths=(go_tree,), group_rules=GroupRules.parse(STDLIB_GROUPS))
        reporter = run(cfg)
        assert reporter.files_checked == 6
        assert not reporter.errors
        assert sorted(f.message for f in reporter.findings) == [
            "File is not goimportgroups-ed",
            "File is not goimportgroups-ed: cannot have two import sections",
        ]

    def test_parallel_run_matches_sequential(self, go_tree):
        rules = GroupRules.parse(STDLIB_GROUPS)
        sequential = run(LintConfig(paths=(go_tree,), group_rules=rules))
        parallel = run(LintConfig(paths=(go_tree,), group_rules=rules, jobs=4))
        assert parallel.findings == sequential.findings

    def test_unparsable_file_is_a_run_error(self, tmp_path):
        (tmp_path / "broken.go").write_text('import "fmt"\n', encoding="utf-8")
        (tmp_path / "fine.go").write_text('package p\nimport "fmt"\n', encoding="utf-8")
        reporter = run(LintConfig(paths=(tmp_path,)))
        assert reporter.files_checked == 2
        assert [e.path for e in reporter.errors] == [str(tmp_path / "broken.go")]
        assert reporter.findings == []

    def test_missing_file_is_a_run_error(self, tmp_path):
        reporter = run(LintConfig(paths=(tmp_path / "missing.go",)))
        assert len(reporter.errors) == 1
        assert "cannot read file" in reporter.errors[0].message

    def test_illegal_utf8_is_a_run_error(self, tmp_path):
        (tmp_path / "latin1.go").write_bytes(
            b'// \xff\npackage p\n\nimport (\n\t"time"\n\n\t"fmt"\n)\n'
        )
        reporter = run(LintConfig(paths=(tmp_path,), group_rules=GroupRules.parse("fmt:os;time")))
        assert reporter.findings == []
        assert len(reporter.errors) == 1
        assert reporter.errors[0].message == "illegal UTF-8 encoding at byte 3"


class TestMain:

    def test_clean_tree(self, fixture_file, capsys):
        assert main([str(fixture_file("correct")), "--groups", STDLIB_GROUPS]) == EXIT_OK
        assert capsys.readouterr().out == ""

    def test_findings_exit_code(self, fixture_file, capsys):
        path = fixture_file("swapped_groups")
        assert main([str(path), "--groups", STDLIB_GROUPS]) == EXIT_FINDINGS
        out = capsys.readouterr().out
        assert out.strip() == f"{path}:3:1: File is not goimportgroups-ed"

    def test_default_groups_accept_everything_grouped_once(self, fixture_file):
        assert main([str(fixture_file("single_group_no_config"))]) == EXIT_OK

    def test_json_output(self, fixture_file, capsys):
        path = fixture_file("multiple_sections")
        assert main([str(path), "--json"]) == EXIT_FINDINGS
        data = json.loads(capsys.readouterr().out)
        assert data["files_checked"] == 1
        assert data["errors"] == []
        finding = data["findings"][0]
        assert finding["line"] == 5
        assert finding["message"].endswith("cannot have two import sections")

    def test_invalid_pattern_aborts_run(self, fixture_file, capsys):
        assert main([str(fixture_file("correct")), "--groups", "fmt;("]) == EXIT_ERROR
        assert "cannot compile regex (" in capsys.readouterr().err

    def test_config_file(self, tmp_path, fixture_file):
        cfg = tmp_path / "groups.yaml"
        cfg.write_text("groups:\n  - fmt:os\n  - time\n", encoding="utf-8")
        path = str(fixture_file("swapped_groups"))
        assert main([path, "--config", str(cfg)]) == EXIT_FINDINGS
        assert main([path, "--config", str(cfg), "--groups", ".*"]) == EXIT_OK
        assert main([path, "--config", str(cfg), "--groups", "time;fmt:os"]) == EXIT_OK

    def test_env_groups(self, fixture_file, monkeypatch):
        monkeypatch.setenv("GOIMPORTGROUPS_GROUPS", "time;fmt:os")
        assert main([str(fixture_file("swapped_groups"))]) == EXIT_OK

    def test_go_style_recursive_path(self, go_tree, monkeypatch, capsys):
        monkeypatch.chdir(go_tree)
        assert main(["./...", "--groups", STDLIB_GROUPS]) == EXIT_FINDINGS
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 2

    def test_unreadable_file_exit_code(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.go")]) == EXIT_ERROR
        assert "error: cannot read file" in capsys.readouterr().out
