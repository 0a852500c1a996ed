"""Unit tests for the DriftGuard coordinator."""

from pathlib import Path

import design_sync
from design_sync.drift import DriftGuard, EmbeddedValueSyncRule, Severity, check_drift


def write(root: Path, relative: str, content: str | bytes) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content)
    return path


class TestDriftGuardCheck:
    """Tests for checking files on disk."""

    def test_clean_files_pass(self, tmp_path, clean_generator):
        path = write(tmp_path, "generators/button.py", clean_generator)
        report = DriftGuard(root=tmp_path).check([path])
        assert report.violations == []
        assert report.files_checked == 1
        assert not report.has_hard

    def test_drifted_file_fails(self, tmp_path, drifted_generator):
        path = write(tmp_path, "generators/dialog.py", drifted_generator)
        report = DriftGuard(root=tmp_path).check([path])
        assert report.has_hard
        (violation,) = report.get_violations_by_rule("DRIFT.REDECLARED_SECTION_PADDING")
        assert violation.file == "generators/dialog.py"
        assert violation.line is not None

    def test_duplicate_paths_checked_once(self, tmp_path):
        path = write(tmp_path, "gen.py", "node.opacity = 0.5\n")
        report = DriftGuard(root=tmp_path).check([path, str(path), tmp_path / "." / "gen.py"])
        assert report.files_checked == 1
        assert len(report.violations) == 1

    def test_violations_sorted_by_file_and_line(self, tmp_path):
        second = write(tmp_path, "b.py", "x = 1\nnode.opacity = 0.5\n")
        first = write(tmp_path, "a.py", "frame.x = 100\nnode.opacity = 0.5\n")
        report = DriftGuard(root=tmp_path, max_workers=4).check([second, first])
        assert [(v.file, v.line) for v in report.violations] == [
            ("a.py", 1),
            ("a.py", 2),
            ("b.py", 2),
        ]

    def test_one_violation_per_rule_per_file(self, tmp_path):
        path = write(tmp_path, "gen.py", "a.opacity = 0.5\nb.opacity = 0.5\n")
        report = DriftGuard(root=tmp_path).check([path])
        assert len(report.get_violations_by_rule("DRIFT.HARDCODED_OPACITY")) == 1

    def test_unreadable_file_is_hard_violation(self, tmp_path):
        path = write(tmp_path, "broken.py", b"\xff\xfe\x00not utf-8")
        report = DriftGuard(root=tmp_path).check([path])
        (violation,) = report.violations
        assert violation.rule_id == "DRIFT.UNREADABLE_FILE"
        assert violation.severity == Severity.HARD

    def test_soft_only_report_has_no_hard(self, tmp_path):
        path = write(tmp_path, "generators/badge.py", "def draw():\n    pass\n")
        report = DriftGuard(root=tmp_path).check([path])
        assert len(report.soft) == 1
        assert not report.has_hard

    def test_rules_executed_counts_sync_rules(self, tmp_path):
        target = write(tmp_path, "layout.py", "BASE_UNIT = 4\n")
        sync_rule = EmbeddedValueSyncRule(target, "BASE_UNIT", "spacing.baseUnitPx", 4.0)
        guard = DriftGuard(rules=[], sync_rules=[sync_rule], root=tmp_path)
        report = guard.check([])
        assert report.rules_executed == 1
        assert report.files_checked == 1
        assert report.violations == []

    def test_missing_sync_target(self, tmp_path):
        sync_rule = EmbeddedValueSyncRule(
            tmp_path / "gone.py", "BASE_UNIT", "spacing.baseUnitPx", 4.0
        )
        report = DriftGuard(rules=[], sync_rules=[sync_rule], root=tmp_path).check([])
        (violation,) = report.violations
        assert violation.rule_id == "SYNC.VALUE.BASE_UNIT"
        assert violation.message == "gone.py not found"
        assert violation.file == "gone.py"
        assert report.has_hard


class TestCollectSources:
    """Tests for glob expansion."""

    def test_collect_sources(self, tmp_path):
        write(tmp_path, "generators/a.py", "")
        write(tmp_path, "generators/nested/b.ts", "")
        write(tmp_path, "generators/readme.md", "")
        guard = DriftGuard(root=tmp_path)
        found = guard.collect_sources(["generators/**/*.py", "generators/**/*.ts", "**/a.py"])
        assert [p.relative_to(tmp_path).as_posix() for p in found] == [
            "generators/a.py",
            "generators/nested/b.ts",
        ]

    def test_no_matches(self, tmp_path):
        assert DriftGuard(root=tmp_path).collect_sources(["**/*.py"]) == []


class TestPackageSelfCheck:
    """The package's own sources stay free of hard drift."""

    def test_package_has_no_hard_violations(self):
        root = Path(design_sync.__file__).parent.parent
        guard = DriftGuard(root=root)
        report = guard.check(guard.collect_sources(["design_sync/**/*.py"]))
        assert report.files_checked > 10
        assert report.hard == []


def test_check_drift_convenience(tmp_path):
    path = write(tmp_path, "gen.ts", "const SECTION_GAP = 48;\n")
    report = check_drift([path])
    assert report.get_violations_by_rule("DRIFT.REDECLARED_SECTION_GAP")
