"""Unit tests for the default drift rules."""

import re

import pytest

from design_sync.drift import DriftGuard, Severity, configure_rules, default_rules
from design_sync.drift.models import DriftRule, matches_any
from design_sync.drift.rules import import_pattern


def check(path: str, content: str, constants_module: str = "design_sync.constants"):
    """Run the default rules against one file's text."""
    guard = DriftGuard(default_rules(constants_module))
    return guard.check_text(path, content)


def rule_ids(violations) -> set[str]:
    return {v.rule_id for v in violations}


class TestRedeclaredConstants:
    """Tests for DRIFT.REDECLARED_* rules."""

    def test_typescript_const_redeclaration(self):
        violations = check("generators/dialog.ts", "const SECTION_PADDING = 24;\n")
        (violation,) = [v for v in violations if v.rule_id == "DRIFT.REDECLARED_SECTION_PADDING"]
        assert violation.severity == Severity.HARD
        assert violation.line == 1
        assert "SECTION_PADDING" in violation.message
        assert "design_sync.constants" in violation.message

    def test_python_redeclaration(self):
        content = '"""Gen."""\n\nSECTION_GAP: int = 48\n'
        violations = check("generators/dialog.py", content)
        (violation,) = [v for v in violations if v.rule_id == "DRIFT.REDECLARED_SECTION_GAP"]
        assert violation.line == 3

    def test_redeclaration_fires_even_with_import(self):
        content = (
            "from design_sync.constants import SECTION_PADDING\n"
            "SECTION_PADDING = 20\n"
        )
        assert "DRIFT.REDECLARED_SECTION_PADDING" in rule_ids(check("gen.py", content))

    def test_comparison_is_not_a_declaration(self):
        content = (
            "from design_sync.constants import SECTION_PADDING\n"
            "if SECTION_PADDING == 24:\n    pass\n"
        )
        assert check("gen.py", content) == []

    def test_constants_module_may_declare(self):
        assert check("design_sync/constants.py", "SECTION_PADDING = 24\n") == []
        assert check("lib/design_sync/constants.py", "SECTION_PADDING = 24\n") == []
        content = "export const SECTION_GAP = 48;\n"
        assert check("src/constants.ts", content, constants_module="src.constants") == []

    @pytest.mark.parametrize(
        "path", ["generators/constants.py", "constants.py", "other_design_sync/constants.py"]
    )
    def test_other_constants_files_may_not_declare(self, path):
        violations = check(path, "SECTION_PADDING = 24\n")
        assert "DRIFT.REDECLARED_SECTION_PADDING" in rule_ids(violations)


class TestMissingConstantImport:
    """Tests for DRIFT.MISSING_CONSTANT_IMPORT."""

    def test_usage_without_import(self):
        violations = check("gen.py", "frame.padding = SECTION_PADDING\n")
        assert "DRIFT.MISSING_CONSTANT_IMPORT" in rule_ids(violations)

    @pytest.mark.parametrize(
        "import_line",
        [
            "from design_sync.constants import SECTION_PADDING",
            "from design_sync.constants import (\n    SECTION_GAP,\n    SECTION_PADDING,\n)",
            "from ..constants import SECTION_PADDING",
            "from .constants import GRID_LAYOUT, SECTION_PADDING",
            'import { SECTION_PADDING } from "../constants";',
            "import { GRID_LAYOUT, SECTION_PADDING } from './shared/constants'",
        ],
    )
    def test_accepted_import_forms(self, import_line):
        content = f"{import_line}\nframe.padding = SECTION_PADDING\n"
        assert "DRIFT.MISSING_CONSTANT_IMPORT" not in rule_ids(check("gen.py", content))

    def test_local_declaration_is_reported_once(self, drifted_generator):
        violations = check("generators/dialog.py", drifted_generator)
        assert rule_ids(violations) == {"DRIFT.REDECLARED_SECTION_PADDING"}

    def test_attribute_access_and_strings_are_not_uses(self):
        content = 'x = layout.SECTION_PADDING\nname = "SECTION_GAP"\n'
        assert check("gen.py", content) == []

    def test_custom_constants_module(self):
        content = "from kumo.layout import SECTION_GAP\ny = SECTION_GAP\n"
        assert check("gen.py", content, constants_module="kumo.layout") == []
        violations = check("gen.py", content)
        assert "DRIFT.MISSING_CONSTANT_IMPORT" in rule_ids(violations)


class TestHardcodedValues:
    """Tests for hardcoded position, opacity and color rules."""

    def test_hardcoded_section_start(self):
        violations = check("generators/card.ts", "frame.x = 100;\nframe.y = 100;\n")
        assert "DRIFT.HARDCODED_SECTION_POSITION" in rule_ids(violations)

    def test_hardcoded_mode_gap(self):
        violations = check("generators/card.ts", "darkX = lightX + width + 50;\n")
        assert "DRIFT.HARDCODED_SECTION_POSITION" in rule_ids(violations)

    def test_section_layout_import_allows_numbers(self):
        content = (
            'import { SECTION_LAYOUT } from "./constants";\n'
            "frame.x = 100;\n"
        )
        assert check("src/card.ts", content) == []

    def test_hardcoded_opacity(self):
        violations = check("gen.py", "node.opacity = 0.5\n")
        assert "DRIFT.HARDCODED_OPACITY" in rule_ids(violations)
        assert check("gen.py", "node.opacity = 0.55\n") == []

    def test_hardcoded_rgb(self):
        content = 'fills = [{"type": "SOLID", "color": {"r": 0.6, "g": 0.6, "b": 0.6}}]\n'
        assert "DRIFT.HARDCODED_RGB" in rule_ids(check("gen.py", content))

    def test_rgb_with_colors_import(self):
        content = (
            "from design_sync.constants import COLORS\n"
            "color = {r: 0.6, g: 0.6, b: 0.6}\n"
        )
        assert check("gen.py", content) == []


class TestSoftRules:
    """Soft rules warn but never fail the check."""

    def test_hardcoded_shadow_is_soft(self):
        content = 'effects = [{"type": "DROP_SHADOW", "radius": 4, "visible": True}]\n'
        violations = check("gen.py", content)
        (violation,) = violations
        assert violation.rule_id == "DRIFT.HARDCODED_SHADOW"
        assert violation.severity == Severity.SOFT

    def test_shadow_read_from_theme_data(self):
        content = (
            "from design_sync.theme import load_theme_data\n"
            'effects = [{"type": "DROP_SHADOW", "radius": 4}]\n'
        )
        assert check("gen.py", content) == []

    def test_hardcoded_label_offset(self):
        violations = check("gen.py", "label.y = top + 8\n")
        assert rule_ids(violations) == {"DRIFT.HARDCODED_LABEL_OFFSET"}
        assert violations[0].severity == Severity.SOFT

    def test_missing_testable_exports(self):
        violations = check("generators/badge.py", "def draw():\n    pass\n")
        (violation,) = violations
        assert violation.rule_id == "DRIFT.MISSING_TESTABLE_EXPORTS"
        assert violation.line is None

    def test_testable_exports_present(self):
        assert check("generators/badge.py", "def get_badge_config():\n    return {}\n") == []
        assert check("generators/badge.ts", "export function getBadgeData() {}\n") == []

    def test_exports_rule_only_applies_to_generators(self):
        assert check("lib/util.py", "def draw():\n    pass\n") == []


class TestTestFileRules:
    """Rules that only apply to test files."""

    def test_full_radius_in_test(self):
        content = "def test_pill():\n    assert radius == 9999\n"
        assert rule_ids(check("tests/test_pill.py", content)) == {
            "DRIFT.TEST_HARDCODED_FULL_RADIUS"
        }

    def test_opacity_in_ts_test(self):
        content = "expect(node.opacity).toBe(0.5);\n"
        assert rule_ids(check("src/button.test.ts", content)) == {"DRIFT.TEST_HARDCODED_OPACITY"}

    def test_test_files_may_use_constants_with_import(self):
        content = (
            "from design_sync.constants import BORDER_RADIUS_FULL, OPACITY\n"
            "assert radius == 9999\nassert opacity == 0.5\n"
        )
        assert check("tests/test_pill.py", content) == []

    def test_test_files_may_redeclare(self):
        assert check("tests/test_layout.py", "SECTION_PADDING = 10\n") == []


class TestRuleConfiguration:
    """Tests for configure_rules and rule metadata."""

    def test_rule_ids_are_unique(self):
        ids = [rule.rule_id for rule in default_rules()]
        assert len(ids) == len(set(ids))
        assert all(re.fullmatch(r"DRIFT\.[A-Z_]+", rule_id) for rule_id in ids)

    def test_disable_rule(self):
        rules = configure_rules(default_rules(), disabled=["DRIFT.HARDCODED_OPACITY"])
        assert "DRIFT.HARDCODED_OPACITY" not in {r.rule_id for r in rules}

    def test_severity_override(self):
        rules = configure_rules(
            default_rules(), severity_overrides={"DRIFT.HARDCODED_RGB": "soft"}
        )
        (rgb,) = [r for r in rules if r.rule_id == "DRIFT.HARDCODED_RGB"]
        assert rgb.severity == Severity.SOFT

    def test_custom_rule(self):
        rule = DriftRule(
            rule_id="DRIFT.CUSTOM",
            detect_pattern=r"dashPattern\s*=\s*\[4,\s*4\]",
            message="Hardcoded dash pattern",
            remediation="Use DASH_PATTERN",
            required_import_pattern=import_pattern(["DASH_PATTERN"]),
        )
        assert len(rule.evaluate("gen.ts", "node.dashPattern = [4, 4];")) == 1
        assert rule.evaluate("gen.css", "node.dashPattern = [4, 4];") == []

    def test_matches_any(self):
        assert matches_any("a/b/test_x.py", ("test_*.py",))
        assert matches_any("pkg/generators/x.py", ("*generators/*.py",))
        assert not matches_any("pkg/lib/x.py", ("*generators/*.py",))
