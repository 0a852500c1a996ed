"""
Default drift rules.

Each rule guards one centralized constant or family of constants: a
generator that hardcodes the number instead of importing the name will
silently drift when the constant changes. Patterns accept both Python and
TypeScript sources.
"""

import re
from collections.abc import Iterable, Sequence

from ..sync_logging import LogCategory, get_category_logger
from .models import DriftRule, Severity

logger = get_category_logger(LogCategory.DRIFT)

DEFAULT_CONSTANTS_MODULE = "design_sync.constants"

TEST_FILES = ("test_*.py", "*_test.py", "*.test.ts", "*.test.tsx")

CENTRALIZED_NAMES = ("SECTION_PADDING", "SECTION_GAP")


def import_pattern(names: Sequence[str], module: str = DEFAULT_CONSTANTS_MODULE) -> str:
    """Regex matching an import of any of ``names`` from ``module``.

    Python absolute and relative imports (parenthesized or not) and
    TypeScript named imports from a path ending in the module's last
    component all count.
    """
    leaf = re.escape(module.rsplit(".", 1)[-1])
    alternatives = "|".join(re.escape(name) for name in names)
    python = (
        rf"from\s+(?:{re.escape(module)}|\.+(?:[\w.]+\.)?{leaf})\s+import\s+"
        rf"(?:\([^)]*?|[^\n(]*?)\b(?:{alternatives})\b"
    )
    typescript = (
        rf"import\s*(?:type\s+)?\{{[^}}]*\b(?:{alternatives})\b[^}}]*\}}\s*"
        rf"from\s*[\"'][^\"']*\b{leaf}[\"']"
    )
    return f"(?:{python}|{typescript})"


def declaration_pattern(name: str) -> str:
    """Regex matching a module-level assignment or const declaration of ``name``."""
    return (
        rf"^[ \t]*(?:export\s+)?(?:(?:var|const|let)\s+)?{re.escape(name)}"
        rf"\s*(?::[^=\n]*)?=(?!=)"
    )


def usage_pattern(names: Sequence[str]) -> str:
    """Regex matching a bare identifier use, not attribute access or a string."""
    alternatives = "|".join(re.escape(name) for name in names)
    return rf"(?<![\w\"'.])(?:{alternatives})(?![\w\"'])"


def default_rules(constants_module: str = DEFAULT_CONSTANTS_MODULE) -> list[DriftRule]:
    """Build the default rule set for a centralized constants module."""
    module_path = constants_module.replace(".", "/")
    declaration_files = (f"{module_path}.py", f"{module_path}.ts")
    uses = " or ".join(CENTRALIZED_NAMES)
    imports = ", ".join(sorted(CENTRALIZED_NAMES))

    rules = [
        DriftRule(
            rule_id=f"DRIFT.REDECLARED_{name}",
            detect_pattern=declaration_pattern(name),
            message=f"Redeclares {name}; import it from {constants_module} instead",
            remediation=(
                f"Remove the local declaration and add "
                f"`from {constants_module} import {name}`"
            ),
            allowed_declaration_files=declaration_files,
            exclude_patterns=TEST_FILES,
        )
        for name in CENTRALIZED_NAMES
    ]

    rules.extend(
        [
            DriftRule(
                rule_id="DRIFT.MISSING_CONSTANT_IMPORT",
                detect_pattern=usage_pattern(CENTRALIZED_NAMES),
                # A local declaration is already reported by DRIFT.REDECLARED_*
                required_import_pattern="|".join(
                    [import_pattern(CENTRALIZED_NAMES, constants_module)]
                    + [declaration_pattern(name) for name in CENTRALIZED_NAMES]
                ),
                message=f"Uses {uses} without importing from {constants_module}",
                remediation=f"Add `from {constants_module} import {imports}`",
                allowed_declaration_files=declaration_files,
                exclude_patterns=TEST_FILES,
            ),
            DriftRule(
                rule_id="DRIFT.HARDCODED_SECTION_POSITION",
                detect_pattern=r"\.x\s*=\s*100\b|\.y\s*=\s*100\b|\+\s*50\b(?!\s*%|\.\d)",
                required_import_pattern=import_pattern(["SECTION_LAYOUT"], constants_module),
                message="Hardcoded section start position or mode gap",
                remediation=(
                    f"Use SECTION_LAYOUT['startX'], SECTION_LAYOUT['startY'] and "
                    f"SECTION_LAYOUT['modeGap'] from {constants_module}"
                ),
                allowed_declaration_files=declaration_files,
                exclude_patterns=TEST_FILES,
            ),
            DriftRule(
                rule_id="DRIFT.HARDCODED_OPACITY",
                detect_pattern=r"opacity[\"']?\s*[:=]\s*0\.5\b",
                required_import_pattern=import_pattern(["OPACITY"], constants_module),
                message="Hardcoded opacity 0.5",
                remediation=f"Use OPACITY['disabled'] from {constants_module}",
                allowed_declaration_files=declaration_files,
                exclude_patterns=TEST_FILES,
            ),
            DriftRule(
                rule_id="DRIFT.HARDCODED_RGB",
                detect_pattern=(
                    r"\{\s*[\"']?r[\"']?\s*:\s*0\.[0-9]+\s*,"
                    r"\s*[\"']?g[\"']?\s*:\s*0\.[0-9]+\s*,"
                    r"\s*[\"']?b[\"']?\s*:\s*0\.[0-9]+\s*\}"
                ),
                required_import_pattern=import_pattern(["COLORS"], constants_module),
                message="Hardcoded RGB color object",
                remediation=(
                    f"Bind a theme token, or use a COLORS entry from {constants_module}"
                ),
                allowed_declaration_files=declaration_files,
                exclude_patterns=TEST_FILES,
            ),
            DriftRule(
                rule_id="DRIFT.HARDCODED_SHADOW",
                detect_pattern=(
                    r"[\"']?type[\"']?\s*:\s*[\"']DROP_SHADOW[\"'][^}]*"
                    r"(?:radius|blur)[\"']?\s*:\s*\d+"
                ),
                required_import_pattern=r"\b(?:load_theme_data|ThemeSnapshot|themeData)\b",
                message="Hardcoded shadow effect",
                remediation=(
                    "Read shadow layers from the theme snapshot "
                    "(design_sync.theme.load_theme_data)"
                ),
                severity=Severity.SOFT,
                allowed_declaration_files=declaration_files,
                exclude_patterns=TEST_FILES,
            ),
            DriftRule(
                rule_id="DRIFT.HARDCODED_LABEL_OFFSET",
                detect_pattern=r"label.*\.y\s*=\s*\w+\s*\+\s*(?:4|8|12)\b",
                required_import_pattern=import_pattern(["LABEL_OFFSET"], constants_module),
                message="Hardcoded label offset",
                remediation=f"Use LABEL_OFFSET['sm'|'md'|'lg'] from {constants_module}",
                severity=Severity.SOFT,
                allowed_declaration_files=declaration_files,
                exclude_patterns=TEST_FILES,
            ),
            DriftRule(
                rule_id="DRIFT.MISSING_TESTABLE_EXPORTS",
                detect_pattern=(
                    r"export\s+function\s+get\w+(?:Config|Data|Styles)\b"
                    r"|^def\s+get_\w+_(?:config|data|styles)\s*\("
                ),
                message="Generator has no testable get_*_config/get_*_data export",
                remediation=(
                    "Expose the values the generator draws with through a "
                    "get_<name>_config() or get_<name>_data() function"
                ),
                severity=Severity.SOFT,
                file_patterns=("*generators/*.py", "*generators/*.ts"),
                exclude_patterns=(*TEST_FILES, "__init__.py", "index.ts"),
                fires_when_absent=True,
            ),
            DriftRule(
                rule_id="DRIFT.TEST_HARDCODED_FULL_RADIUS",
                detect_pattern=r"(?<![\w.])9999(?![\w.])",
                required_import_pattern=import_pattern(
                    ["BORDER_RADIUS_FULL"], constants_module
                ),
                message="Test hardcodes the full border radius 9999",
                remediation=f"Import BORDER_RADIUS_FULL from {constants_module}",
                file_patterns=TEST_FILES,
            ),
            DriftRule(
                rule_id="DRIFT.TEST_HARDCODED_OPACITY",
                detect_pattern=r"(?:toBe|toEqual|==|opacity[\"']?\s*[:=])\s*\(?\s*0\.5\b",
                required_import_pattern=import_pattern(["OPACITY"], constants_module),
                message="Test hardcodes opacity 0.5",
                remediation=f"Compare against OPACITY['disabled'] from {constants_module}",
                file_patterns=TEST_FILES,
            ),
        ]
    )
    return rules


def configure_rules(
    rules: Iterable[DriftRule],
    disabled: Iterable[str] = (),
    severity_overrides: dict[str, str] | None = None,
) -> list[DriftRule]:
    """Drop disabled rules and apply severity overrides by rule id."""
    disabled_ids = set(disabled)
    overrides = severity_overrides or {}
    configured: list[DriftRule] = []
    for rule in rules:
        if rule.rule_id in disabled_ids:
            logger.debug(f"Rule {rule.rule_id} disabled by configuration")
            continue
        if rule.rule_id in overrides:
            rule = rule.with_severity(Severity(overrides[rule.rule_id]))
        configured.append(rule)
    return configured
