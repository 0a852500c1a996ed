"""
Core types for the drift guard.

Rules are pure functions of a file's path and text. They return structured
``Violation`` objects; formatting lives in the reporter.
"""

import fnmatch
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import PurePath
from typing import Any, Protocol


class Severity(Enum):
    """Severity of a drift violation."""

    HARD = "hard"  # Fails the check, non-zero exit
    SOFT = "soft"  # Reported only

    def __lt__(self, other: "Severity") -> bool:
        order = [Severity.SOFT, Severity.HARD]
        return order.index(self) < order.index(other)


@dataclass(frozen=True)
class Violation:
    """One rule firing on one file."""

    rule_id: str
    file: str
    severity: Severity
    message: str
    remediation: str
    line: int | None = None

    @property
    def sort_key(self) -> tuple[str, int, str]:
        return (self.file, self.line or 0, self.rule_id)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "rule_id": self.rule_id,
            "file": self.file,
            "line": self.line,
            "severity": self.severity.value,
            "message": self.message,
            "remediation": self.remediation,
        }


@dataclass
class DriftReport:
    """Aggregated result of one drift check run."""

    violations: list[Violation] = field(default_factory=list)
    files_checked: int = 0
    rules_executed: int = 0
    execution_time_ms: float = 0.0

    @property
    def hard(self) -> list[Violation]:
        return [v for v in self.violations if v.severity == Severity.HARD]

    @property
    def soft(self) -> list[Violation]:
        return [v for v in self.violations if v.severity == Severity.SOFT]

    @property
    def has_hard(self) -> bool:
        return any(v.severity == Severity.HARD for v in self.violations)

    def get_violations_by_rule(self, rule_id: str) -> list[Violation]:
        return [v for v in self.violations if v.rule_id == rule_id]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "violations": [v.to_dict() for v in self.violations],
            "files_checked": self.files_checked,
            "rules_executed": self.rules_executed,
            "execution_time_ms": self.execution_time_ms,
            "summary": {
                "total": len(self.violations),
                "hard": len(self.hard),
                "soft": len(self.soft),
            },
        }


class FileRule(Protocol):
    """Anything the guard can evaluate against one file."""

    rule_id: str

    def evaluate(self, path: str, text: str) -> list[Violation]: ...


def matches_any(path: str, patterns: tuple[str, ...]) -> bool:
    """Match ``path`` against glob patterns by full posix path or file name."""
    posix = PurePath(path).as_posix()
    name = PurePath(path).name
    return any(
        fnmatch.fnmatch(posix, pattern) or fnmatch.fnmatch(name, pattern)
        for pattern in patterns
    )


def is_module_file(path: str, module_files: tuple[str, ...]) -> bool:
    """``path`` is one of ``module_files`` (posix paths), possibly under a prefix."""
    posix = PurePath(path).as_posix()
    return any(posix == f or posix.endswith(f"/{f}") for f in module_files)


def line_of(text: str, offset: int) -> int:
    """1-indexed line number of a character offset."""
    return text.count("\n", 0, offset) + 1


@dataclass(frozen=True)
class DriftRule:
    """A declarative pattern rule.

    The rule fires when ``detect_pattern`` matches (or does not match, when
    ``fires_when_absent`` is set), the file does not match
    ``required_import_pattern`` and is not one of the
    ``allowed_declaration_files`` (module paths such as
    ``design_sync/constants.py``). ``file_patterns`` limits which files the
    rule looks at.
    """

    rule_id: str
    detect_pattern: str
    message: str
    remediation: str
    severity: Severity = Severity.HARD
    required_import_pattern: str | None = None
    allowed_declaration_files: tuple[str, ...] = ()
    file_patterns: tuple[str, ...] = ("*.py", "*.ts", "*.tsx")
    exclude_patterns: tuple[str, ...] = ()
    fires_when_absent: bool = False

    def applies_to(self, path: str) -> bool:
        if is_module_file(path, self.allowed_declaration_files):
            return False
        if self.exclude_patterns and matches_any(path, self.exclude_patterns):
            return False
        return matches_any(path, self.file_patterns)

    def evaluate(self, path: str, text: str) -> list[Violation]:
        """Evaluate this rule against one file's text."""
        if not self.applies_to(path):
            return []
        if self.required_import_pattern and re.search(
            self.required_import_pattern, text, re.MULTILINE
        ):
            return []

        match = re.search(self.detect_pattern, text, re.MULTILINE)
        if self.fires_when_absent:
            if match:
                return []
            line = None
        else:
            if not match:
                return []
            line = line_of(text, match.start())

        return [
            Violation(
                rule_id=self.rule_id,
                file=path,
                line=line,
                severity=self.severity,
                message=self.message,
                remediation=self.remediation,
            )
        ]

    def with_severity(self, severity: Severity) -> "DriftRule":
        return replace(self, severity=severity)
