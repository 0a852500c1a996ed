"""Output reporters for drift check results.

Detection lives in the guard; these classes only format a ``DriftReport``.
"""

import json
import sys
from typing import Any, TextIO

from .models import DriftReport, Severity, Violation


class TextReporter:
    """Human-readable reporter with optional color.

    Format: file:line rule_id message

    Example output:
        generators/dialog.py:12 DRIFT.REDECLARED_SECTION_PADDING Redeclares ...
          -> Remove the local declaration and add `from design_sync.constants ...`

        1 violation(s) in 4 file(s) (1 hard)
    """

    COLORS = {
        Severity.HARD: "\033[0;31m",  # Red
        Severity.SOFT: "\033[1;33m",  # Yellow
    }
    RESET = "\033[0m"
    DIM = "\033[2m"

    def __init__(self, stream: TextIO = sys.stderr, use_color: bool | None = None):
        self.stream = stream
        if use_color is None:
            self.use_color = hasattr(stream, "isatty") and stream.isatty()
        else:
            self.use_color = use_color

    def report(self, report: DriftReport) -> None:
        """Write every violation followed by a summary line."""
        for violation in report.violations:
            self._report_violation(violation)
        self._print_summary(report)

    def _report_violation(self, violation: Violation) -> None:
        location = violation.file
        if violation.line is not None:
            location = f"{location}:{violation.line}"

        color = self.COLORS.get(violation.severity, "") if self.use_color else ""
        reset = self.RESET if self.use_color else ""
        dim = self.DIM if self.use_color else ""

        print(
            f"{color}{location} {violation.rule_id}{reset} {violation.message}",
            file=self.stream,
        )
        print(f"  {dim}-> {violation.remediation}{reset}", file=self.stream)

    def _print_summary(self, report: DriftReport) -> None:
        total = len(report.violations)
        if total == 0:
            summary = f"\nNo drift found in {report.files_checked} file(s)"
        else:
            summary = f"\n{total} violation(s) in {report.files_checked} file(s)"
            if report.hard:
                summary += f" ({len(report.hard)} hard)"
        print(summary, file=self.stream)


class JSONReporter:
    """JSON reporter for CI consumption.

    Output format:
    {
        "decision": "pass" | "fail",
        "reason": "summary",
        "violations": [...],
        "files_checked": int,
        "counts": {"hard": int, "soft": int}
    }
    """

    def __init__(self, stream: TextIO = sys.stdout):
        self.stream = stream

    def report(self, report: DriftReport) -> dict[str, Any]:
        """Write the report as JSON and return the written dictionary."""
        output = {
            "decision": "fail" if report.has_hard else "pass",
            "reason": self._build_reason(report),
            "violations": [v.to_dict() for v in report.violations],
            "files_checked": report.files_checked,
            "execution_time_ms": report.execution_time_ms,
            "counts": {"hard": len(report.hard), "soft": len(report.soft)},
        }
        json.dump(output, self.stream, indent=2)
        self.stream.write("\n")
        return output

    def _build_reason(self, report: DriftReport) -> str:
        if not report.has_hard:
            if report.soft:
                return f"No hard drift ({len(report.soft)} soft)"
            return "No drift"

        hard_rules = list(dict.fromkeys(v.rule_id for v in report.hard))
        if len(hard_rules) == 1:
            return f"Drift: {hard_rules[0]} violation"
        elif len(hard_rules) <= 3:
            return f"Drift: {len(hard_rules)} rule violations ({', '.join(hard_rules)})"
        return f"Drift: {len(hard_rules)} rule violations ({', '.join(hard_rules[:3])}...)"


def get_reporter(output_format: str, stream: TextIO | None = None) -> TextReporter | JSONReporter:
    """Reporter for ``text`` or ``json`` output."""
    if output_format == "json":
        return JSONReporter(stream or sys.stdout)
    return TextReporter(stream or sys.stdout)
