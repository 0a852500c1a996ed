"""
Drift guard coordinator.

Evaluates pattern rules and registry sync rules over a set of files and
aggregates the violations into one report. Files are independent, so they
are checked concurrently; the report is sorted so output is deterministic.
"""

import time
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import replace
from pathlib import Path

from ..config import SyncConfig
from ..parser.class_parser import ClassParser
from ..registry.models import ComponentRegistry
from ..sync_logging import LogCategory, get_category_logger
from ..theme.snapshot import ThemeSnapshot
from .models import DriftReport, DriftRule, FileRule, Severity, Violation
from .registry_sync import SyncRule, build_sync_rules
from .rules import configure_rules, default_rules

logger = get_category_logger(LogCategory.DRIFT)

UNREADABLE_RULE_ID = "DRIFT.UNREADABLE_FILE"


class DriftGuard:
    """Runs drift rules over source files."""

    def __init__(
        self,
        rules: Sequence[DriftRule] | None = None,
        sync_rules: Sequence[SyncRule] = (),
        root: Path | None = None,
        max_workers: int = 8,
    ):
        self.rules: list[DriftRule] = list(default_rules() if rules is None else rules)
        self.sync_rules: list[SyncRule] = list(sync_rules)
        self.root = root
        self.max_workers = max(1, max_workers)

    @classmethod
    def from_config(
        cls,
        config: SyncConfig,
        snapshot: ThemeSnapshot | None = None,
        registry: ComponentRegistry | None = None,
        parser: ClassParser | None = None,
    ) -> "DriftGuard":
        """Build a guard from configuration.

        Registry sync rules are only built when a snapshot is supplied.
        """
        drift = config.drift
        rules = configure_rules(
            default_rules(drift.constants_module),
            disabled=drift.disabled_rules,
            severity_overrides=drift.severity_overrides,
        )
        sync_rules = [
            rule
            for rule in build_sync_rules(config, snapshot, registry, parser)
            if rule.rule_id not in drift.disabled_rules
        ]
        return cls(rules, sync_rules, root=config.root, max_workers=drift.max_workers)

    def collect_sources(self, patterns: Iterable[str]) -> list[Path]:
        """Expand glob patterns relative to the guard root."""
        root = self.root or Path.cwd()
        found: set[Path] = set()
        for pattern in patterns:
            found.update(path for path in root.glob(pattern) if path.is_file())
        return sorted(found)

    @property
    def all_rules(self) -> list[FileRule]:
        return [*self.rules, *self.sync_rules]

    def check(self, source_files: Iterable[Path | str]) -> DriftReport:
        """Check files and return the aggregated report.

        Every sync rule's target file is checked as well, whether or not it
        appears in ``source_files``; a missing target is a violation.
        """
        start_time = time.time()
        files: dict[Path, Path] = {}
        for path in map(Path, source_files):
            files.setdefault(path.resolve(), path)
        violations: list[Violation] = []

        for rule in self.sync_rules:
            if rule.target.exists():
                files.setdefault(rule.target.resolve(), rule.target)
            else:
                violations.append(rule.missing(self._display(rule.target)))

        ordered = sorted(files.values())
        if ordered:
            workers = min(self.max_workers, len(ordered))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                future_to_path = {
                    executor.submit(self._check_file, path): path for path in ordered
                }
                for future in as_completed(future_to_path):
                    violations.extend(future.result())

        violations.sort(key=lambda v: v.sort_key)
        report = DriftReport(
            violations=violations,
            files_checked=len(ordered),
            rules_executed=len(self.all_rules),
            execution_time_ms=(time.time() - start_time) * 1000,
        )
        logger.info(
            f"Drift check: {len(ordered)} files, {len(report.hard)} hard, "
            f"{len(report.soft)} soft violations",
            extra={"duration_ms": report.execution_time_ms},
        )
        return report

    def check_text(self, path: str, text: str) -> list[Violation]:
        """Evaluate every rule against one file's text."""
        violations: list[Violation] = []
        for rule in self.all_rules:
            violations.extend(rule.evaluate(path, text))
        return violations

    def _check_file(self, path: Path) -> list[Violation]:
        display = self._display(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Cannot read {display}: {e}", extra={"file_path": display})
            return [
                Violation(
                    rule_id=UNREADABLE_RULE_ID,
                    file=display,
                    severity=Severity.HARD,
                    message=f"Cannot read file: {e}",
                    remediation="Fix the file's permissions or encoding (UTF-8 expected)",
                )
            ]

        violations: list[Violation] = []
        for rule in self.rules:
            violations.extend(rule.evaluate(display, text))
        for rule in self.sync_rules:
            if rule.applies_to(str(path)):
                violations.extend(rule.evaluate(str(path), text))
        return [self._relabel(v, display) for v in violations]

    def _display(self, path: Path) -> str:
        if self.root is not None:
            resolved, root = path.resolve(), self.root.resolve()
            if resolved.is_relative_to(root):
                return resolved.relative_to(root).as_posix()
        return path.as_posix()

    @staticmethod
    def _relabel(violation: Violation, display: str) -> Violation:
        if violation.file == display:
            return violation
        return replace(violation, file=display)


def check_drift(
    source_files: Iterable[Path | str],
    rules: Sequence[DriftRule] | None = None,
    sync_rules: Sequence[SyncRule] = (),
) -> DriftReport:
    """Convenience function to run a drift check."""
    return DriftGuard(rules, sync_rules).check(source_files)
