"""Drift guard.

Main components:
- models: DriftRule, Violation, DriftReport, Severity
- rules: the default centralized-constant rule set
- registry_sync: rules comparing embedded values to the snapshot and registry
- guard: DriftGuard, the parallel file checker
- reporter: text and JSON output
"""

from .guard import DriftGuard, check_drift
from .models import DriftReport, DriftRule, Severity, Violation
from .registry_sync import (
    EmbeddedMapSyncRule,
    EmbeddedValueSyncRule,
    SyncRule,
    ThemeDataSyncRule,
    build_sync_rules,
)
from .reporter import JSONReporter, TextReporter, get_reporter
from .rules import configure_rules, default_rules, import_pattern

__all__ = [
    "DriftGuard",
    "DriftReport",
    "DriftRule",
    "EmbeddedMapSyncRule",
    "EmbeddedValueSyncRule",
    "JSONReporter",
    "Severity",
    "SyncRule",
    "TextReporter",
    "ThemeDataSyncRule",
    "Violation",
    "build_sync_rules",
    "check_drift",
    "configure_rules",
    "default_rules",
    "get_reporter",
    "import_pattern",
]
