"""
Registry sync rules.

These rules compare numbers embedded in generator sources (and the theme data
artifact) against values re-derived from the canonical inputs: the theme
snapshot and the component registry's class strings.
"""

import json
import math
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from ..config import SyncConfig, SyncEntry
from ..errors import ConfigError
from ..parser.class_parser import ClassParser
from ..registry.models import ComponentRegistry, value_key
from ..sync_logging import LogCategory, get_category_logger
from ..theme.snapshot import ThemeSnapshot
from .models import Severity, Violation, line_of

logger = get_category_logger(LogCategory.DRIFT)

NUMBER = r"-?\d+(?:\.\d+)?"
MAP_ENTRY_PATTERN = re.compile(rf"""["']?([\w.-]+)["']?\s*:\s*({NUMBER})\b""")


def _snake(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def _same(a: float, b: float) -> bool:
    return math.isclose(float(a), float(b), abs_tol=1e-6)


def extract_balanced_braces(content: str, start: int) -> str | None:
    """Extract content between balanced braces starting at ``start``."""
    if start >= len(content) or content[start] != "{":
        return None

    depth = 0
    in_string = False
    string_char = None

    for i in range(start, len(content)):
        char = content[i]

        if char in ('"', "'", "`") and (i == 0 or content[i - 1] != "\\"):
            if not in_string:
                in_string = True
                string_char = char
            elif char == string_char:
                in_string = False
                string_char = None
            continue

        if in_string:
            continue

        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return content[start : i + 1]

    return None


def find_assignment(text: str, name: str) -> re.Match[str] | None:
    """Find ``name = ...`` / ``const name: T = ...`` / ``name: ...`` in source text."""
    pattern = re.compile(
        rf"(?<![\w.]){re.escape(name)}\s*(?::\s*[^=\n{{]*?)?\s*[=:]\s*", re.MULTILINE
    )
    return pattern.search(text)


def extract_number_map(text: str, name: str) -> tuple[dict[str, float], int] | None:
    """Return the literal ``{key: number}`` map assigned to ``name`` and its line."""
    match = find_assignment(text, name)
    if not match:
        return None
    brace = text.find("{", match.end() - 1)
    if brace < 0 or text[match.end() : brace].strip():
        return None
    body = extract_balanced_braces(text, brace)
    if body is None:
        return None
    entries = {key: float(value) for key, value in MAP_ENTRY_PATTERN.findall(body[1:-1])}
    return entries, line_of(text, match.start())


class SyncRule(ABC):
    """A rule bound to one target file whose content must match derived values."""

    severity = Severity.HARD

    def __init__(self, rule_id: str, target: Path, remediation: str):
        self.rule_id = rule_id
        self.target = target
        self.remediation = remediation

    def applies_to(self, path: str) -> bool:
        return Path(path).resolve() == self.target.resolve()

    def evaluate(self, path: str, text: str) -> list[Violation]:
        """Compare the target file's text against derived values."""
        if not self.applies_to(path):
            return []
        return [
            Violation(
                rule_id=self.rule_id,
                file=path,
                line=line,
                severity=self.severity,
                message=message,
                remediation=self.remediation,
            )
            for line, message in self.compare(text)
        ]

    def missing(self, path: str) -> Violation:
        """Violation reported when the target file does not exist."""
        return Violation(
            rule_id=self.rule_id,
            file=path,
            severity=self.severity,
            message=f"{self.target.name} not found",
            remediation=self.remediation,
        )

    @abstractmethod
    def compare(self, text: str) -> list[tuple[int | None, str]]:
        """Return ``(line, message)`` pairs for each mismatch."""


class EmbeddedValueSyncRule(SyncRule):
    """A scalar embedded in a source must equal a theme snapshot value."""

    def __init__(self, target: Path, name: str, snapshot_path: str, expected: float):
        super().__init__(
            rule_id=f"SYNC.VALUE.{name}",
            target=target,
            remediation=(
                f"Set {name} to {expected:g} or read it from the theme data "
                f"({snapshot_path})"
            ),
        )
        self.name = name
        self.snapshot_path = snapshot_path
        self.expected = expected

    @classmethod
    def from_entry(
        cls, entry: SyncEntry, config: SyncConfig, snapshot: ThemeSnapshot
    ) -> "EmbeddedValueSyncRule":
        if not entry.snapshot_path:
            raise ConfigError(
                f"Sync entry {entry.name} needs a snapshotPath",
                source="drift.sync",
                expected="snapshotPath such as spacing.baseUnitPx",
            )
        try:
            expected = float(snapshot.lookup(entry.snapshot_path))
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(
                f"Sync entry {entry.name}: {entry.snapshot_path} is not a numeric theme value",
                source="drift.sync",
                expected="a path such as spacing.baseUnitPx or fontSize.base",
            ) from e
        return cls(
            target=config.resolve(entry.file),
            name=entry.name,
            snapshot_path=entry.snapshot_path,
            expected=expected,
        )

    def compare(self, text: str) -> list[tuple[int | None, str]]:
        match = find_assignment(text, self.name)
        value = re.match(NUMBER, text[match.end() :]) if match else None
        if not match or not value:
            return [(None, f"{self.name} is not assigned a numeric literal")]
        actual = float(value.group(0))
        if _same(actual, self.expected):
            return []
        return [
            (
                line_of(text, match.start()),
                f"{self.name} = {actual:g} but the theme snapshot "
                f"{self.snapshot_path} is {self.expected:g}",
            )
        ]


class EmbeddedMapSyncRule(SyncRule):
    """A literal ``{value: number}`` map must equal values parsed from the registry."""

    def __init__(self, target: Path, name: str, expected: Mapping[str, float], origin: str):
        super().__init__(
            rule_id=f"SYNC.MAP.{name}",
            target=target,
            remediation=(
                f"Update {name} to match {origin}, or derive it by parsing the "
                f"registry class strings"
            ),
        )
        self.name = name
        self.expected = dict(expected)
        self.origin = origin

    @classmethod
    def from_entry(
        cls,
        entry: SyncEntry,
        config: SyncConfig,
        registry: ComponentRegistry,
        parser: ClassParser,
    ) -> "EmbeddedMapSyncRule":
        """Derive the expected map from a registry prop's class strings."""
        if not (entry.component and entry.prop and entry.style_property):
            raise ConfigError(
                f"Sync entry {entry.name} needs component, prop and styleProperty",
                source="drift.sync",
            )
        descriptor = registry.require(entry.component)
        axis = descriptor.props.get(entry.prop)
        if axis is None:
            raise ConfigError(
                f"{entry.component} has no variant prop {entry.prop!r}",
                source="drift.sync",
                expected=", ".join(descriptor.props) or "a prop with values",
            )

        attribute = _snake(entry.style_property)
        expected: dict[str, float] = {}
        for value in axis.values:
            style = parser.parse(axis.class_for(value))
            derived = getattr(style, attribute, None)
            if isinstance(derived, (int, float)) and not isinstance(derived, bool):
                expected[value_key(value)] = float(derived)
        return cls(
            target=config.resolve(entry.file),
            name=entry.name,
            expected=expected,
            origin=f"{entry.component}.{entry.prop} {entry.style_property}",
        )

    def compare(self, text: str) -> list[tuple[int | None, str]]:
        extracted = extract_number_map(text, self.name)
        if extracted is None:
            return [(None, f"{self.name} is not assigned a literal map")]
        actual, line = extracted

        problems: list[str] = []
        for key, expected in self.expected.items():
            if key not in actual:
                problems.append(f"missing {key} (expected {expected:g})")
            elif not _same(actual[key], expected):
                problems.append(f"{key} = {actual[key]:g}, expected {expected:g}")
        for key in actual.keys() - self.expected.keys():
            problems.append(f"unexpected key {key}")
        if not problems:
            return []
        return [(line, f"{self.name} drifted from {self.origin}: " + "; ".join(problems))]


class ThemeDataSyncRule(SyncRule):
    """The theme data artifact must equal a freshly built snapshot."""

    SECTIONS = ("tailwind", "computed")

    def __init__(self, target: Path, snapshot: ThemeSnapshot):
        super().__init__(
            rule_id="SYNC.THEME_DATA",
            target=target,
            remediation="Regenerate it with 'design-sync build-theme'",
        )
        self.expected = snapshot.to_dict()

    def compare(self, text: str) -> list[tuple[int | None, str]]:
        try:
            data: Any = json.loads(text)
        except json.JSONDecodeError as e:
            return [(e.lineno, f"Theme data is not valid JSON: {e.msg}")]
        if not isinstance(data, dict):
            return [(None, "Theme data root is not an object")]

        stale = [
            section
            for section in self.SECTIONS
            if _normalize(data.get(section)) != _normalize(self.expected[section])
        ]
        if not stale:
            return []
        return [(None, f"Theme data is stale: {', '.join(stale)} differ from the CSS sources")]


def _normalize(value: Any) -> Any:
    """Normalize JSON values so ``4`` and ``4.0`` compare equal."""
    if isinstance(value, bool) or value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return round(float(value), 6)
    if isinstance(value, Mapping):
        return {key: _normalize(item) for key, item in value.items()}
    if isinstance(value, Sequence):
        return [_normalize(item) for item in value]
    return value


def build_sync_rules(
    config: SyncConfig,
    snapshot: ThemeSnapshot | None,
    registry: ComponentRegistry | None = None,
    parser: ClassParser | None = None,
) -> list[SyncRule]:
    """Build the configured registry-sync rules.

    Raises:
        ConfigError: If an entry is incomplete or names an unknown prop.
    """
    rules: list[SyncRule] = []
    if snapshot is None:
        return rules

    if config.drift.check_theme_data:
        rules.append(ThemeDataSyncRule(config.resolve(config.paths.theme_data), snapshot))

    for entry in config.drift.sync:
        if entry.kind == "value":
            rules.append(EmbeddedValueSyncRule.from_entry(entry, config, snapshot))
        elif entry.kind == "map":
            if registry is None:
                raise ConfigError(
                    f"Sync entry {entry.name} needs the component registry",
                    source="drift.sync",
                )
            rules.append(
                EmbeddedMapSyncRule.from_entry(
                    entry, config, registry, parser or ClassParser(snapshot, config.parser)
                )
            )
        else:
            raise ConfigError(
                f"Unknown sync entry kind {entry.kind!r} for {entry.name}",
                source="drift.sync",
                expected="map or value",
            )
    logger.debug(f"Built {len(rules)} registry sync rules")
    return rules
