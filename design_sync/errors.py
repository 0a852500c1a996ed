"""Structured error types with recovery suggestions.

Every fatal failure in the pipeline is a ``DesignSyncError`` carrying a
human-readable message, a concrete remediation hint and optional details.
Lookup failures are *returned* as ``NotFoundError`` values instead of raised,
and unrecognized class tokens are recorded as ``ParseWarning`` records.
"""

from __future__ import annotations

import difflib
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Categories of pipeline errors for organization and handling."""

    CONFIGURATION = "configuration"  # Missing theme token, bad registry entry
    LAYOUT = "layout"  # Grid invariant violated
    DRIFT = "drift"  # Hard drift violations found
    FILE_SYSTEM = "file_system"  # Path issues, permissions


@dataclass
class DesignSyncError(Exception):
    """Base class for structured errors with recovery suggestions.

    Attributes:
        category: Error category for grouping.
        message: Human-readable error message.
        suggestion: Optional actionable recovery suggestion.
        details: Optional additional details dict.
        exit_code: Exit code to use when this error causes termination.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = field(default_factory=dict)
    exit_code: int = 1

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def format(self, use_color: bool = True) -> str:
        """Format the error for display.

        Args:
            use_color: Whether to include ANSI color codes.

        Returns:
            Formatted error string with suggestion if available.
        """
        red = "\033[91m" if use_color else ""
        cyan = "\033[96m" if use_color else ""
        dim = "\033[2m" if use_color else ""
        reset = "\033[0m" if use_color else ""

        lines = [f"{red}Error:{reset} {self.message}"]

        if self.suggestion:
            lines.append(f"{cyan}Suggestion:{reset} {self.suggestion}")

        if self.details:
            for key, value in self.details.items():
                lines.append(f"{dim}  {key}: {value}{reset}")

        return "\n".join(lines)

    def __str__(self) -> str:
        return self.format(use_color=False)


class ConfigError(DesignSyncError):
    """Missing or malformed theme token, registry entry or config file."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        expected: str | None = None,
        suggestion: str | None = None,
    ):
        details: dict[str, Any] = {}
        if source:
            details["source"] = source
        if expected:
            details["expected"] = expected
        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion=suggestion
            or "Check the source file for the expected token or shape",
            details=details or None,
            exit_code=1,
        )
        self.source = source
        self.expected = expected


class MissingTokenError(ConfigError):
    """An expected custom property is absent from the framework theme."""

    def __init__(self, token: str, source: str):
        super().__init__(
            message=f"Expected theme token {token} not found in {source}",
            source=source,
            expected=token,
            suggestion=(
                f"Declare {token} in the framework theme source; "
                "framework defaults are never silently substituted"
            ),
        )
        self.token = token


class InvalidTokenError(ConfigError):
    """A custom property exists but its value cannot be parsed."""

    def __init__(self, token: str, value: str, source: str, shape: str):
        super().__init__(
            message=f"Theme token {token} in {source} has unparseable value {value!r}",
            source=source,
            expected=f"{token}: <{shape}>",
            suggestion=f"Give {token} a {shape} value",
        )
        self.token = token
        self.value = value


class RegistryError(ConfigError):
    """A component descriptor failed schema validation."""

    def __init__(
        self,
        message: str,
        component: str | None = None,
        prop: str | None = None,
        source: str | None = None,
        suggestion: str | None = None,
    ):
        location = ".".join(part for part in (component, prop) if part)
        super().__init__(
            message=f"{location}: {message}" if location else message,
            source=source,
            expected="props.<axis>.{values, classes, descriptions, default}",
            suggestion=suggestion
            or "Fix the registry entry; a single invalid component fails the whole load",
        )
        self.component = component
        self.prop = prop


class LayoutInvariantError(DesignSyncError):
    """Computed grid geometry violates a layout invariant."""

    def __init__(self, message: str, component: str | None = None, **details: Any):
        if component:
            details["component"] = component
        super().__init__(
            category=ErrorCategory.LAYOUT,
            message=message,
            suggestion=(
                "This is a generator defect; check the measurer and the "
                "row/column track computation"
            ),
            details=details or None,
            exit_code=1,
        )


class DriftCheckFailed(DesignSyncError):
    """Raised at the CLI boundary when hard drift violations were found."""

    def __init__(self, hard_count: int):
        super().__init__(
            category=ErrorCategory.DRIFT,
            message=f"{hard_count} hard drift violation(s) found",
            suggestion="Import the centralized constants named in each violation",
            details=None,
            exit_code=1,
        )


@dataclass(frozen=True)
class NotFoundError:
    """Typed lookup failure for an unknown component name.

    Returned by ``ComponentRegistry.get`` instead of raising.
    """

    name: str
    available: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()

    @classmethod
    def for_name(cls, name: str, available: Iterable[str]) -> NotFoundError:
        names = tuple(available)
        close = tuple(difflib.get_close_matches(name, names, n=3, cutoff=0.6))
        return cls(name=name, available=names, suggestions=close)

    @property
    def message(self) -> str:
        text = f"Unknown component: {self.name}"
        if self.suggestions:
            text += f" (did you mean {', '.join(self.suggestions)}?)"
        return text

    def __bool__(self) -> bool:
        return False

    def to_error(self) -> ConfigError:
        """Promote to a fatal error for callers that must abort."""
        return ConfigError(
            self.message,
            source="registry",
            expected=self.name,
            suggestion=(
                f"Use one of: {', '.join(self.available)}"
                if self.available
                else "The registry is empty; check the registry path"
            ),
        )


@dataclass(frozen=True)
class ParseWarning:
    """An unrecognized or unresolvable class token, dropped by the parser."""

    token: str
    reason: str

    def __str__(self) -> str:
        return f"{self.token}: {self.reason}"
