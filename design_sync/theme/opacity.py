"""Opacity modifier extraction from component sources.

Finds utility tokens such as ``bg-kumo-brand/70`` or ``hover:text-danger/50``
so an opacity variable can be defined for every token/opacity pair actually
used by the library.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

OPACITY_MODIFIER_PATTERN = re.compile(
    r"(?<![\w-])(?:[\w-]+:)*!?(bg|text|border|ring)-([a-zA-Z][\w-]*)/(\d{1,3})(?![\w.])"
)


@dataclass(frozen=True)
class OpacityModifier:
    """One token/opacity pair, e.g. ``kumo-brand`` at 70%."""

    token: str
    opacity: int
    utility: str

    @property
    def variable_name(self) -> str:
        return f"opacity-{self.token}-{self.opacity}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "token": self.token,
            "opacity": self.opacity,
            "utility": self.utility,
            "variableName": self.variable_name,
        }


def extract_opacity_modifiers(source_code: str) -> list[OpacityModifier]:
    """Return unique opacity modifiers in order of first appearance."""
    modifiers: list[OpacityModifier] = []
    seen: set[str] = set()
    for match in OPACITY_MODIFIER_PATTERN.finditer(source_code):
        utility, token, opacity_text = match.groups()
        opacity = int(opacity_text)
        if opacity > 100:
            continue
        modifier = OpacityModifier(token=token, opacity=opacity, utility=utility)
        if modifier.variable_name in seen:
            continue
        seen.add(modifier.variable_name)
        modifiers.append(modifier)
    return modifiers


def extract_opacity_modifiers_from_sources(sources: Iterable[str]) -> list[OpacityModifier]:
    """Merge the modifiers of several sources, sorted by token then opacity."""
    merged: dict[str, OpacityModifier] = {}
    for source_code in sources:
        for modifier in extract_opacity_modifiers(source_code):
            merged.setdefault(modifier.variable_name, modifier)
    return sorted(merged.values(), key=lambda m: (m.token, m.opacity))
