"""Utility-class parser settings."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ParserConfig:
    """Utility-class parser settings."""

    fill_variable_prefix: str = "color-"
    stroke_variable_prefix: str = "color-"
    text_variable_prefix: str = "text-color-"
    # Only <prefix>-<namespace>-<name> colors resolve to variable references
    color_namespaces: list[str] = field(default_factory=lambda: ["kumo"])
    no_fill_keywords: list[str] = field(
        default_factory=lambda: ["transparent", "inherit", "none"]
    )
    white_text_keywords: list[str] = field(default_factory=lambda: ["white"])
    state_variants: list[str] = field(
        default_factory=lambda: ["hover", "focus", "active", "disabled", "pressed"]
    )
    root_font_size_px: float = 16.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "fillVariablePrefix": self.fill_variable_prefix,
            "strokeVariablePrefix": self.stroke_variable_prefix,
            "textVariablePrefix": self.text_variable_prefix,
            "colorNamespaces": self.color_namespaces,
            "noFillKeywords": self.no_fill_keywords,
            "whiteTextKeywords": self.white_text_keywords,
            "stateVariants": self.state_variants,
            "rootFontSizePx": self.root_font_size_px,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ParserConfig":
        """Create from dictionary."""
        defaults = cls()
        return cls(
            fill_variable_prefix=data.get(
                "fillVariablePrefix", defaults.fill_variable_prefix
            ),
            stroke_variable_prefix=data.get(
                "strokeVariablePrefix", defaults.stroke_variable_prefix
            ),
            text_variable_prefix=data.get(
                "textVariablePrefix", defaults.text_variable_prefix
            ),
            color_namespaces=data.get("colorNamespaces", defaults.color_namespaces),
            no_fill_keywords=data.get("noFillKeywords", defaults.no_fill_keywords),
            white_text_keywords=data.get(
                "whiteTextKeywords", defaults.white_text_keywords
            ),
            state_variants=data.get("stateVariants", defaults.state_variants),
            root_font_size_px=float(
                data.get("rootFontSizePx", defaults.root_font_size_px)
            ),
        )
