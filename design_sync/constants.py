"""Centralized layout and styling constants.

Generators import these names instead of redeclaring the numbers; the drift
guard flags any file that hardcodes them. ``LayoutConstants`` bundles the
grid values into one immutable object that is passed by parameter, so tests
can substitute their own geometry.
"""

from dataclasses import asdict, dataclass, fields
from types import MappingProxyType
from typing import Any

# Padding inside a component section frame
SECTION_PADDING = 24

# Vertical gap between consecutive component sections
SECTION_GAP = 48

SECTION_LAYOUT = MappingProxyType(
    {
        "startX": 100,
        "startY": 100,
        "modeGap": 50,
        "titleHeight": 32,
    }
)

GRID_LAYOUT = MappingProxyType(
    {
        "gapX": 24,
        "gapY": 40,
        "headerRowHeight": 24,
        "labelColumnWidth": 120,
    }
)

# Offset between a label and the cell it annotates
LABEL_OFFSET = MappingProxyType({"sm": 4, "md": 8, "lg": 12})

OPACITY = MappingProxyType({"disabled": 0.5, "backdrop": 0.8, "muted": 0.6})

# Fallback RGB colors (0-1 channels) for nodes that cannot bind a token
COLORS = MappingProxyType(
    {
        "placeholder": MappingProxyType({"r": 0.6, "g": 0.6, "b": 0.6}),
        "fallbackWhite": MappingProxyType({"r": 1.0, "g": 1.0, "b": 1.0}),
        "spinnerStroke": MappingProxyType({"r": 0.4, "g": 0.4, "b": 0.4}),
    }
)

DASH_PATTERN = (4, 4)

# Radius value the framework uses for fully rounded corners
BORDER_RADIUS_FULL = 9999

# Average glyph width relative to font size, used to estimate label widths
CHAR_WIDTH_RATIO = 0.6

LABEL_FONT_SIZE = 11


@dataclass(frozen=True)
class LayoutConstants:
    """Grid and section geometry for one generation run."""

    section_padding: float = SECTION_PADDING
    section_gap: float = SECTION_GAP
    start_x: float = SECTION_LAYOUT["startX"]
    start_y: float = SECTION_LAYOUT["startY"]
    mode_gap: float = SECTION_LAYOUT["modeGap"]
    title_height: float = SECTION_LAYOUT["titleHeight"]
    gap_x: float = GRID_LAYOUT["gapX"]
    gap_y: float = GRID_LAYOUT["gapY"]
    header_row_height: float = GRID_LAYOUT["headerRowHeight"]
    label_column_width: float = GRID_LAYOUT["labelColumnWidth"]
    label_font_size: float = LABEL_FONT_SIZE
    char_width_ratio: float = CHAR_WIDTH_RATIO

    _CAMEL = MappingProxyType(
        {
            "section_padding": "sectionPadding",
            "section_gap": "sectionGap",
            "start_x": "startX",
            "start_y": "startY",
            "mode_gap": "modeGap",
            "title_height": "titleHeight",
            "gap_x": "gapX",
            "gap_y": "gapY",
            "header_row_height": "headerRowHeight",
            "label_column_width": "labelColumnWidth",
            "label_font_size": "labelFontSize",
            "char_width_ratio": "charWidthRatio",
        }
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a camelCase dictionary."""
        return {self._CAMEL[key]: value for key, value in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LayoutConstants":
        """Create from a camelCase dictionary; missing keys keep their defaults."""
        kwargs = {}
        for f in fields(cls):
            camel = cls._CAMEL[f.name]
            if camel in data:
                kwargs[f.name] = float(data[camel])
        return cls(**kwargs)
