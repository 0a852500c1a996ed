"""Variant cell and grid track models."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ..parser.style import ParsedStyle
from ..registry.models import AxisValue, value_key

ROOT_ELEMENT = "root"


@dataclass(frozen=True)
class Extent:
    """Rendered size of a cell, in px."""

    width: float
    height: float


@dataclass(frozen=True)
class Layout:
    """One grid track (a row or a column)."""

    index: int
    offset: float
    size: float
    label: str

    @property
    def end(self) -> float:
        return self.offset + self.size

    def to_dict(self) -> dict[str, Any]:
        return {"index": self.index, "offset": self.offset, "size": self.size, "label": self.label}


@dataclass(frozen=True)
class VariantCell:
    """One concrete axis-value combination with its style and grid position.

    ``x``/``y`` are relative to the grid origin of a mode section.
    """

    values: Mapping[str, AxisValue]
    styles: Mapping[str, ParsedStyle]
    row: int
    col: int
    row_label: str
    col_label: str
    extent: Extent
    row_height: float = 0.0
    col_width: float = 0.0
    x: float = 0.0
    y: float = 0.0
    warnings: tuple[str, ...] = field(default=(), compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))
        object.__setattr__(self, "styles", MappingProxyType(dict(self.styles)))

    @property
    def key(self) -> tuple[str, ...]:
        """Value keys in axis declaration order."""
        return tuple(value_key(v) for v in self.values.values())

    @property
    def name(self) -> str:
        """Variant name in ``axis=value, axis=value`` form."""
        return ", ".join(f"{axis}={value_key(v)}" for axis, v in self.values.items())

    @property
    def root_style(self) -> ParsedStyle:
        return self.styles[ROOT_ELEMENT]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "row": self.row,
            "col": self.col,
            "x": self.x,
            "y": self.y,
            "width": self.extent.width,
            "height": self.extent.height,
            "rowHeight": self.row_height,
            "colWidth": self.col_width,
            "styles": {element: style.to_dict() for element, style in self.styles.items()},
        }
