"""Variant matrix generator.

Expands a component's prop axes into the full Cartesian product of cells,
resolves each cell's styles through the class parser, lays the cells into a
non-uniform grid and replicates that grid once per display mode.
"""

import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any

from ..constants import LayoutConstants
from ..parser.class_parser import ClassParser
from ..parser.style import ParsedStyle, camel_case
from ..registry.models import AxisValue, ComponentDescriptor
from ..sync_logging import LogCategory, get_category_logger
from ..theme.snapshot import ThemeSnapshot
from .cells import ROOT_ELEMENT, Layout, VariantCell
from .expand import (
    AxisAssignment,
    assign_axes,
    cartesian_product,
    mixed_radix_index,
    track_label,
    track_labels,
)
from .layout import CellMeasurer, StyleExtentMeasurer, compute_grid, verify_grid
from .modes import ModeSection, replicate_modes, verify_sections

logger = get_category_logger(LogCategory.MATRIX)

DEFAULT_MODES = ("light", "dark")

# ParsedStyle fields a registry "styling" entry may supply, keyed by camelCase
STYLING_FIELDS = {
    camel_case(name): name
    for name in (
        "width",
        "height",
        "min_width",
        "min_height",
        "max_width",
        "max_height",
        "border_radius",
        "padding",
        "padding_x",
        "padding_y",
        "gap",
        "font_size",
        "stroke_weight",
        "opacity",
    )
}


@dataclass(frozen=True)
class MatrixResult:
    """Cells, tracks and mode sections for one component."""

    component: str
    cells: tuple[VariantCell, ...]
    rows: tuple[Layout, ...]
    cols: tuple[Layout, ...]
    sections: tuple[ModeSection, ...]
    assignment: AxisAssignment
    grid_width: float
    grid_height: float

    @property
    def width(self) -> float:
        """Horizontal extent from the first section to the end of the last."""
        if not self.sections:
            return 0.0
        return self.sections[-1].x + self.sections[-1].width - self.sections[0].x

    @property
    def height(self) -> float:
        return max((section.height for section in self.sections), default=0.0)

    def cell_at(self, row: int, col: int) -> VariantCell:
        return self.cells[row * len(self.cols) + col]

    def to_dict(self) -> dict[str, Any]:
        return {
            "component": self.component,
            "rowAxes": list(self.assignment.row_axes),
            "colAxes": list(self.assignment.col_axes),
            "rows": [row.to_dict() for row in self.rows],
            "cols": [col.to_dict() for col in self.cols],
            "sections": [section.to_dict() for section in self.sections],
            "cells": [cell.to_dict() for cell in self.cells],
        }


class VariantMatrixGenerator:
    """Builds variant matrices for registry components."""

    def __init__(
        self,
        snapshot: ThemeSnapshot,
        parser: ClassParser | None = None,
        constants: LayoutConstants | None = None,
        measurer: CellMeasurer | None = None,
        modes: Sequence[str] = DEFAULT_MODES,
        row_axes: Mapping[str, Sequence[str]] | None = None,
    ):
        self.snapshot = snapshot
        self.parser = parser or ClassParser(snapshot)
        self.constants = constants or LayoutConstants()
        self.measurer = measurer or StyleExtentMeasurer(self.constants)
        self.modes = tuple(modes)
        self.row_axes = dict(row_axes or {})

    def expand(self, descriptor: ComponentDescriptor) -> MatrixResult:
        """Expand, lay out and replicate one component's variant matrix.

        Raises:
            ConfigError: If configured row axes do not exist on the component.
            LayoutInvariantError: If the computed grid violates an invariant.
        """
        start = time.perf_counter()
        assignment = assign_axes(descriptor, self.row_axes.get(descriptor.name))
        row_labels = track_labels(descriptor, assignment.row_axes)
        col_labels = track_labels(descriptor, assignment.col_axes)

        cells = [
            self._build_cell(descriptor, assignment, combination)
            for combination in cartesian_product(descriptor.axes)
        ]
        # Row-major order so cell_at() can index directly
        cells.sort(key=lambda cell: (cell.row, cell.col))

        grid = compute_grid(cells, row_labels, col_labels, self.constants)
        verify_grid(grid, component=descriptor.name)

        sections = replicate_modes(grid, self.modes, self.constants)
        verify_sections(sections, self.constants, component=descriptor.name)

        logger.debug(
            f"Expanded {descriptor.name}: {len(grid.cells)} cells in "
            f"{len(grid.rows)}x{len(grid.cols)} grid, {len(sections)} mode sections",
            extra={
                "component": descriptor.name,
                "cell_count": len(grid.cells),
                "duration_ms": round((time.perf_counter() - start) * 1000, 3),
            },
        )
        return MatrixResult(
            component=descriptor.name,
            cells=grid.cells,
            rows=grid.rows,
            cols=grid.cols,
            sections=sections,
            assignment=assignment,
            grid_width=grid.width,
            grid_height=grid.height,
        )

    def _build_cell(
        self,
        descriptor: ComponentDescriptor,
        assignment: AxisAssignment,
        combination: Mapping[str, AxisValue],
    ) -> VariantCell:
        styles, warnings = self._resolve_styles(descriptor, combination)
        extent = self.measurer.measure(styles, descriptor.name)
        return VariantCell(
            values=combination,
            styles=styles,
            row=mixed_radix_index(descriptor, assignment.row_axes, combination),
            col=mixed_radix_index(descriptor, assignment.col_axes, combination),
            row_label=track_label(assignment.row_axes, combination),
            col_label=track_label(assignment.col_axes, combination),
            extent=extent,
            warnings=warnings,
        )

    def _resolve_styles(
        self, descriptor: ComponentDescriptor, combination: Mapping[str, AxisValue]
    ) -> tuple[dict[str, ParsedStyle], tuple[str, ...]]:
        class_strings = [descriptor.base_classes or ""]
        class_strings.extend(
            descriptor.props[axis].class_for(value) for axis, value in combination.items()
        )
        result = self.parser.parse_with_warnings(" ".join(s for s in class_strings if s))
        root = _apply_styling(result.style, descriptor.styling)
        styles = {ROOT_ELEMENT: root}
        warnings = [str(w) for w in result.warnings]

        for key, sub in descriptor.sub_components.items():
            if not sub.base_classes:
                continue
            sub_result = self.parser.parse_with_warnings(sub.base_classes)
            styles[key] = sub_result.style
            warnings.extend(f"{key}: {w}" for w in sub_result.warnings)
        return styles, tuple(warnings)


def _apply_styling(style: ParsedStyle, styling: Mapping[str, Any]) -> ParsedStyle:
    """Fill numeric fields the class strings left unset from ``styling``."""
    updates: dict[str, Any] = {}
    for key, value in styling.items():
        field_name = STYLING_FIELDS.get(key)
        if field_name is None or isinstance(value, bool):
            continue
        if not isinstance(value, (int, float)):
            continue
        if getattr(style, field_name) is None:
            updates[field_name] = value
    return replace(style, **updates) if updates else style


def expand(
    descriptor: ComponentDescriptor, snapshot: ThemeSnapshot, **kwargs: Any
) -> MatrixResult:
    """Expand one component with a throwaway generator."""
    return VariantMatrixGenerator(snapshot, **kwargs).expand(descriptor)
