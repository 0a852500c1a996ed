"""Variant matrix generation.

Main components:
- expand: Cartesian product and mixed-radix row/column assignment
- layout: per-track maxima grid sizing, measurer protocol, invariant checks
- modes: light/dark section replication
- generator: VariantMatrixGenerator tying it together
"""

from .cells import Extent, Layout, VariantCell
from .expand import AxisAssignment, assign_axes, cartesian_product
from .generator import MatrixResult, VariantMatrixGenerator, expand
from .layout import CellMeasurer, Grid, StyleExtentMeasurer, compute_grid, verify_grid
from .modes import ModeSection, replicate_modes, verify_sections

__all__ = [
    "AxisAssignment",
    "CellMeasurer",
    "Extent",
    "Grid",
    "Layout",
    "MatrixResult",
    "ModeSection",
    "StyleExtentMeasurer",
    "VariantCell",
    "VariantMatrixGenerator",
    "assign_axes",
    "cartesian_product",
    "compute_grid",
    "expand",
    "replicate_modes",
    "verify_grid",
    "verify_sections",
]
