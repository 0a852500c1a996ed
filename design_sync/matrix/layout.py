"""Non-uniform grid layout for variant cells.

Each row is as tall as its tallest cell and each column as wide as its
widest cell. Tracks start after the header row and the label column and are
separated by the configured gaps. ``verify_grid`` re-checks every invariant
and raises ``LayoutInvariantError`` instead of letting a bad grid through.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Protocol

from ..constants import LayoutConstants
from ..errors import LayoutInvariantError
from ..parser.style import ParsedStyle
from .cells import ROOT_ELEMENT, Extent, Layout, VariantCell

# Height of a single text line when no font size resolves
DEFAULT_LINE_HEIGHT = 20.0
LINE_HEIGHT_RATIO = 1.5


class CellMeasurer(Protocol):
    """Estimates the rendered extent of a cell."""

    def measure(self, styles: Mapping[str, ParsedStyle], text: str) -> Extent:
        ...


class StyleExtentMeasurer:
    """Measures cells from their parsed styles.

    Explicit ``width``/``height`` win; otherwise the extent is the label text
    plus padding and border, clamped by min/max sizes. Sub-elements stack
    vertically below the root element, separated by the root's vertical gap.
    """

    def __init__(self, constants: LayoutConstants | None = None):
        self.constants = constants or LayoutConstants()

    def measure(self, styles: Mapping[str, ParsedStyle], text: str) -> Extent:
        root = styles.get(ROOT_ELEMENT) or ParsedStyle()
        width, height = self._measure_element(root, text)

        gap = root.resolved_gap()["y"] or 0.0
        for element, style in styles.items():
            if element == ROOT_ELEMENT:
                continue
            sub_width, sub_height = self._measure_element(style, element)
            width = max(width, sub_width)
            height += gap + sub_height
        return Extent(width=round(width, 3), height=round(height, 3))

    def _measure_element(self, style: ParsedStyle, text: str) -> tuple[float, float]:
        padding = style.resolved_padding()
        border = (style.stroke_weight or 0.0) if style.has_border else 0.0
        font_size = style.font_size or self.constants.label_font_size

        if style.width is not None:
            width = style.width
        else:
            text_width = len(text) * font_size * self.constants.char_width_ratio
            width = (
                text_width
                + (padding["left"] or 0.0)
                + (padding["right"] or 0.0)
                + 2 * border
            )
            width = _clamp(width, style.min_width, style.max_width)

        if style.height is not None:
            height = style.height
        else:
            line = style.line_height or (
                font_size * LINE_HEIGHT_RATIO if style.font_size else DEFAULT_LINE_HEIGHT
            )
            height = line + (padding["top"] or 0.0) + (padding["bottom"] or 0.0) + 2 * border
            height = _clamp(height, style.min_height, style.max_height)
        return max(width, 0.0), max(height, 0.0)


def _clamp(value: float, lower: float | None, upper: float | None) -> float:
    if upper is not None:
        value = min(value, upper)
    if lower is not None:
        value = max(value, lower)
    return value


@dataclass(frozen=True)
class Grid:
    """A laid-out grid: tracks plus positioned cells."""

    rows: tuple[Layout, ...]
    cols: tuple[Layout, ...]
    cells: tuple[VariantCell, ...]

    @property
    def width(self) -> float:
        return self.cols[-1].end if self.cols else 0.0

    @property
    def height(self) -> float:
        return self.rows[-1].end if self.rows else 0.0


def _tracks(
    sizes: Sequence[float], labels: Sequence[str], start: float, gap: float
) -> tuple[Layout, ...]:
    tracks: list[Layout] = []
    offset = start
    for index, (size, label) in enumerate(zip(sizes, labels, strict=True)):
        tracks.append(Layout(index=index, offset=offset, size=size, label=label))
        offset += size + gap
    return tuple(tracks)


def compute_grid(
    cells: Sequence[VariantCell],
    row_labels: Sequence[str],
    col_labels: Sequence[str],
    constants: LayoutConstants,
) -> Grid:
    """Size every track by its per-track maximum and position the cells."""
    row_sizes = [0.0] * len(row_labels)
    col_sizes = [0.0] * len(col_labels)
    for cell in cells:
        row_sizes[cell.row] = max(row_sizes[cell.row], cell.extent.height)
        col_sizes[cell.col] = max(col_sizes[cell.col], cell.extent.width)

    rows = _tracks(
        row_sizes,
        row_labels,
        constants.header_row_height + constants.gap_y,
        constants.gap_y,
    )
    cols = _tracks(
        col_sizes,
        col_labels,
        constants.label_column_width + constants.gap_x,
        constants.gap_x,
    )
    placed = tuple(
        replace(
            cell,
            x=cols[cell.col].offset,
            y=rows[cell.row].offset,
            row_height=rows[cell.row].size,
            col_width=cols[cell.col].size,
        )
        for cell in cells
    )
    return Grid(rows=rows, cols=cols, cells=placed)


def verify_grid(grid: Grid, component: str | None = None) -> None:
    """Check every layout invariant of a computed grid.

    Raises:
        LayoutInvariantError: On the first violated invariant.
    """
    expected = len(grid.rows) * len(grid.cols)
    if len(grid.cells) != expected:
        raise LayoutInvariantError(
            f"{len(grid.cells)} cells for a {len(grid.rows)}x{len(grid.cols)} grid",
            component=component,
        )

    seen: set[tuple[int, int]] = set()
    for cell in grid.cells:
        position = (cell.row, cell.col)
        if position in seen:
            raise LayoutInvariantError(
                f"two cells occupy row {cell.row}, column {cell.col}", component=component
            )
        seen.add(position)
        row, col = grid.rows[cell.row], grid.cols[cell.col]
        if cell.row_height != row.size or cell.y != row.offset:
            raise LayoutInvariantError(
                f"cell {cell.name} disagrees with row {row.index} geometry",
                component=component,
                row_height=cell.row_height,
                expected=row.size,
            )
        if cell.col_width != col.size or cell.x != col.offset:
            raise LayoutInvariantError(
                f"cell {cell.name} disagrees with column {col.index} geometry",
                component=component,
                col_width=cell.col_width,
                expected=col.size,
            )
        if cell.extent.height > row.size or cell.extent.width > col.size:
            raise LayoutInvariantError(
                f"cell {cell.name} overflows its track", component=component
            )

    for tracks, kind in ((grid.rows, "row"), (grid.cols, "column")):
        for previous, current in zip(tracks, tracks[1:]):
            if current.offset < previous.end:
                raise LayoutInvariantError(
                    f"{kind} {current.index} overlaps {kind} {previous.index}",
                    component=component,
                )
