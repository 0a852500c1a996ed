"""Sequential emission of variant matrices into a scene graph.

Each component's sections are placed at the running ``y`` and the next
component starts below the tallest of them plus ``section_gap``. The fold is
strictly sequential: one component's awaits complete before the next starts.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..constants import LABEL_FONT_SIZE, LayoutConstants
from ..matrix.cells import ROOT_ELEMENT, VariantCell
from ..matrix.generator import MatrixResult
from ..matrix.modes import ModeSection
from ..parser.style import ParsedStyle
from ..sync_logging import LogCategory, get_category_logger
from .protocol import NodeId, SceneGraph

logger = get_category_logger(LogCategory.SCENE)

TITLE_FONT_SIZE = 16
WHITE_TEXT_TOKEN = "color-white"


@dataclass
class EmitSummary:
    """What one emission run produced."""

    placements: dict[str, float] = field(default_factory=dict)
    end_y: float = 0.0
    node_count: int = 0


class SceneEmitter:
    """Emits matrix results into a ``SceneGraph``."""

    def __init__(self, scene: SceneGraph, constants: LayoutConstants | None = None):
        self.scene = scene
        self.constants = constants or LayoutConstants()
        self._created = 0

    async def emit_all(self, results: Sequence[MatrixResult]) -> EmitSummary:
        """Emit every result top to bottom, folding the running y offset."""
        summary = EmitSummary()
        y = self.constants.start_y
        for result in results:
            summary.placements[result.component] = y
            y = await self.emit_component(result, y)
        summary.end_y = y
        summary.node_count = self._created
        return summary

    async def emit_component(self, result: MatrixResult, y: float) -> float:
        """Emit one component at ``y`` and return the ``y`` for the next one."""
        for section in result.sections:
            await self._emit_section(result, section, y)
        logger.debug(f"Emitted {result.component} at y={y}")
        return y + result.height + self.constants.section_gap

    async def _emit_section(self, result: MatrixResult, section: ModeSection, y: float) -> None:
        scene = self.scene
        frame = await self._frame(
            f"{result.component} ({section.mode})", section.x, y, section.width, section.height
        )
        title = await self._text(
            result.component, section.content_x, self.constants.section_padding, TITLE_FONT_SIZE
        )
        await scene.append_child(frame, title)

        for col in result.cols:
            if col.label:
                label = await self._text(
                    col.label, section.content_x + col.offset, section.content_y, LABEL_FONT_SIZE
                )
                await scene.append_child(frame, label)
        for row in result.rows:
            if row.label:
                label = await self._text(
                    row.label, section.content_x, section.content_y + row.offset, LABEL_FONT_SIZE
                )
                await scene.append_child(frame, label)

        for cell in result.cells:
            node = await self._cell(result.component, cell, section)
            await scene.append_child(frame, node)

    async def _cell(self, component: str, cell: VariantCell, section: ModeSection) -> NodeId:
        node = await self.scene.create_component(
            cell.name or component,
            section.content_x + cell.x,
            section.content_y + cell.y,
            cell.extent.width,
            cell.extent.height,
        )
        self._created += 1
        root = cell.styles[ROOT_ELEMENT]
        await self._apply(node, root)

        text = await self._text(component, 0, 0, root.font_size or LABEL_FONT_SIZE)
        if root.text_variable:
            await self.scene.bind_text_color_to_token(text, root.text_variable)
        elif root.is_white_text:
            await self.scene.bind_text_color_to_token(text, WHITE_TEXT_TOKEN)
        await self.scene.append_child(node, text)

        for element, style in cell.styles.items():
            if element == ROOT_ELEMENT:
                continue
            child = await self._frame(element, 0, 0, style.width or 0, style.height or 0)
            await self._apply(child, style)
            await self.scene.append_child(node, child)
        return node

    async def _apply(self, node: NodeId, style: ParsedStyle) -> None:
        if style.fill_variable and not style.no_fill:
            await self.scene.bind_fill_to_token(node, style.fill_variable)
        if style.stroke_variable and style.has_border:
            await self.scene.bind_stroke_to_token(
                node, style.stroke_variable, style.stroke_weight or 1
            )
        radii = style.resolved_corner_radii()
        if style.has_uniform_radius() and radii["top_left"] is not None:
            await self.scene.set_corner_radius(node, radii["top_left"])

    async def _frame(self, name: str, x: float, y: float, width: float, height: float) -> NodeId:
        self._created += 1
        return await self.scene.create_frame(name, x, y, width, height)

    async def _text(self, text: str, x: float, y: float, font_size: float) -> NodeId:
        self._created += 1
        return await self.scene.create_text(text, x, y, font_size)
