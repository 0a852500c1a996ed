"""Display-mode replication of a laid-out grid.

The first mode's section starts at ``start_x``; each further mode is an
identical copy shifted right by the section width plus ``mode_gap``. Cell
offsets inside a section are shared, only the section origin differs.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ..constants import LayoutConstants
from ..errors import LayoutInvariantError
from .layout import Grid


@dataclass(frozen=True)
class ModeSection:
    """One display-mode copy of a component's grid."""

    mode: str
    x: float
    width: float
    height: float
    content_x: float
    content_y: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode,
            "x": self.x,
            "width": self.width,
            "height": self.height,
            "contentX": self.content_x,
            "contentY": self.content_y,
        }


def section_size(grid: Grid, constants: LayoutConstants) -> tuple[float, float]:
    """Section frame size around a grid: padding plus the title band."""
    width = grid.width + 2 * constants.section_padding
    height = constants.title_height + grid.height + 2 * constants.section_padding
    return width, height


def replicate_modes(
    grid: Grid, modes: Sequence[str], constants: LayoutConstants
) -> tuple[ModeSection, ...]:
    """Create one section per mode, left to right."""
    width, height = section_size(grid, constants)
    sections: list[ModeSection] = []
    x = constants.start_x
    for mode in modes:
        sections.append(
            ModeSection(
                mode=mode,
                x=x,
                width=width,
                height=height,
                content_x=constants.section_padding,
                content_y=constants.section_padding + constants.title_height,
            )
        )
        x = x + width + constants.mode_gap
    return tuple(sections)


def verify_sections(
    sections: Sequence[ModeSection], constants: LayoutConstants, component: str | None = None
) -> None:
    """Check that every mode section is a shifted copy of the first.

    Raises:
        LayoutInvariantError: If sizes, content offsets or spacing differ.
    """
    if not sections:
        return
    first = sections[0]
    for previous, section in zip(sections, sections[1:]):
        if (section.width, section.height) != (first.width, first.height) or (
            section.content_x,
            section.content_y,
        ) != (first.content_x, first.content_y):
            raise LayoutInvariantError(
                f"mode section {section.mode} is not a copy of {first.mode}",
                component=component,
            )
        if section.x != previous.x + previous.width + constants.mode_gap:
            raise LayoutInvariantError(
                f"mode section {section.mode} is not offset by the mode gap",
                component=component,
            )
