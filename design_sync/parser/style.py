"""ParsedStyle: structured visual properties of one class string.

Every field is optional and only set when a matching token was present.
Shorthand and specific spacing tokens are stored in separate fields so each
field keeps exactly one derivation; the ``resolved_*`` accessors apply the
specificity rule (side beats axis beats all-sides).
"""

from dataclasses import dataclass, field, fields
from typing import Any

from ..theme.snapshot import ShadowLayer

SIDES = ("top", "right", "bottom", "left")
CORNERS = ("top_left", "top_right", "bottom_right", "bottom_left")

# Which sides/corners each directional suffix addresses
AXIS_SIDES = {"x": ("right", "left"), "y": ("top", "bottom")}
SIDE_CORNERS = {
    "top": ("top_left", "top_right"),
    "right": ("top_right", "bottom_right"),
    "bottom": ("bottom_right", "bottom_left"),
    "left": ("top_left", "bottom_left"),
}


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


@dataclass
class ParsedStyle:
    """Structured style extracted from a utility-class string."""

    # Fill
    fill_variable: str | None = None
    fill_opacity: float | None = None
    no_fill: bool = False

    # Stroke
    stroke_variable: str | None = None
    stroke_opacity: float | None = None
    has_border: bool = False
    stroke_weight: float | None = None
    border_sides: tuple[str, ...] | None = None
    border_style: str | None = None
    dash_pattern: tuple[float, ...] | None = None

    # Text
    text_variable: str | None = None
    text_opacity: float | None = None
    is_white_text: bool = False
    font_size: float | None = None
    font_weight: int | None = None
    line_height: float | None = None
    text_align: str | None = None

    # Corners
    border_radius: float | None = None
    radius_top: float | None = None
    radius_right: float | None = None
    radius_bottom: float | None = None
    radius_left: float | None = None
    radius_top_left: float | None = None
    radius_top_right: float | None = None
    radius_bottom_right: float | None = None
    radius_bottom_left: float | None = None

    # Spacing
    padding: float | None = None
    padding_x: float | None = None
    padding_y: float | None = None
    padding_top: float | None = None
    padding_right: float | None = None
    padding_bottom: float | None = None
    padding_left: float | None = None
    margin: float | None = None
    margin_x: float | None = None
    margin_y: float | None = None
    margin_top: float | None = None
    margin_right: float | None = None
    margin_bottom: float | None = None
    margin_left: float | None = None
    gap: float | None = None
    gap_x: float | None = None
    gap_y: float | None = None

    # Sizing
    width: float | None = None
    height: float | None = None
    min_width: float | None = None
    min_height: float | None = None
    max_width: float | None = None
    max_height: float | None = None

    # Effects
    opacity: float | None = None
    shadow: str | None = None
    shadow_layers: tuple[ShadowLayer, ...] | None = None

    # Layout
    layout_mode: str | None = None  # HORIZONTAL | VERTICAL
    align_items: str | None = None  # MIN | CENTER | MAX | STRETCH | BASELINE
    justify_content: str | None = None  # MIN | CENTER | MAX | SPACE_BETWEEN
    wrap: bool = False
    grow: bool = False

    states: dict[str, "ParsedStyle"] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.to_dict()

    def resolved_padding(self) -> dict[str, float | None]:
        """Per-side padding: single side beats axis beats all-sides."""
        return self._resolve_box("padding")

    def resolved_margin(self) -> dict[str, float | None]:
        """Per-side margin: single side beats axis beats all-sides."""
        return self._resolve_box("margin")

    def resolved_gap(self) -> dict[str, float | None]:
        """Gap per axis: ``gap-x``/``gap-y`` beat ``gap``."""
        return {
            "x": self.gap_x if self.gap_x is not None else self.gap,
            "y": self.gap_y if self.gap_y is not None else self.gap,
        }

    def resolved_corner_radii(self) -> dict[str, float | None]:
        """Per-corner radius: corner beats side beats all-corners.

        When two side tokens address the same corner (``rounded-t`` and
        ``rounded-l`` both cover top-left), the top/bottom side wins.
        """
        result: dict[str, float | None] = {}
        for corner in CORNERS:
            explicit = getattr(self, f"radius_{corner}")
            if explicit is not None:
                result[corner] = explicit
                continue
            vertical, horizontal = corner.split("_")
            for side in (vertical, horizontal):
                side_value = getattr(self, f"radius_{side}")
                if side_value is not None:
                    result[corner] = side_value
                    break
            else:
                result[corner] = self.border_radius
        return result

    def has_uniform_radius(self) -> bool:
        return len(set(self.resolved_corner_radii().values())) == 1

    def _resolve_box(self, family: str) -> dict[str, float | None]:
        result: dict[str, float | None] = {}
        for side in SIDES:
            value = getattr(self, f"{family}_{side}")
            if value is None:
                axis = "x" if side in AXIS_SIDES["x"] else "y"
                value = getattr(self, f"{family}_{axis}")
            if value is None:
                value = getattr(self, family)
            result[side] = value
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert to a camelCase dictionary, omitting unset fields."""
        data: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None or value is False:
                continue
            if f.name == "states":
                if value:
                    data["states"] = {k: v.to_dict() for k, v in value.items()}
                continue
            if f.name == "shadow_layers":
                value = [layer.to_dict() for layer in value]
            elif isinstance(value, tuple):
                value = list(value)
            data[camel_case(f.name)] = value
        return data
