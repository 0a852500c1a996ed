"""Prefix -> handler dispatch table for utility tokens.

Each handler receives the target style, the decomposed token and the value
left after the prefix (``"4"`` for ``px-4``, ``""`` for a bare ``border``).
It returns ``None`` when it applied the token, or a short reason string when
the token is dropped. Handlers never raise.
"""

import re
from collections.abc import Callable

from ..constants import BORDER_RADIUS_FULL, DASH_PATTERN
from ..theme.css_parser import parse_length
from ..theme.snapshot import ThemeSnapshot
from .config import ParserConfig
from .style import AXIS_SIDES, ParsedStyle
from .tokenizer import ClassToken

Handler = Callable[[ParsedStyle, ClassToken, str], str | None]

OPACITY_MODIFIER = re.compile(r"[0-9]{1,3}")
BORDER_WIDTH = re.compile(r"[0-9]{1,2}")

SIDE_SUFFIXES = {"t": "top", "r": "right", "b": "bottom", "l": "left"}
CORNER_SUFFIXES = {
    "tl": "top_left",
    "tr": "top_right",
    "br": "bottom_right",
    "bl": "bottom_left",
}
BORDER_STYLES = ("solid", "dashed", "dotted", "double")
TEXT_ALIGN = {"left": "LEFT", "center": "CENTER", "right": "RIGHT", "justify": "JUSTIFIED"}

# Exact-match layout keywords: token -> (field, value)
LAYOUT_KEYWORDS: dict[str, tuple[str, object]] = {
    "flex": ("layout_mode", "HORIZONTAL"),
    "inline-flex": ("layout_mode", "HORIZONTAL"),
    "flex-row": ("layout_mode", "HORIZONTAL"),
    "flex-col": ("layout_mode", "VERTICAL"),
    "flex-wrap": ("wrap", True),
    "flex-nowrap": ("wrap", False),
    "grow": ("grow", True),
    "flex-1": ("grow", True),
    "items-start": ("align_items", "MIN"),
    "items-center": ("align_items", "CENTER"),
    "items-end": ("align_items", "MAX"),
    "items-stretch": ("align_items", "STRETCH"),
    "items-baseline": ("align_items", "BASELINE"),
    "justify-start": ("justify_content", "MIN"),
    "justify-center": ("justify_content", "CENTER"),
    "justify-end": ("justify_content", "MAX"),
    "justify-between": ("justify_content", "SPACE_BETWEEN"),
}


class UtilityHandlers:
    """Handlers bound to one snapshot and parser configuration."""

    def __init__(self, snapshot: ThemeSnapshot, config: ParserConfig):
        self.snapshot = snapshot
        self.config = config
        self.table: dict[str, Handler] = self._build_table()
        # Longest prefix first so "gap-x" is tried before "gap"
        self.prefixes = sorted(self.table, key=len, reverse=True)

    def dispatch(self, style: ParsedStyle, token: ClassToken) -> str | None:
        """Route a token to its handler; returns a drop reason or ``None``."""
        utility = token.utility
        keyword = LAYOUT_KEYWORDS.get(utility)
        if keyword is not None and token.arbitrary is None:
            field_name, value = keyword
            setattr(style, field_name, value)
            return None

        for prefix in self.prefixes:
            if utility == prefix:
                return self.table[prefix](style, token, "")
            if utility.startswith(prefix + "-"):
                return self.table[prefix](style, token, utility[len(prefix) + 1 :])
        return "no handler for utility"

    def _build_table(self) -> dict[str, Handler]:
        table: dict[str, Handler] = {
            "bg": self.handle_background,
            "text": self.handle_text,
            "border": self.handle_border,
            "ring": self.handle_ring,
            "rounded": self._radius_handler(None),
            "shadow": self.handle_shadow,
            "font": self.handle_font,
            "leading": self.handle_leading,
            "opacity": self.handle_opacity,
            "gap": self._spacing_handler("gap"),
            "gap-x": self._spacing_handler("gap_x"),
            "gap-y": self._spacing_handler("gap_y"),
            "w": self._size_handler("width"),
            "h": self._size_handler("height"),
            "size": self._size_handler("width", "height"),
            "min-w": self._size_handler("min_width"),
            "min-h": self._size_handler("min_height"),
            "max-w": self._size_handler("max_width"),
            "max-h": self._size_handler("max_height"),
        }
        for family, letter in (("padding", "p"), ("margin", "m")):
            table[letter] = self._spacing_handler(family, signed=family == "margin")
            for axis in AXIS_SIDES:
                table[f"{letter}{axis}"] = self._spacing_handler(
                    f"{family}_{axis}", signed=family == "margin"
                )
            for suffix, side in SIDE_SUFFIXES.items():
                table[f"{letter}{suffix}"] = self._spacing_handler(
                    f"{family}_{side}", signed=family == "margin"
                )
        for suffix, side in SIDE_SUFFIXES.items():
            table[f"rounded-{suffix}"] = self._radius_handler(f"radius_{side}")
            table[f"border-{suffix}"] = self._border_side_handler((side,))
        for suffix, corner in CORNER_SUFFIXES.items():
            table[f"rounded-{suffix}"] = self._radius_handler(f"radius_{corner}")
        for axis, sides in AXIS_SIDES.items():
            table[f"border-{axis}"] = self._border_side_handler(sides)
        return table

    # Value resolution

    def _opacity(self, token: ClassToken) -> tuple[bool, float | None]:
        """Validate a ``/NN`` modifier: (ok, opacity)."""
        if token.modifier is None:
            return True, None
        if not OPACITY_MODIFIER.fullmatch(token.modifier):
            return False, None
        value = int(token.modifier)
        if value > 100:
            return False, None
        return True, value / 100

    def _is_semantic_color(self, value: str) -> bool:
        """``value`` is ``<namespace>-<name>`` for a configured namespace."""
        return any(
            value.startswith(f"{namespace}-") and len(value) > len(namespace) + 1
            for namespace in self.config.color_namespaces
        )

    def _color_reference(self, prefix: str, value: str, token: ClassToken) -> str:
        reference = f"{prefix}{value}"
        if token.modifier is not None:
            reference = f"{reference}/{token.modifier}"
        return reference

    def _spacing_value(self, token: ClassToken, value: str) -> float | None:
        if token.arbitrary is not None:
            return parse_length(token.arbitrary, self.config.root_font_size_px)
        if not value:
            return None
        return self.snapshot.spacing.resolve(value)

    def _radius_value(self, token: ClassToken, value: str) -> float | None:
        if token.arbitrary is not None:
            return parse_length(token.arbitrary, self.config.root_font_size_px)
        radii = self.snapshot.border_radius
        key = value or "DEFAULT"
        if key in radii:
            return radii[key]
        if key == "full":
            return float(BORDER_RADIUS_FULL)
        return None

    # Colors

    def handle_background(
        self, style: ParsedStyle, token: ClassToken, value: str
    ) -> str | None:
        if token.arbitrary is not None or not value:
            return "background is not a semantic token"
        if token.negative:
            return "negative value not allowed"
        if value in self.config.no_fill_keywords:
            style.no_fill = True
            style.fill_variable = None
            style.fill_opacity = None
            return None
        if not self._is_semantic_color(value):
            return "background is not a semantic token"
        ok, opacity = self._opacity(token)
        if not ok:
            return "malformed opacity modifier"
        style.fill_variable = self._color_reference(
            self.config.fill_variable_prefix, value, token
        )
        style.fill_opacity = opacity
        style.no_fill = False
        return None

    def handle_text(self, style: ParsedStyle, token: ClassToken, value: str) -> str | None:
        if token.negative:
            return "negative value not allowed"
        if token.arbitrary is not None:
            size = parse_length(token.arbitrary, self.config.root_font_size_px)
            if size is None:
                return "arbitrary text value is not a length"
            style.font_size = size
            return None
        if value in self.snapshot.font_size:
            style.font_size = self.snapshot.font_size[value]
            return None
        if value in TEXT_ALIGN:
            style.text_align = TEXT_ALIGN[value]
            return None
        if not value:
            return "bare text utility"
        ok, opacity = self._opacity(token)
        if not ok:
            return "malformed opacity modifier"
        if value in self.config.white_text_keywords:
            style.is_white_text = True
            style.text_variable = None
            style.text_opacity = opacity
            return None
        if not self._is_semantic_color(value):
            return "text color is not a semantic token"
        style.text_variable = self._color_reference(
            self.config.text_variable_prefix, value, token
        )
        style.text_opacity = opacity
        style.is_white_text = False
        return None

    def _stroke_color(self, style: ParsedStyle, token: ClassToken, value: str) -> str | None:
        if not self._is_semantic_color(value):
            return "stroke color is not a semantic token"
        ok, opacity = self._opacity(token)
        if not ok:
            return "malformed opacity modifier"
        style.stroke_variable = self._color_reference(
            self.config.stroke_variable_prefix, value, token
        )
        style.stroke_opacity = opacity
        return None

    def handle_border(self, style: ParsedStyle, token: ClassToken, value: str) -> str | None:
        if token.negative:
            return "negative value not allowed"
        if token.arbitrary is not None:
            weight = parse_length(token.arbitrary, self.config.root_font_size_px)
            if weight is None:
                return "arbitrary border value is not a length"
            style.has_border = True
            style.stroke_weight = weight
            return None
        if not value:
            style.has_border = True
            style.stroke_weight = 1
            style.border_sides = None
            return None
        if BORDER_WIDTH.fullmatch(value):
            weight = int(value)
            style.has_border = weight > 0
            style.stroke_weight = weight
            style.border_sides = None
            return None
        if value == "none":
            style.has_border = False
            style.stroke_weight = 0
            return None
        if value in BORDER_STYLES:
            style.has_border = True
            style.border_style = value
            style.dash_pattern = tuple(DASH_PATTERN) if value == "dashed" else None
            return None
        return self._stroke_color(style, token, value)

    def _border_side_handler(self, sides: tuple[str, ...]) -> Handler:
        def handle(style: ParsedStyle, token: ClassToken, value: str) -> str | None:
            if token.negative:
                return "negative value not allowed"
            if token.arbitrary is not None:
                return "unsupported side border value"
            if value and not BORDER_WIDTH.fullmatch(value):
                return self._stroke_color(style, token, value)
            style.has_border = True
            style.stroke_weight = int(value) if value else 1
            style.border_sides = sides
            return None

        return handle

    def handle_ring(self, style: ParsedStyle, token: ClassToken, value: str) -> str | None:
        if token.negative:
            return "negative value not allowed"
        if token.arbitrary is not None:
            return "arbitrary ring value"
        if not value:
            style.has_border = True
            style.stroke_weight = 1
            return None
        if BORDER_WIDTH.fullmatch(value):
            style.has_border = int(value) > 0
            style.stroke_weight = int(value)
            return None
        if value in ("inset", "offset"):
            return "ring modifier has no stroke equivalent"
        reason = self._stroke_color(style, token, value)
        if reason is None:
            style.has_border = True
            if style.stroke_weight is None:
                style.stroke_weight = 1
        return reason

    # Spacing and sizing

    def _spacing_handler(self, field_name: str, signed: bool = False) -> Handler:
        def handle(style: ParsedStyle, token: ClassToken, value: str) -> str | None:
            if token.negative and not signed:
                return "negative value not allowed"
            if token.modifier is not None:
                return "unexpected modifier"
            px = self._spacing_value(token, value)
            if px is None:
                return f"unresolvable spacing value {value or token.arbitrary!r}"
            setattr(style, field_name, -px if token.negative else px)
            return None

        return handle

    def _size_handler(self, *field_names: str) -> Handler:
        def handle(style: ParsedStyle, token: ClassToken, value: str) -> str | None:
            if token.negative or token.modifier is not None:
                return "fractional or negative size"
            px = self._spacing_value(token, value)
            if px is None:
                return f"unresolvable size {value or token.arbitrary!r}"
            for field_name in field_names:
                setattr(style, field_name, px)
            return None

        return handle

    def _radius_handler(self, field_name: str | None) -> Handler:
        def handle(style: ParsedStyle, token: ClassToken, value: str) -> str | None:
            if token.negative or token.modifier is not None:
                return "invalid radius token"
            px = self._radius_value(token, value)
            if px is None:
                return f"unknown radius {value or token.arbitrary!r}"
            if field_name is None:
                style.border_radius = px
            else:
                setattr(style, field_name, px)
            return None

        return handle

    # Typography and effects

    def handle_font(self, style: ParsedStyle, token: ClassToken, value: str) -> str | None:
        if token.arbitrary is not None:
            try:
                weight = int(token.arbitrary)
            except ValueError:
                return "arbitrary font value is not a weight"
            style.font_weight = weight
            return None
        if value in self.snapshot.font_weight:
            style.font_weight = self.snapshot.font_weight[value]
            return None
        return "font family or unknown weight"

    def handle_leading(self, style: ParsedStyle, token: ClassToken, value: str) -> str | None:
        px = self._spacing_value(token, value)
        if px is None:
            return "relative line height"
        style.line_height = px
        return None

    def handle_opacity(self, style: ParsedStyle, token: ClassToken, value: str) -> str | None:
        text = token.arbitrary if token.arbitrary is not None else value
        if token.arbitrary is None and not OPACITY_MODIFIER.fullmatch(value):
            return "opacity is not a percentage"
        try:
            number = float(text)
        except ValueError:
            return "opacity is not numeric"
        opacity = number if token.arbitrary is not None else number / 100
        if not 0 <= opacity <= 1:
            return "opacity out of range"
        style.opacity = opacity
        return None

    def handle_shadow(self, style: ParsedStyle, token: ClassToken, value: str) -> str | None:
        if token.arbitrary is not None:
            return "arbitrary shadow"
        if value == "none":
            style.shadow = "none"
            style.shadow_layers = ()
            return None
        name = value or "sm"
        preset = self.snapshot.shadows.get(name)
        if preset is None:
            return f"unknown shadow preset {name!r}"
        style.shadow = name
        style.shadow_layers = preset.layers
        return None
