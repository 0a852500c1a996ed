"""CSS custom-property extraction and theme sub-parsers.

Reads ``--name: value;`` declarations from raw CSS (``@theme``, ``:root`` or
any other block) and converts the named scale families into px values.
"""

import re
from collections.abc import Iterable, Mapping

from ..errors import InvalidTokenError, MissingTokenError
from .snapshot import ShadowLayer, ShadowPreset, SpacingScale

COMMENT_PATTERN = re.compile(r"/\*.*?\*/", re.DOTALL)
CUSTOM_PROPERTY_PATTERN = re.compile(r"(?<![\w-])(--[\w-]+)\s*:\s*([^;{}]+);")
LENGTH_PATTERN = re.compile(r"^(-?(?:\d+\.?\d*|\.\d+))(px|rem|em)?$")
SHADOW_LAYER_START = re.compile(r"^\s*(?:inset\s+)?-?(?:\d|\.\d)")
ALPHA_PATTERN = re.compile(r"/\s*(-?[\d.]+)(%?)\s*\)")
RGBA_PATTERN = re.compile(r"^(?:rgba|hsla)\(([^)]*)\)$")

DEFAULT_ROOT_FONT_SIZE = 16.0


def extract_custom_properties(css: str) -> dict[str, str]:
    """Return every custom property declared in ``css``.

    Names keep their leading ``--``. When a property is declared more than
    once the last declaration wins.
    """
    properties: dict[str, str] = {}
    for match in CUSTOM_PROPERTY_PATTERN.finditer(COMMENT_PATTERN.sub("", css)):
        properties[match.group(1)] = " ".join(match.group(2).split())
    return properties


def rem_to_px(rem: float, root_font_size: float = DEFAULT_ROOT_FONT_SIZE) -> float:
    """Convert rem to px."""
    return round(rem * root_font_size, 3)


def parse_length(
    value: str, root_font_size: float = DEFAULT_ROOT_FONT_SIZE
) -> float | None:
    """Parse a CSS length into px.

    Accepts ``px``, ``rem``, ``em`` and unitless numbers (treated as px).
    Returns ``None`` for anything else, including ``calc()`` expressions.
    """
    match = LENGTH_PATTERN.match(value.strip().lower())
    if not match:
        return None
    number = float(match.group(1))
    unit = match.group(2)
    if unit in ("rem", "em"):
        return rem_to_px(number, root_font_size)
    return round(number, 3)


def _require(
    properties: Mapping[str, str], name: str, source: str
) -> str:
    if name not in properties:
        raise MissingTokenError(name, source)
    return properties[name]


def _require_length(
    properties: Mapping[str, str], name: str, source: str, root_font_size: float
) -> float:
    raw = _require(properties, name, source)
    px = parse_length(raw, root_font_size)
    if px is None:
        raise InvalidTokenError(name, raw, source, "length in px or rem")
    return px


def parse_spacing(
    properties: Mapping[str, str],
    scale_keys: Iterable[str],
    source: str,
    variable: str = "--spacing",
    root_font_size: float = DEFAULT_ROOT_FONT_SIZE,
) -> SpacingScale:
    """Parse the spacing base unit and derive the named scale from it.

    ``px`` always maps to 1 and ``0`` to 0; every other key is a multiplier
    of the base unit.
    """
    raw = _require(properties, variable, source)
    base_px = parse_length(raw, root_font_size)
    if base_px is None:
        raise InvalidTokenError(variable, raw, source, "length in px or rem")

    scale: dict[str, float] = {}
    for key in scale_keys:
        if key == "px":
            scale[key] = 1.0
        else:
            scale[key] = round(float(key) * base_px, 3)
    return SpacingScale(
        base_unit_px=base_px,
        base_unit_rem=round(base_px / root_font_size, 6),
        scale=scale,
    )


def parse_border_radius(
    properties: Mapping[str, str],
    keys: Iterable[str],
    source: str,
    prefix: str = "--radius-",
    root_font_size: float = DEFAULT_ROOT_FONT_SIZE,
) -> dict[str, float]:
    """Parse ``--radius-{key}`` for every expected key."""
    return {
        key: _require_length(properties, f"{prefix}{key}", source, root_font_size)
        for key in keys
    }


def parse_font_size(
    properties: Mapping[str, str],
    keys: Iterable[str],
    source: str,
    prefix: str = "--text-",
    root_font_size: float = DEFAULT_ROOT_FONT_SIZE,
) -> dict[str, float]:
    """Parse ``--text-{key}`` for every expected key.

    ``--text-{key}--line-height`` companions are separate properties and
    never shadow the size itself.
    """
    return {
        key: _require_length(properties, f"{prefix}{key}", source, root_font_size)
        for key in keys
    }


def parse_font_weight(
    properties: Mapping[str, str],
    keys: Iterable[str],
    source: str,
    prefix: str = "--font-weight-",
) -> dict[str, int]:
    """Parse ``--font-weight-{key}`` into integer weights."""
    weights: dict[str, int] = {}
    for key in keys:
        name = f"{prefix}{key}"
        raw = _require(properties, name, source)
        weight = parse_weight(raw)
        if weight is None:
            raise InvalidTokenError(name, raw, source, "integer weight 1-1000")
        weights[key] = weight
    return weights


def parse_weight(value: str) -> int | None:
    """Parse a font weight, returning ``None`` if it is not 1-1000."""
    try:
        weight = int(value.strip())
    except ValueError:
        return None
    return weight if 1 <= weight <= 1000 else None


def split_shadow_layers(value: str) -> list[str]:
    """Split a shadow value into layers.

    Splits only at top-level commas followed by a numeric offset (optionally
    preceded by ``inset``); commas inside ``rgb()``/``rgba()``/``var()``
    argument lists never split.
    """
    layers: list[str] = []
    depth = 0
    start = 0
    for index, char in enumerate(value):
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        elif char == "," and depth == 0 and SHADOW_LAYER_START.match(value[index + 1 :]):
            layers.append(value[start:index].strip())
            start = index + 1
    tail = value[start:].strip()
    if tail:
        layers.append(tail)
    return layers


def _split_top_level_whitespace(value: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in value:
        if char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        if char.isspace() and depth == 0:
            if current:
                parts.append("".join(current))
                current = []
            continue
        current.append(char)
    if current:
        parts.append("".join(current))
    return parts


def color_opacity(color: str) -> float:
    """Extract the alpha channel of a CSS color, defaulting to 1."""
    color = color.strip().lower()
    match = ALPHA_PATTERN.search(color)
    if match:
        alpha = float(match.group(1))
        return round(alpha / 100 if match.group(2) else alpha, 4)
    match = RGBA_PATTERN.match(color)
    if match:
        channels = [c.strip() for c in match.group(1).split(",")]
        if len(channels) == 4:
            alpha_text = channels[3]
            if alpha_text.endswith("%"):
                return round(float(alpha_text[:-1]) / 100, 4)
            return round(float(alpha_text), 4)
    if color.startswith("#") and len(color) == 9:
        return round(int(color[7:9], 16) / 255, 4)
    if color == "transparent":
        return 0.0
    return 1.0


def parse_shadow_layer(
    value: str, root_font_size: float = DEFAULT_ROOT_FONT_SIZE
) -> ShadowLayer | None:
    """Parse one shadow layer; returns ``None`` if it has fewer than two offsets."""
    lengths: list[float] = []
    color = "rgb(0 0 0)"
    inset = False
    for part in _split_top_level_whitespace(value):
        if part.lower() == "inset":
            inset = True
            continue
        px = parse_length(part, root_font_size)
        if px is not None and len(lengths) < 4:
            lengths.append(px)
        else:
            color = part
    if len(lengths) < 2:
        return None
    try:
        opacity = color_opacity(color)
    except ValueError:
        return None
    lengths.extend([0.0] * (4 - len(lengths)))
    return ShadowLayer(
        offset_x=lengths[0],
        offset_y=lengths[1],
        blur=lengths[2],
        spread=lengths[3],
        opacity=opacity,
        color=color,
        inset=inset,
    )


def parse_shadow_value(
    name: str, value: str, root_font_size: float = DEFAULT_ROOT_FONT_SIZE
) -> ShadowPreset | None:
    """Parse a full shadow value; ``None`` if any layer is unparseable."""
    layers = []
    for text in split_shadow_layers(value):
        layer = parse_shadow_layer(text, root_font_size)
        if layer is None:
            return None
        layers.append(layer)
    if not layers:
        return None
    return ShadowPreset(name=name, layers=tuple(layers))


def parse_shadows(
    properties: Mapping[str, str],
    keys: Iterable[str],
    source: str,
    prefix: str = "--shadow-",
    root_font_size: float = DEFAULT_ROOT_FONT_SIZE,
) -> dict[str, ShadowPreset]:
    """Parse ``--shadow-{key}`` for every expected preset."""
    presets: dict[str, ShadowPreset] = {}
    for key in keys:
        name = f"{prefix}{key}"
        raw = _require(properties, name, source)
        preset = parse_shadow_value(key, raw, root_font_size)
        if preset is None:
            raise InvalidTokenError(
                name, raw, source, "shadow layers 'x y [blur [spread]] color'"
            )
        presets[key] = preset
    return presets
