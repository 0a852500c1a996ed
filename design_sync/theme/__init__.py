"""Theme resolution: CSS theme sources to an immutable ThemeSnapshot.

Main components:
- snapshot: ThemeSnapshot, ThemeScales, SpacingScale, ShadowPreset, ShadowLayer
- css_parser: custom-property extraction and per-family sub-parsers
- resolver: framework + project layering, theme data artifact I/O
- opacity: opacity modifier extraction from component sources
"""

from .css_parser import (
    extract_custom_properties,
    parse_border_radius,
    parse_font_size,
    parse_font_weight,
    parse_shadows,
    parse_spacing,
    split_shadow_layers,
)
from .opacity import (
    OpacityModifier,
    extract_opacity_modifiers,
    extract_opacity_modifiers_from_sources,
)
from .resolver import (
    ThemeResolver,
    ThemeTokenSpec,
    build_snapshot,
    load_theme_data,
    write_theme_data,
)
from .snapshot import (
    ShadowLayer,
    ShadowPreset,
    SpacingScale,
    ThemeScales,
    ThemeSnapshot,
)

__all__ = [
    "OpacityModifier",
    "ShadowLayer",
    "ShadowPreset",
    "SpacingScale",
    "ThemeResolver",
    "ThemeScales",
    "ThemeSnapshot",
    "ThemeTokenSpec",
    "build_snapshot",
    "extract_custom_properties",
    "extract_opacity_modifiers",
    "extract_opacity_modifiers_from_sources",
    "load_theme_data",
    "parse_border_radius",
    "parse_font_size",
    "parse_font_weight",
    "parse_shadows",
    "parse_spacing",
    "split_shadow_layers",
    "write_theme_data",
]
