"""Immutable theme snapshot models.

A ``ThemeSnapshot`` holds two layers of scales: ``framework`` (parsed
framework defaults) and ``computed`` (after project overrides). All
downstream stages read ``computed``; the framework layer is kept so the
theme data artifact and the drift guard can compare against it.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


def _frozen(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class ShadowLayer:
    """One layer of a box shadow, in px."""

    offset_x: float
    offset_y: float
    blur: float = 0.0
    spread: float = 0.0
    opacity: float = 1.0
    color: str = "rgb(0 0 0)"
    inset: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {
            "offsetX": self.offset_x,
            "offsetY": self.offset_y,
            "blur": self.blur,
            "spread": self.spread,
            "opacity": self.opacity,
            "color": self.color,
        }
        if self.inset:
            data["inset"] = True
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ShadowLayer":
        """Create from dictionary."""
        return cls(
            offset_x=float(data["offsetX"]),
            offset_y=float(data["offsetY"]),
            blur=float(data.get("blur", 0.0)),
            spread=float(data.get("spread", 0.0)),
            opacity=float(data.get("opacity", 1.0)),
            color=data.get("color", "rgb(0 0 0)"),
            inset=bool(data.get("inset", False)),
        )


@dataclass(frozen=True)
class ShadowPreset:
    """A named shadow preset made of one or more layers."""

    name: str
    layers: tuple[ShadowLayer, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"layers": [layer.to_dict() for layer in self.layers]}

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any]) -> "ShadowPreset":
        """Create from dictionary."""
        return cls(
            name=name,
            layers=tuple(ShadowLayer.from_dict(layer) for layer in data["layers"]),
        )


@dataclass(frozen=True)
class SpacingScale:
    """Spacing base unit plus the named scale derived from it."""

    base_unit_px: float
    base_unit_rem: float
    scale: Mapping[str, float]

    def __post_init__(self) -> None:
        object.__setattr__(self, "scale", _frozen(self.scale))

    def resolve(self, key: str) -> float | None:
        """Resolve a spacing key to px.

        Named keys come from the scale; numeric keys missing from it are
        computed as ``key * base_unit_px``. Returns ``None`` for anything
        else.
        """
        if key in self.scale:
            return self.scale[key]
        try:
            multiplier = float(key)
        except ValueError:
            return None
        if multiplier < 0 or not math.isfinite(multiplier):
            return None
        return round(multiplier * self.base_unit_px, 3)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "baseUnit": self.base_unit_rem,
            "baseUnitPx": self.base_unit_px,
            "scale": dict(self.scale),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SpacingScale":
        """Create from dictionary."""
        return cls(
            base_unit_px=float(data["baseUnitPx"]),
            base_unit_rem=float(data.get("baseUnit", 0.0)),
            scale={k: float(v) for k, v in data.get("scale", {}).items()},
        )


@dataclass(frozen=True)
class ThemeScales:
    """One complete set of resolved numeric scales."""

    spacing: SpacingScale
    border_radius: Mapping[str, float]
    font_size: Mapping[str, float]
    font_weight: Mapping[str, int]
    shadows: Mapping[str, ShadowPreset] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "border_radius", _frozen(self.border_radius))
        object.__setattr__(self, "font_size", _frozen(self.font_size))
        object.__setattr__(self, "font_weight", _frozen(self.font_weight))
        object.__setattr__(self, "shadows", _frozen(self.shadows))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "spacing": self.spacing.to_dict(),
            "borderRadius": dict(self.border_radius),
            "fontSize": dict(self.font_size),
            "fontWeight": dict(self.font_weight),
            "shadows": {name: preset.to_dict() for name, preset in self.shadows.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ThemeScales":
        """Create from dictionary."""
        return cls(
            spacing=SpacingScale.from_dict(data["spacing"]),
            border_radius={k: float(v) for k, v in data["borderRadius"].items()},
            font_size={k: float(v) for k, v in data["fontSize"].items()},
            font_weight={k: int(v) for k, v in data["fontWeight"].items()},
            shadows={
                name: ShadowPreset.from_dict(name, preset)
                for name, preset in data.get("shadows", {}).items()
            },
        )


@dataclass(frozen=True)
class ThemeSnapshot:
    """Canonical resolved token table, built once per run."""

    framework: ThemeScales
    computed: ThemeScales
    sources: tuple[str, ...] = ()

    @property
    def spacing(self) -> SpacingScale:
        return self.computed.spacing

    @property
    def border_radius(self) -> Mapping[str, float]:
        return self.computed.border_radius

    @property
    def font_size(self) -> Mapping[str, float]:
        return self.computed.font_size

    @property
    def font_weight(self) -> Mapping[str, int]:
        return self.computed.font_weight

    @property
    def shadows(self) -> Mapping[str, ShadowPreset]:
        return self.computed.shadows

    def lookup(self, path: str) -> Any:
        """Resolve a dotted camelCase path such as ``spacing.baseUnitPx``.

        Paths are looked up in the serialized ``computed`` section; a leading
        ``tailwind.`` or ``computed.`` selects the layer explicitly.

        Raises:
            KeyError: If any segment of the path does not exist.
        """
        data = self.to_dict()
        parts = path.split(".")
        node: Any = data["computed"]
        if parts[0] in data:
            node = data[parts[0]]
            parts = parts[1:]
        for part in parts:
            node = node[part]
        return node

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the theme data file layout."""
        return {
            "tailwind": self.framework.to_dict(),
            "computed": self.computed.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ThemeSnapshot":
        """Load from the theme data file layout."""
        return cls(
            framework=ThemeScales.from_dict(data["tailwind"]),
            computed=ThemeScales.from_dict(data["computed"]),
            sources=tuple(data.get("_sources", ())),
        )
