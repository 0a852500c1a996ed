"""Theme resolver: framework CSS + project CSS -> ThemeSnapshot.

The framework source is the canonical ground truth. Every expected token
must be present and parseable there, otherwise the build fails with a
``ConfigError`` naming the property. The project source may override any
named token; the override wins and removing it restores the framework value.
"""

import json
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..errors import ConfigError
from ..sync_logging import LogCategory, get_category_logger
from . import css_parser
from .opacity import OpacityModifier
from .snapshot import ThemeScales, ThemeSnapshot

logger = get_category_logger(LogCategory.THEME)

SPACING_SCALE_KEYS = (
    "0", "px", "0.5", "1", "1.5", "2", "2.5", "3", "3.5", "4", "4.5", "5",
    "6", "6.5", "7", "8", "9", "10", "11", "12", "14", "16", "20", "24",
    "28", "32", "36", "40", "44", "48", "52", "56", "60", "64", "72", "80", "96",
)
RADIUS_KEYS = ("xs", "sm", "md", "lg", "xl", "2xl", "3xl", "4xl")
FONT_SIZE_KEYS = (
    "xs", "sm", "base", "lg", "xl", "2xl", "3xl", "4xl", "5xl", "6xl", "7xl",
    "8xl", "9xl",
)
FONT_WEIGHT_KEYS = (
    "thin", "extralight", "light", "normal", "medium", "semibold", "bold",
    "extrabold", "black",
)
SHADOW_KEYS = ("2xs", "xs", "sm", "md", "lg", "xl", "2xl")


@dataclass(frozen=True)
class ThemeTokenSpec:
    """Which tokens the framework source must declare, and how to name them."""

    spacing_variable: str = "--spacing"
    spacing_scale_keys: tuple[str, ...] = SPACING_SCALE_KEYS
    radius_prefix: str = "--radius-"
    radius_keys: tuple[str, ...] = RADIUS_KEYS
    font_size_prefix: str = "--text-"
    font_size_keys: tuple[str, ...] = FONT_SIZE_KEYS
    font_weight_prefix: str = "--font-weight-"
    font_weight_keys: tuple[str, ...] = FONT_WEIGHT_KEYS
    shadow_prefix: str = "--shadow-"
    shadow_keys: tuple[str, ...] = SHADOW_KEYS
    root_font_size_px: float = 16.0
    # Radius keys the framework implies without declaring
    fixed_radii: Mapping[str, float] = field(
        default_factory=lambda: {"none": 0.0, "full": 9999.0}
    )
    default_radius_key: str = "sm"


class ThemeResolver:
    """Builds ``ThemeSnapshot`` objects from CSS sources."""

    def __init__(self, spec: ThemeTokenSpec | None = None):
        self.spec = spec or ThemeTokenSpec()

    def build(
        self,
        framework_css: str,
        project_css: str | None = None,
        framework_source: str = "framework theme",
        project_source: str = "project theme",
    ) -> ThemeSnapshot:
        """Build a snapshot from raw CSS text.

        Raises:
            ConfigError: If the framework source lacks an expected token or
                declares one with an unparseable value.
        """
        framework_props = css_parser.extract_custom_properties(framework_css)
        framework = self._parse_framework(framework_props, framework_source)

        sources = [framework_source]
        if project_css:
            project_props = css_parser.extract_custom_properties(project_css)
            computed = self._apply_overrides(framework, project_props, project_source)
            sources.append(project_source)
        else:
            computed = framework

        logger.debug(
            f"Built theme snapshot from {', '.join(sources)}: "
            f"base unit {computed.spacing.base_unit_px}px, "
            f"{len(computed.shadows)} shadow presets"
        )
        return ThemeSnapshot(framework=framework, computed=computed, sources=tuple(sources))

    def build_from_files(
        self, framework_path: Path, project_path: Path | None = None
    ) -> ThemeSnapshot:
        """Build a snapshot from CSS files on disk."""
        framework_css = _read_source(framework_path, "framework theme CSS")
        project_css = None
        if project_path is not None:
            if project_path.exists():
                project_css = _read_source(project_path, "project theme CSS")
            else:
                logger.warning(
                    f"Project theme {project_path} not found, using framework defaults"
                )
        return self.build(
            framework_css,
            project_css,
            framework_source=str(framework_path),
            project_source=str(project_path) if project_path else "project theme",
        )

    def _parse_framework(self, props: Mapping[str, str], source: str) -> ThemeScales:
        spec = self.spec
        root = spec.root_font_size_px
        spacing = css_parser.parse_spacing(
            props, spec.spacing_scale_keys, source, spec.spacing_variable, root
        )
        radius = css_parser.parse_border_radius(
            props, spec.radius_keys, source, spec.radius_prefix, root
        )
        font_size = css_parser.parse_font_size(
            props, spec.font_size_keys, source, spec.font_size_prefix, root
        )
        font_weight = css_parser.parse_font_weight(
            props, spec.font_weight_keys, source, spec.font_weight_prefix
        )
        shadows = css_parser.parse_shadows(
            props, spec.shadow_keys, source, spec.shadow_prefix, root
        )
        return ThemeScales(
            spacing=spacing,
            border_radius=self._with_fixed_radii(radius),
            font_size=font_size,
            font_weight=font_weight,
            shadows=shadows,
        )

    def _with_fixed_radii(self, radius: dict[str, float]) -> dict[str, float]:
        result = dict(self.spec.fixed_radii)
        result.update(radius)
        if self.spec.default_radius_key in radius:
            result["DEFAULT"] = radius[self.spec.default_radius_key]
        return result

    def _apply_overrides(
        self, framework: ThemeScales, props: Mapping[str, str], source: str
    ) -> ThemeScales:
        spec = self.spec
        root = spec.root_font_size_px

        spacing = framework.spacing
        if spec.spacing_variable in props:
            base_px = css_parser.parse_length(props[spec.spacing_variable], root)
            if base_px is None:
                logger.debug(
                    f"Ignoring non-length {spec.spacing_variable} in {source}: "
                    f"{props[spec.spacing_variable]!r}"
                )
            else:
                spacing = css_parser.parse_spacing(
                    props,
                    spec.spacing_scale_keys,
                    source,
                    spec.spacing_variable,
                    root,
                )

        radius = _override_family(
            framework.border_radius,
            props,
            spec.radius_prefix,
            lambda raw: css_parser.parse_length(raw, root),
            source,
        )
        if spec.default_radius_key in radius:
            radius["DEFAULT"] = radius[spec.default_radius_key]
        font_size = _override_family(
            framework.font_size,
            props,
            spec.font_size_prefix,
            lambda raw: css_parser.parse_length(raw, root),
            source,
        )
        font_weight = _override_family(
            framework.font_weight,
            props,
            spec.font_weight_prefix,
            css_parser.parse_weight,
            source,
        )
        shadows = dict(framework.shadows)
        for key in framework.shadows:
            raw = props.get(f"{spec.shadow_prefix}{key}")
            if raw is None:
                continue
            preset = css_parser.parse_shadow_value(key, raw, root)
            if preset is None:
                logger.debug(f"Ignoring unparseable shadow override {key} in {source}")
                continue
            shadows[key] = preset

        return ThemeScales(
            spacing=spacing,
            border_radius=radius,
            font_size=font_size,
            font_weight=font_weight,
            shadows=shadows,
        )


def _override_family(
    defaults: Mapping[str, Any],
    props: Mapping[str, str],
    prefix: str,
    parse: Callable[[str], Any],
    source: str,
) -> dict[str, Any]:
    """Replace each default whose ``{prefix}{key}`` the project redefines.

    Only keys the framework already knows are eligible, so project color
    tokens such as ``--text-color-kumo-default`` never leak into a numeric
    scale. Values that do not parse are skipped.
    """
    result = dict(defaults)
    for key in defaults:
        raw = props.get(f"{prefix}{key}")
        if raw is None:
            continue
        value = parse(raw)
        if value is None:
            logger.debug(f"Ignoring non-numeric override {prefix}{key} in {source}")
            continue
        logger.debug(f"Override {prefix}{key}: {defaults[key]} -> {value} ({source})")
        result[key] = value
    return result


def _read_source(path: Path, label: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigError(
            f"{label} not found: {path}",
            source=str(path),
            suggestion="Check paths.frameworkCss / paths.projectCss in the config",
        ) from e


def build_snapshot(
    framework_css: str,
    project_css: str | None = None,
    spec: ThemeTokenSpec | None = None,
) -> ThemeSnapshot:
    """Build a snapshot from raw framework and project CSS."""
    return ThemeResolver(spec).build(framework_css, project_css)


def write_theme_data(
    snapshot: ThemeSnapshot,
    path: Path,
    opacity_modifiers: Sequence[OpacityModifier] = (),
) -> Path:
    """Write the theme data artifact consumed by generators and drift checks."""
    data: dict[str, Any] = {
        "_generated": datetime.now(UTC).isoformat(),
        "_sources": list(snapshot.sources),
    }
    data.update(snapshot.to_dict())
    if opacity_modifiers:
        data["opacityModifiers"] = [modifier.to_dict() for modifier in opacity_modifiers]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    logger.info(f"Wrote theme data to {path}")
    return path


def load_theme_data(path: Path) -> ThemeSnapshot:
    """Load a snapshot back from a theme data artifact.

    Raises:
        ConfigError: If the file is missing or lacks the expected sections.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return ThemeSnapshot.from_dict(data)
    except FileNotFoundError as e:
        raise ConfigError(
            f"Theme data file not found: {path}",
            source=str(path),
            suggestion="Run 'design-sync build-theme' first",
        ) from e
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise ConfigError(
            f"Malformed theme data file {path}: {e}",
            source=str(path),
            expected="{tailwind: {...}, computed: {...}}",
            suggestion="Regenerate it with 'design-sync build-theme'",
        ) from e
