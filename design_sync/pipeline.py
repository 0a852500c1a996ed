"""
Generation pipeline.

Theme snapshot, then registry, then per-component parse and expansion, then
emission into a scene graph. The run is sequential and aborts on the first
``ConfigError`` or ``LayoutInvariantError``; nothing is written until every
component has been emitted.
"""

import asyncio
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .config import SyncConfig
from .errors import ConfigError
from .matrix.generator import MatrixResult, VariantMatrixGenerator
from .parser.class_parser import ClassParser
from .registry.loader import RegistryLoader
from .registry.models import ComponentRegistry
from .scene.document import DocumentSceneGraph
from .scene.emitter import EmitSummary, SceneEmitter
from .scene.protocol import SceneGraph
from .sync_logging import LogCategory, get_category_logger
from .theme.opacity import OpacityModifier, extract_opacity_modifiers_from_sources
from .theme.resolver import ThemeResolver, ThemeTokenSpec, write_theme_data
from .theme.snapshot import ThemeSnapshot

logger = get_category_logger(LogCategory.MATRIX)


@dataclass
class GenerationResult:
    """Everything one generation run produced."""

    results: list[MatrixResult] = field(default_factory=list)
    summary: EmitSummary = field(default_factory=EmitSummary)
    duration_ms: float = 0.0

    @property
    def cell_count(self) -> int:
        return sum(len(result.cells) for result in self.results)


def build_theme(config: SyncConfig) -> ThemeSnapshot:
    """Build the theme snapshot from the configured CSS sources."""
    spec = ThemeTokenSpec(root_font_size_px=config.parser.root_font_size_px)
    framework = config.resolve(config.paths.framework_css)
    project = config.resolve(config.paths.project_css)
    return ThemeResolver(spec).build_from_files(framework, project)


def collect_opacity_modifiers(config: SyncConfig) -> list[OpacityModifier]:
    """Opacity modifiers used by the configured component sources."""
    paths: set[Path] = set()
    for pattern in config.paths.component_sources:
        paths.update(path for path in config.root.glob(pattern) if path.is_file())
    sources = [path.read_text(encoding="utf-8") for path in sorted(paths)]
    modifiers = extract_opacity_modifiers_from_sources(sources)
    logger.debug(f"Found {len(modifiers)} opacity modifiers in {len(sources)} sources")
    return modifiers


def write_theme(
    config: SyncConfig,
    snapshot: ThemeSnapshot | None = None,
    output: Path | None = None,
) -> Path:
    """Build (if needed) and write the theme data artifact."""
    snapshot = snapshot or build_theme(config)
    target = output or config.resolve(config.paths.theme_data)
    return write_theme_data(snapshot, target, collect_opacity_modifiers(config))


def load_registry_from_config(config: SyncConfig) -> ComponentRegistry:
    path = config.resolve(config.paths.registry)
    return RegistryLoader(str(path)).load(path)


def select_components(registry: ComponentRegistry, names: Sequence[str] | None) -> list[str]:
    """Resolve requested names, or every component when ``names`` is empty.

    Raises:
        ConfigError: If a requested component is not in the registry.
    """
    if not names:
        return registry.names()
    return [registry.require(name).name for name in names]


def expand_components(
    config: SyncConfig,
    snapshot: ThemeSnapshot,
    registry: ComponentRegistry,
    names: Sequence[str] | None = None,
) -> list[MatrixResult]:
    """Expand and lay out the selected components in registry order."""
    parser = ClassParser(snapshot, config.parser)
    generator = VariantMatrixGenerator(
        snapshot,
        parser=parser,
        constants=config.matrix.layout,
        modes=config.matrix.modes,
        row_axes=config.matrix.row_axes,
    )
    return [generator.expand(registry.require(name)) for name in select_components(registry, names)]


async def run_generation(
    config: SyncConfig,
    scene: SceneGraph,
    names: Sequence[str] | None = None,
    snapshot: ThemeSnapshot | None = None,
    registry: ComponentRegistry | None = None,
) -> GenerationResult:
    """Run the whole pipeline into ``scene``.

    Raises:
        ConfigError: On a missing or invalid theme, registry or config value.
        LayoutInvariantError: If any component's layout is inconsistent.
    """
    start = time.perf_counter()
    snapshot = snapshot or build_theme(config)
    registry = registry or load_registry_from_config(config)
    results = expand_components(config, snapshot, registry, names)

    emitter = SceneEmitter(scene, config.matrix.layout)
    summary = await emitter.emit_all(results)

    result = GenerationResult(
        results=results,
        summary=summary,
        duration_ms=(time.perf_counter() - start) * 1000,
    )
    logger.info(
        f"Generated {len(results)} components ({result.cell_count} cells)",
        extra={"cell_count": result.cell_count, "duration_ms": result.duration_ms},
    )
    return result


def generate_document(
    config: SyncConfig,
    names: Sequence[str] | None = None,
    output: Path | None = None,
) -> tuple[GenerationResult, Path]:
    """Generate into a ``DocumentSceneGraph`` and write it once the run succeeds."""
    scene = DocumentSceneGraph()
    result = asyncio.run(run_generation(config, scene, names))
    target = output or config.resolve(config.paths.output)
    if target is None:
        raise ConfigError("No output path configured", expected="paths.output")
    scene.write(target)
    return result, target
