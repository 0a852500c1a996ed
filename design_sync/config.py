"""design-sync configuration loader.

Loads ``design-sync.config.json``. Every section is a dataclass with
camelCase ``to_dict``/``from_dict`` so the file round-trips unchanged.
Relative paths resolve against the directory holding the config file.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .constants import LayoutConstants
from .errors import ConfigError
from .parser.config import ParserConfig
from .sync_logging import get_logger

logger = get_logger()

CONFIG_FILENAME = "design-sync.config.json"
CONFIG_ENV_VAR = "DESIGN_SYNC_CONFIG"


@dataclass
class PathsConfig:
    """Locations of the pipeline's inputs and outputs."""

    framework_css: str = "node_modules/tailwindcss/theme.css"
    project_css: str | None = "src/styles/theme.css"
    registry: str = "ai/component-registry.json"
    theme_data: str = "generated/theme-data.json"
    output: str = "generated/scene.json"
    component_sources: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "frameworkCss": self.framework_css,
            "projectCss": self.project_css,
            "registry": self.registry,
            "themeData": self.theme_data,
            "output": self.output,
            "componentSources": self.component_sources,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PathsConfig":
        """Create from dictionary."""
        defaults = cls()
        return cls(
            framework_css=data.get("frameworkCss", defaults.framework_css),
            project_css=data.get("projectCss", defaults.project_css),
            registry=data.get("registry", defaults.registry),
            theme_data=data.get("themeData", defaults.theme_data),
            output=data.get("output", defaults.output),
            component_sources=data.get("componentSources", []),
        )


@dataclass
class MatrixConfig:
    """Variant matrix generation settings."""

    modes: list[str] = field(default_factory=lambda: ["light", "dark"])
    row_axes: dict[str, list[str]] = field(default_factory=dict)
    layout: LayoutConstants = field(default_factory=LayoutConstants)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "modes": self.modes,
            "rowAxes": self.row_axes,
            "layout": self.layout.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MatrixConfig":
        """Create from dictionary."""
        return cls(
            modes=data.get("modes", ["light", "dark"]),
            row_axes={k: list(v) for k, v in data.get("rowAxes", {}).items()},
            layout=LayoutConstants.from_dict(data.get("layout", {})),
        )


@dataclass
class SyncEntry:
    """One registry-sync check: a value embedded in a source file.

    ``kind`` is ``"map"`` for a literal ``{value: number}`` map re-derived from
    a registry prop's class strings, or ``"value"`` for a single scalar
    compared to a theme snapshot path such as ``spacing.baseUnitPx``.
    """

    file: str
    name: str
    kind: str = "map"
    component: str | None = None
    prop: str | None = None
    style_property: str | None = None
    snapshot_path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "file": self.file,
            "name": self.name,
            "kind": self.kind,
            "component": self.component,
            "prop": self.prop,
            "styleProperty": self.style_property,
            "snapshotPath": self.snapshot_path,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncEntry":
        """Create from dictionary."""
        return cls(
            file=data["file"],
            name=data["name"],
            kind=data.get("kind", "map"),
            component=data.get("component"),
            prop=data.get("prop"),
            style_property=data.get("styleProperty"),
            snapshot_path=data.get("snapshotPath"),
        )


@dataclass
class DriftConfig:
    """Drift guard settings."""

    sources: list[str] = field(
        default_factory=lambda: ["generators/**/*.py", "generators/**/*.ts"]
    )
    disabled_rules: list[str] = field(default_factory=list)
    severity_overrides: dict[str, str] = field(default_factory=dict)
    constants_module: str = "design_sync.constants"
    sync: list[SyncEntry] = field(default_factory=list)
    check_theme_data: bool = True
    max_workers: int = 8

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "sources": self.sources,
            "disabledRules": self.disabled_rules,
            "severityOverrides": self.severity_overrides,
            "constantsModule": self.constants_module,
            "sync": [entry.to_dict() for entry in self.sync],
            "checkThemeData": self.check_theme_data,
            "maxWorkers": self.max_workers,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DriftConfig":
        """Create from dictionary."""
        defaults = cls()
        return cls(
            sources=data.get("sources", defaults.sources),
            disabled_rules=data.get("disabledRules", []),
            severity_overrides=data.get("severityOverrides", {}),
            constants_module=data.get("constantsModule", defaults.constants_module),
            sync=[SyncEntry.from_dict(entry) for entry in data.get("sync", [])],
            check_theme_data=data.get("checkThemeData", True),
            max_workers=int(data.get("maxWorkers", defaults.max_workers)),
        )


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    file: str | None = None
    format: str = "text"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"level": self.level, "file": self.file, "format": self.format}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LoggingConfig":
        """Create from dictionary."""
        return cls(
            level=data.get("level", "INFO"),
            file=data.get("file"),
            format=data.get("format", "text"),
        )


@dataclass
class SyncConfig:
    """Complete design-sync configuration."""

    paths: PathsConfig = field(default_factory=PathsConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    matrix: MatrixConfig = field(default_factory=MatrixConfig)
    drift: DriftConfig = field(default_factory=DriftConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    root: Path = field(default_factory=Path.cwd, repr=False)

    def resolve(self, relative: str | None) -> Path | None:
        """Resolve a configured path against the config root."""
        if relative is None:
            return None
        path = Path(relative)
        return path if path.is_absolute() else self.root / path

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "paths": self.paths.to_dict(),
            "parser": self.parser.to_dict(),
            "matrix": self.matrix.to_dict(),
            "drift": self.drift.to_dict(),
            "logging": self.logging.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], root: Path | None = None) -> "SyncConfig":
        """Create from dictionary."""
        return cls(
            paths=PathsConfig.from_dict(data.get("paths", {})),
            parser=ParserConfig.from_dict(data.get("parser", {})),
            matrix=MatrixConfig.from_dict(data.get("matrix", {})),
            drift=DriftConfig.from_dict(data.get("drift", {})),
            logging=LoggingConfig.from_dict(data.get("logging", {})),
            root=root or Path.cwd(),
        )


class SyncConfigLoader:
    """Loader for design-sync configuration."""

    def __init__(self, project_path: Path | None = None):
        self.project_path = Path(project_path) if project_path else Path.cwd()

    def load(self, config_path: Path | None = None) -> SyncConfig:
        """Load configuration.

        Precedence (highest to lowest):
        1. Explicit config_path
        2. Environment variable DESIGN_SYNC_CONFIG
        3. design-sync.config.json in the project root
        4. Default configuration rooted at the project path

        Raises:
            ConfigError: If an explicit config file is missing or is not valid JSON.
        """
        if config_path is not None:
            if not config_path.exists():
                raise ConfigError(
                    f"Config file not found: {config_path}",
                    source=str(config_path),
                    suggestion=f"Create {CONFIG_FILENAME} or drop --config",
                )
            return self._load_from_file(config_path)

        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path and Path(env_path).exists():
            return self._load_from_file(Path(env_path))

        project_config = self.project_path / CONFIG_FILENAME
        if project_config.exists():
            return self._load_from_file(project_config)

        logger.debug("No design-sync config found, using defaults")
        return SyncConfig(root=self.project_path)

    def _load_from_file(self, config_path: Path) -> SyncConfig:
        logger.debug(f"Loading design-sync config from {config_path}")
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Invalid JSON in {config_path}: {e}",
                source=str(config_path),
                suggestion="Fix the JSON syntax of the config file",
            ) from e
        if not isinstance(data, dict):
            raise ConfigError(
                "Config root must be a JSON object",
                source=str(config_path),
                expected="{...}",
            )
        return SyncConfig.from_dict(data, root=config_path.resolve().parent)

    def save(self, config: SyncConfig, config_path: Path | None = None) -> Path:
        """Save configuration to a file."""
        if config_path is None:
            config_path = self.project_path / CONFIG_FILENAME

        config_path.write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")
        logger.info(f"Saved design-sync config to {config_path}")
        return config_path


def load_sync_config(
    project_path: Path | None = None, config_path: Path | None = None
) -> SyncConfig:
    """Convenience function to load design-sync configuration."""
    return SyncConfigLoader(project_path).load(config_path)
