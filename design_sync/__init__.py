"""
design-sync: a design-token codegen pipeline.

Parses a component library's utility-class strings into structured styles,
resolves them against a theme snapshot built from the CSS theme sources,
expands each registry component into its full variant matrix, and guards
generator sources against values that drift from the canonical constants.
"""

__version__ = "1.0.0"

from .config import SyncConfig, SyncConfigLoader, load_sync_config
from .errors import (
    ConfigError,
    DesignSyncError,
    LayoutInvariantError,
    NotFoundError,
    ParseWarning,
)
from .parser import ClassParser, ParsedStyle
from .registry import ComponentRegistry, load_registry
from .theme import ThemeSnapshot, build_snapshot

__all__ = [
    "ClassParser",
    "ComponentRegistry",
    "ConfigError",
    "DesignSyncError",
    "LayoutInvariantError",
    "NotFoundError",
    "ParseWarning",
    "ParsedStyle",
    "SyncConfig",
    "SyncConfigLoader",
    "ThemeSnapshot",
    "__version__",
    "build_snapshot",
    "load_registry",
    "load_sync_config",
]
