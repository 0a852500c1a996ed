"""
Shared fixtures for the design-sync test suite.

Provides test fixtures for:
- Framework and project theme CSS
- A built theme snapshot and class parser
- A component registry with Button and Collapsible
- A temporary project with a design-sync.config.json
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any

import pytest

from design_sync.config import SyncConfig, load_sync_config
from design_sync.parser import ClassParser
from design_sync.registry import ComponentRegistry, load_registry
from design_sync.sync_logging import ROOT_LOGGER
from design_sync.theme import ThemeSnapshot, build_snapshot

FRAMEWORK_CSS = """\
/* Framework defaults */
@theme default {
  --spacing: 0.25rem;

  --radius-xs: 0.125rem;
  --radius-sm: 0.25rem;
  --radius-md: 0.375rem;
  --radius-lg: 0.5rem;
  --radius-xl: 0.75rem;
  --radius-2xl: 1rem;
  --radius-3xl: 1.5rem;
  --radius-4xl: 2rem;

  --text-xs: 0.75rem;
  --text-xs--line-height: calc(1 / 0.75);
  --text-sm: 0.875rem;
  --text-sm--line-height: calc(1.25 / 0.875);
  --text-base: 1rem;
  --text-lg: 1.125rem;
  --text-xl: 1.25rem;
  --text-2xl: 1.5rem;
  --text-3xl: 1.875rem;
  --text-4xl: 2.25rem;
  --text-5xl: 3rem;
  --text-6xl: 3.75rem;
  --text-7xl: 4.5rem;
  --text-8xl: 6rem;
  --text-9xl: 8rem;

  --font-weight-thin: 100;
  --font-weight-extralight: 200;
  --font-weight-light: 300;
  --font-weight-normal: 400;
  --font-weight-medium: 500;
  --font-weight-semibold: 600;
  --font-weight-bold: 700;
  --font-weight-extrabold: 800;
  --font-weight-black: 900;

  --shadow-2xs: 0 1px rgb(0 0 0 / 0.05);
  --shadow-xs: 0 1px 2px 0 rgb(0 0 0 / 0.05);
  --shadow-sm: 0 1px 3px 0 rgb(0 0 0 / 0.1), 0 1px 2px -1px rgb(0 0 0 / 0.1);
  --shadow-md: 0 4px 6px -1px rgb(0 0 0 / 0.1), 0 2px 4px -2px rgb(0 0 0 / 0.1);
  --shadow-lg: 0 10px 15px -3px rgb(0 0 0 / 0.1), 0 4px 6px -4px rgb(0 0 0 / 0.1);
  --shadow-xl: 0 20px 25px -5px rgb(0 0 0 / 0.1), 0 8px 10px -6px rgb(0 0 0 / 0.1);
  --shadow-2xl: 0 25px 50px -12px rgb(0 0 0 / 0.25);
}
"""

PROJECT_CSS = """\
@theme {
  --text-base: 15px;
  --radius-lg: 0.625rem;
  --color-kumo-brand: #f6821f;
  --text-color-kumo-default: var(--color-neutral-900);
}
"""


def make_registry_data() -> dict[str, Any]:
    """Registry with a three-by-three Button and a three-by-two Collapsible."""
    return {
        "Button": {
            "name": "Button",
            "description": "Clickable action",
            "category": "Action",
            "baseClasses": "inline-flex items-center rounded-lg font-medium",
            "props": {
                "size": {
                    "type": "enum",
                    "values": ["sm", "base", "lg"],
                    "classes": {
                        "sm": "h-6.5 px-2 text-xs",
                        "base": "h-9 px-3 text-base",
                        "lg": "h-10 px-4 text-base",
                    },
                    "descriptions": {
                        "sm": "Compact",
                        "base": "Default size",
                        "lg": "Prominent",
                    },
                    "default": "base",
                },
                "variant": {
                    "type": "enum",
                    "values": ["primary", "secondary", "ghost"],
                    "classes": {
                        "primary": "bg-kumo-brand text-white",
                        "secondary": "bg-kumo-control text-kumo-default border border-kumo-line",
                        "ghost": "bg-transparent text-kumo-default hover:bg-kumo-tint/50",
                    },
                    "descriptions": {
                        "primary": "Main call to action",
                        "secondary": "Secondary action",
                        "ghost": "Low emphasis",
                    },
                    "default": "primary",
                },
                "onClick": {"type": "function", "description": "Click handler"},
            },
            "colors": ["bg-kumo-brand", "text-kumo-default", "border-kumo-line"],
        },
        "Collapsible": {
            "name": "Collapsible",
            "description": "Expandable disclosure section",
            "category": "Layout",
            "baseClasses": "flex flex-col rounded-md",
            "props": {
                "size": {
                    "values": ["sm", "base", "lg"],
                    "classes": {
                        "sm": "gap-1 p-2 text-sm",
                        "base": "gap-2 p-3 text-base",
                        "lg": "gap-3 p-4 text-lg",
                    },
                    "descriptions": {
                        "sm": "Dense",
                        "base": "Default",
                        "lg": "Roomy",
                    },
                    "default": "base",
                },
                "open": {
                    "type": "boolean",
                    "values": [False, True],
                    "classes": {
                        "false": "bg-transparent",
                        "true": "bg-kumo-elevated border border-kumo-line",
                    },
                    "descriptions": {"false": "Collapsed", "true": "Expanded"},
                    "default": False,
                },
            },
            "colors": ["bg-kumo-elevated", "border-kumo-line"],
            "subComponents": {
                "Trigger": {
                    "name": "Collapsible.Trigger",
                    "description": "Toggle row",
                    "baseClasses": "flex items-center gap-2 h-8 text-sm",
                }
            },
            "styling": {"minWidth": 160},
        },
    }


CLEAN_GENERATOR = '''\
"""Button mockup generator."""

from design_sync.constants import SECTION_GAP, SECTION_PADDING


def get_button_config():
    return {"padding": SECTION_PADDING, "gap": SECTION_GAP}
'''

DRIFTED_GENERATOR = '''\
"""Dialog mockup generator."""

SECTION_PADDING = 24


def get_dialog_config():
    return {"padding": SECTION_PADDING}
'''


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handler and propagation changes made by setup_logging."""
    yield
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def clean_generator() -> str:
    return CLEAN_GENERATOR


@pytest.fixture
def drifted_generator() -> str:
    return DRIFTED_GENERATOR


@pytest.fixture(scope="session")
def framework_css() -> str:
    return FRAMEWORK_CSS


@pytest.fixture(scope="session")
def project_css() -> str:
    return PROJECT_CSS


@pytest.fixture(scope="session")
def snapshot() -> ThemeSnapshot:
    """Snapshot built from the framework theme alone (4px base unit)."""
    return build_snapshot(FRAMEWORK_CSS)


@pytest.fixture(scope="session")
def project_snapshot() -> ThemeSnapshot:
    """Snapshot with the project overrides applied."""
    return build_snapshot(FRAMEWORK_CSS, PROJECT_CSS)


@pytest.fixture(scope="session")
def parser(snapshot) -> ClassParser:
    return ClassParser(snapshot)


@pytest.fixture
def registry_data() -> dict[str, Any]:
    return make_registry_data()


@pytest.fixture
def registry(registry_data) -> ComponentRegistry:
    return load_registry(copy.deepcopy(registry_data))


@pytest.fixture
def project_dir(tmp_path, registry_data) -> Path:
    """A complete project: CSS sources, registry, generators and config."""
    (tmp_path / "theme").mkdir()
    (tmp_path / "theme" / "framework.css").write_text(FRAMEWORK_CSS, encoding="utf-8")
    (tmp_path / "theme" / "project.css").write_text(PROJECT_CSS, encoding="utf-8")
    (tmp_path / "registry.json").write_text(
        json.dumps({"components": registry_data}, indent=2), encoding="utf-8"
    )

    components = tmp_path / "src" / "components"
    components.mkdir(parents=True)
    (components / "button.tsx").write_text(
        'const cls = "bg-kumo-brand hover:bg-kumo-brand/70 text-kumo-default/80";\n',
        encoding="utf-8",
    )

    generators = tmp_path / "generators"
    generators.mkdir()
    (generators / "button.py").write_text(CLEAN_GENERATOR, encoding="utf-8")

    config = {
        "paths": {
            "frameworkCss": "theme/framework.css",
            "projectCss": "theme/project.css",
            "registry": "registry.json",
            "themeData": "generated/theme-data.json",
            "output": "generated/scene.json",
            "componentSources": ["src/components/**/*.tsx"],
        },
        "drift": {"sources": ["generators/**/*.py"]},
    }
    (tmp_path / "design-sync.config.json").write_text(
        json.dumps(config, indent=2), encoding="utf-8"
    )
    return tmp_path


@pytest.fixture
def project_config(project_dir) -> SyncConfig:
    return load_sync_config(config_path=project_dir / "design-sync.config.json")
