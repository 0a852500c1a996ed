"""Integration tests for the generation pipeline over a project on disk."""

import json

import pytest

from design_sync.errors import ConfigError
from design_sync.pipeline import (
    build_theme,
    collect_opacity_modifiers,
    generate_document,
    load_registry_from_config,
    run_generation,
    write_theme,
)
from design_sync.scene import DocumentSceneGraph
from design_sync.theme import load_theme_data

pytestmark = pytest.mark.integration


class TestThemeStage:
    """Building and writing the theme data artifact."""

    def test_project_overrides_applied(self, project_config):
        snapshot = build_theme(project_config)
        assert snapshot.font_size["base"] == 15.0
        assert snapshot.framework.font_size["base"] == 16.0
        assert len(snapshot.sources) == 2

    def test_missing_project_css_falls_back(self, project_dir, project_config):
        (project_dir / "theme" / "project.css").unlink()
        snapshot = build_theme(project_config)
        assert snapshot.computed == snapshot.framework

    def test_write_theme_includes_opacity_modifiers(self, project_dir, project_config):
        path = write_theme(project_config)
        assert path == project_dir / "generated" / "theme-data.json"
        data = json.loads(path.read_text())
        assert {"_generated", "_sources", "tailwind", "computed"} <= data.keys()
        assert [m["variableName"] for m in data["opacityModifiers"]] == [
            "opacity-kumo-brand-70",
            "opacity-kumo-default-80",
        ]

    def test_written_theme_loads_back(self, project_config):
        snapshot = build_theme(project_config)
        path = write_theme(project_config, snapshot)
        assert load_theme_data(path).to_dict() == snapshot.to_dict()

    def test_no_component_sources(self, project_config):
        project_config.paths.component_sources = []
        assert collect_opacity_modifiers(project_config) == []


class TestGeneration:
    """End-to-end generation into a document."""

    def test_generate_one_component(self, project_dir, project_config):
        result, path = generate_document(project_config, ["Button"])
        assert path == project_dir / "generated" / "scene.json"
        assert result.cell_count == 9
        assert [r.component for r in result.results] == ["Button"]

        document = json.loads(path.read_text())
        assert [node["name"] for node in document["nodes"]] == [
            "Button (light)",
            "Button (dark)",
        ]

    def test_generate_all_in_registry_order(self, project_config, tmp_path):
        output = tmp_path / "out" / "all.json"
        result, path = generate_document(project_config, output=output)
        assert path == output
        assert [r.component for r in result.results] == ["Button", "Collapsible"]
        assert result.cell_count == 15
        assert result.summary.placements["Button"] == project_config.matrix.layout.start_y

    def test_unknown_component_writes_nothing(self, project_dir, project_config):
        with pytest.raises(ConfigError, match="Unknown component"):
            generate_document(project_config, ["Button", "Dialog"])
        assert not (project_dir / "generated" / "scene.json").exists()

    def test_project_theme_changes_cell_sizes(self, project_config):
        snapshot = build_theme(project_config)
        registry = load_registry_from_config(project_config)
        result, _ = generate_document(project_config, ["Button"])
        assert snapshot.border_radius["lg"] == 10.0
        corner_radii = {cell.root_style.border_radius for cell in result.results[0].cells}
        assert corner_radii == {10.0}
        assert registry.names() == ["Button", "Collapsible"]

    def test_configured_modes_and_row_axes(self, project_config):
        project_config.matrix.modes = ["light"]
        project_config.matrix.row_axes = {"Button": ["variant"]}
        result, _ = generate_document(project_config, ["Button"])
        button = result.results[0]
        assert len(button.sections) == 1
        assert [row.label for row in button.rows][0] == "variant=primary"

    @pytest.mark.asyncio
    async def test_run_generation_into_custom_scene(self, project_config):
        scene = DocumentSceneGraph()
        result = await run_generation(project_config, scene, ["Collapsible"])
        assert result.summary.node_count == len(scene.nodes)
        assert scene.calls.count("create_component") == 12
