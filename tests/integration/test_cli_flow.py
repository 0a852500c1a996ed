"""Integration tests running the CLI commands over a project directory."""

import json

import pytest
from click.testing import CliRunner

from design_sync.cli import cli

pytestmark = pytest.mark.integration


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, project_dir):
    config = str(project_dir / "design-sync.config.json")

    def run(*args: str):
        command, *rest = args
        return runner.invoke(cli, [command, "--config", config, *rest])

    return run


class TestBuildTheme:
    """build-theme writes the theme data artifact."""

    def test_build_theme(self, invoke, project_dir):
        result = invoke("build-theme")
        assert result.exit_code == 0, result.output
        assert "Wrote theme data to" in result.output
        assert "spacing base 4px" in result.output
        data = json.loads((project_dir / "generated" / "theme-data.json").read_text())
        assert data["computed"]["fontSize"]["base"] == 15.0

    def test_build_theme_custom_output(self, invoke, tmp_path):
        output = tmp_path / "elsewhere" / "theme.json"
        result = invoke("build-theme", "-q", "-o", str(output))
        assert result.exit_code == 0
        assert output.exists()
        assert "Wrote" not in result.output


class TestGenerate:
    """generate writes the scene document."""

    def test_generate_one(self, invoke, project_dir):
        result = invoke("generate", "Collapsible")
        assert result.exit_code == 0, result.output
        assert "Collapsible: 6 variants (3x2, 2 modes)" in result.output
        assert "Wrote 1 component(s)" in result.output
        assert (project_dir / "generated" / "scene.json").exists()

    def test_generate_all(self, invoke, project_dir):
        result = invoke("generate", "--all")
        assert result.exit_code == 0, result.output
        assert "Wrote 2 component(s)" in result.output
        document = json.loads((project_dir / "generated" / "scene.json").read_text())
        assert len(document["nodes"]) == 4

    def test_generate_unknown(self, invoke, project_dir):
        result = invoke("generate", "Dialog")
        assert result.exit_code == 1
        assert "Unknown component: Dialog" in result.output
        assert not (project_dir / "generated" / "scene.json").exists()


class TestCheckDrift:
    """check-drift exits non-zero only on hard violations."""

    def test_clean_project_after_build_theme(self, invoke):
        assert invoke("build-theme", "-q").exit_code == 0
        result = invoke("check-drift")
        assert result.exit_code == 0, result.output
        assert "No drift found in 2 file(s)" in result.output

    def test_stale_theme_data_missing(self, invoke):
        result = invoke("check-drift")
        assert result.exit_code == 1
        assert "SYNC.THEME_DATA" in result.output
        assert "theme-data.json not found" in result.output

    def test_no_sync_skips_theme_data(self, invoke):
        result = invoke("check-drift", "--no-sync")
        assert result.exit_code == 0, result.output
        assert "No drift found in 1 file(s)" in result.output

    def test_drifted_generator_fails(self, invoke, project_dir, drifted_generator):
        (project_dir / "generators" / "dialog.py").write_text(drifted_generator)
        result = invoke("check-drift", "--no-sync")
        assert result.exit_code == 1
        assert "generators/dialog.py:3 DRIFT.REDECLARED_SECTION_PADDING" in result.output
        assert "1 hard drift violation(s) found" in result.output

    def test_explicit_files(self, invoke, project_dir, drifted_generator):
        drifted = project_dir / "scratch.py"
        drifted.write_text(drifted_generator)
        result = invoke("check-drift", "--no-sync", str(project_dir / "generators" / "button.py"))
        assert result.exit_code == 0, result.output
        result = invoke("check-drift", "--no-sync", str(drifted))
        assert result.exit_code == 1

    def test_json_format(self, invoke, project_dir, drifted_generator):
        (project_dir / "generators" / "dialog.py").write_text(drifted_generator)
        result = invoke("check-drift", "--no-sync", "--format", "json", "-q")
        assert result.exit_code == 1
        start = result.output.index("{")
        payload, _ = json.JSONDecoder().raw_decode(result.output[start:])
        assert payload["decision"] == "fail"
        assert payload["files_checked"] == 2
        assert "DRIFT.REDECLARED_SECTION_PADDING" in {
            v["rule_id"] for v in payload["violations"]
        }

    def test_disabled_rule(self, runner, project_dir, drifted_generator):
        config_path = project_dir / "design-sync.config.json"
        config = json.loads(config_path.read_text())
        config["drift"]["disabledRules"] = [
            "DRIFT.REDECLARED_SECTION_PADDING",
            "DRIFT.MISSING_CONSTANT_IMPORT",
        ]
        config_path.write_text(json.dumps(config))
        (project_dir / "generators" / "dialog.py").write_text(drifted_generator)
        result = runner.invoke(cli, ["check-drift", "--no-sync", "--config", str(config_path)])
        assert result.exit_code == 0, result.output

    def test_value_sync_entry(self, runner, project_dir):
        (project_dir / "generators" / "layout.py").write_text(
            "BASE_UNIT = 5\n\n\ndef get_layout_config():\n    return {}\n"
        )
        config_path = project_dir / "design-sync.config.json"
        config = json.loads(config_path.read_text())
        config["drift"]["checkThemeData"] = False
        config["drift"]["sync"] = [
            {
                "file": "generators/layout.py",
                "name": "BASE_UNIT",
                "kind": "value",
                "snapshotPath": "spacing.baseUnitPx",
            }
        ]
        config_path.write_text(json.dumps(config))
        result = runner.invoke(cli, ["check-drift", "--config", str(config_path)])
        assert result.exit_code == 1
        assert "SYNC.VALUE.BASE_UNIT" in result.output
