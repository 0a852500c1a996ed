"""Unit tests for registry loading and schema validation."""

import json

import pytest

from design_sync.errors import ConfigError, RegistryError
from design_sync.registry import RegistryLoader, load_registry


class TestRegistryLoader:
    """Tests for loading valid registries."""

    def test_load_mapping(self, registry_data):
        registry = load_registry(registry_data)
        assert registry.names() == ["Button", "Collapsible"]

    def test_load_wrapped_json_text(self, registry_data):
        registry = load_registry(json.dumps({"components": registry_data}))
        assert len(registry) == 2

    def test_load_file_records_source(self, tmp_path, registry_data):
        path = tmp_path / "registry.json"
        path.write_text(json.dumps(registry_data))
        registry = RegistryLoader().load(path)
        assert registry.source == str(path)

    def test_axes_and_other_props(self, registry):
        button = registry["Button"]
        assert list(button.props) == ["size", "variant"]
        assert "onClick" in button.other_props
        assert button.other_props["onClick"]["type"] == "function"

    def test_boolean_axis(self, registry):
        axis = registry["Collapsible"].props["open"]
        assert axis.values == (False, True)
        assert axis.type == "boolean"
        assert axis.default is False
        assert axis.class_for(True) == "bg-kumo-elevated border border-kumo-line"

    def test_sub_components_and_styling(self, registry):
        collapsible = registry["Collapsible"]
        trigger = collapsible.sub_components["Trigger"]
        assert trigger.name == "Collapsible.Trigger"
        assert trigger.base_classes.startswith("flex")
        assert collapsible.styling["minWidth"] == 160

    def test_base_styles_key(self):
        registry = load_registry(
            {
                "Chip": {
                    "description": "Compact label",
                    "category": "Display",
                    "baseStyles": "h-9 px-3 bg-kumo-brand",
                    "subComponents": {"Icon": {"baseStyles": "size-4"}},
                }
            }
        )
        chip = registry["Chip"]
        assert chip.base_classes == "h-9 px-3 bg-kumo-brand"
        assert chip.sub_components["Icon"].base_classes == "size-4"

    def test_base_classes_is_accepted_as_alias(self, registry):
        assert registry["Button"].base_classes.startswith("inline-flex")

    def test_component_without_props(self):
        registry = load_registry({"Divider": {"description": "Rule", "category": "Layout"}})
        assert registry["Divider"].props == {}
        assert registry["Divider"].variant_count == 1


class TestRegistryValidation:
    """Any invalid entry fails the whole load with a RegistryError."""

    def test_missing_default(self, registry_data):
        del registry_data["Button"]["props"]["size"]["default"]
        with pytest.raises(RegistryError) as exc_info:
            load_registry(registry_data)
        error = exc_info.value
        assert error.component == "Button"
        assert error.prop == "size"
        assert "default" in error.message

    def test_default_not_in_values(self, registry_data):
        registry_data["Button"]["props"]["size"]["default"] = "xl"
        with pytest.raises(RegistryError) as exc_info:
            load_registry(registry_data)
        assert "'xl'" in exc_info.value.message

    def test_missing_class_for_value(self, registry_data):
        del registry_data["Collapsible"]["props"]["open"]["classes"]["true"]
        with pytest.raises(RegistryError) as exc_info:
            load_registry(registry_data)
        assert "classes missing" in exc_info.value.message
        assert exc_info.value.component == "Collapsible"

    def test_missing_description_for_value(self, registry_data):
        del registry_data["Button"]["props"]["variant"]["descriptions"]["ghost"]
        with pytest.raises(RegistryError, match="descriptions missing"):
            load_registry(registry_data)

    def test_classes_for_unknown_value(self, registry_data):
        registry_data["Button"]["props"]["size"]["classes"]["xl"] = "h-12"
        with pytest.raises(RegistryError, match="unknown values"):
            load_registry(registry_data)

    def test_duplicate_values(self, registry_data):
        registry_data["Button"]["props"]["size"]["values"] = ["sm", "sm", "base", "lg"]
        with pytest.raises(RegistryError, match="duplicate"):
            load_registry(registry_data)

    def test_empty_values(self, registry_data):
        registry_data["Button"]["props"]["size"]["values"] = []
        with pytest.raises(RegistryError, match="no values"):
            load_registry(registry_data)

    def test_missing_category(self, registry_data):
        del registry_data["Button"]["category"]
        with pytest.raises(RegistryError) as exc_info:
            load_registry(registry_data)
        assert "category" in exc_info.value.message

    def test_name_must_match_key(self, registry_data):
        registry_data["Button"]["name"] = "PrimaryButton"
        with pytest.raises(RegistryError, match="does not match"):
            load_registry(registry_data)

    def test_invalid_json(self):
        with pytest.raises(RegistryError, match="Invalid JSON"):
            load_registry("{not json")

    def test_missing_file(self, tmp_path):
        with pytest.raises(RegistryError, match="not found"):
            load_registry(tmp_path / "missing.json")

    def test_registry_error_is_config_error(self, registry_data):
        registry_data["Button"]["props"]["size"]["values"] = []
        with pytest.raises(ConfigError):
            load_registry(registry_data)
