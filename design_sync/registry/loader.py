"""Component registry loader with full schema validation.

The registry file maps component names to
``{name, description, category, props, colors, baseStyles?, subComponents?,
styling?}`` (``baseClasses`` is accepted for ``baseStyles``),
optionally wrapped in ``{"components": {...}}``. A prop is a variant axis
when it declares ``values``; such props must declare a ``default`` that is
one of the values, and a class string and a description for every value.
Any invalid entry fails the entire load.
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    model_validator,
)

from ..errors import RegistryError
from ..sync_logging import LogCategory, get_category_logger
from .models import (
    AxisValue,
    ComponentDescriptor,
    ComponentRegistry,
    PropAxis,
    SubComponent,
    value_key,
)

logger = get_category_logger(LogCategory.REGISTRY)


class PropSchema(BaseModel):
    """Schema for one declared prop."""

    model_config = ConfigDict(extra="allow")

    type: str | None = None
    values: list[bool | int | float | str] | None = None
    classes: dict[str, str] | None = None
    descriptions: dict[str, str] | None = None
    default: bool | int | float | str | None = None
    description: str | None = None
    optional: bool = False

    @model_validator(mode="after")
    def check_axis(self) -> "PropSchema":
        if self.values is None:
            return self
        if not self.values:
            raise ValueError("variant axis declares no values")

        keys = [value_key(v) for v in self.values]
        duplicates = sorted({k for k in keys if keys.count(k) > 1})
        if duplicates:
            raise ValueError(f"duplicate values {duplicates}")

        if self.default is None:
            raise ValueError(f"missing default; expected one of {keys}")
        if value_key(self.default) not in keys:
            raise ValueError(f"default {self.default!r} is not one of {keys}")

        for label, mapping in (("classes", self.classes), ("descriptions", self.descriptions)):
            mapping = mapping or {}
            missing = [k for k in keys if k not in mapping]
            if missing:
                raise ValueError(f"{label} missing for values {missing}")
            extra = sorted(set(mapping) - set(keys))
            if extra:
                raise ValueError(f"{label} declared for unknown values {extra}")
        return self


class SubComponentSchema(BaseModel):
    """Schema for a sub-component entry."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str | None = None
    description: str = ""
    base_classes: str | None = Field(
        default=None,
        validation_alias=AliasChoices("baseStyles", "baseClasses", "base_classes"),
    )


class ComponentSchema(BaseModel):
    """Schema for one component entry."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str | None = None
    description: str
    category: str
    props: dict[str, PropSchema] = Field(default_factory=dict)
    colors: list[str] = Field(default_factory=list)
    base_classes: str | None = Field(
        default=None,
        validation_alias=AliasChoices("baseStyles", "baseClasses", "base_classes"),
    )
    sub_components: dict[str, SubComponentSchema] | None = Field(
        default=None, alias="subComponents"
    )
    styling: dict[str, Any] | None = None


REGISTRY_ADAPTER = TypeAdapter(dict[str, ComponentSchema])


class RegistryLoader:
    """Loads and validates a component registry."""

    def __init__(self, source: str = "registry"):
        self.source = source

    def load(self, data: str | bytes | Mapping[str, Any] | Path) -> ComponentRegistry:
        """Load a registry from JSON text, a parsed mapping or a file path.

        Raises:
            RegistryError: If the JSON is malformed or any entry is invalid.
        """
        raw = self._read(data)
        components = raw.get("components", raw)
        if not isinstance(components, dict):
            raise RegistryError(
                "'components' must be an object of name -> descriptor",
                source=self.source,
            )

        try:
            schemas = REGISTRY_ADAPTER.validate_python(components)
        except ValidationError as e:
            raise self._to_registry_error(e) from e

        descriptors: dict[str, ComponentDescriptor] = {}
        for key, schema in schemas.items():
            if schema.name is not None and schema.name != key:
                raise RegistryError(
                    f"name {schema.name!r} does not match registry key",
                    component=key,
                    source=self.source,
                    suggestion=f"Set name to {key!r} or rename the entry",
                )
            descriptors[key] = _to_descriptor(key, schema)

        logger.info(f"Loaded {len(descriptors)} components from {self.source}")
        return ComponentRegistry(descriptors, source=self.source)

    def _read(self, data: str | bytes | Mapping[str, Any] | Path) -> dict[str, Any]:
        if isinstance(data, Path):
            self.source = str(data)
            try:
                data = data.read_text(encoding="utf-8")
            except FileNotFoundError as e:
                raise RegistryError(
                    f"Registry file not found: {data}",
                    source=str(data),
                    suggestion="Check paths.registry in the config",
                ) from e
        if isinstance(data, (str, bytes)):
            try:
                data = json.loads(data)
            except json.JSONDecodeError as e:
                raise RegistryError(
                    f"Invalid JSON: {e}",
                    source=self.source,
                    suggestion="Fix the registry JSON syntax",
                ) from e
        if not isinstance(data, Mapping):
            raise RegistryError("registry root must be a JSON object", source=self.source)
        return dict(data)

    def _to_registry_error(self, error: ValidationError) -> RegistryError:
        first = error.errors()[0]
        loc = [str(part) for part in first["loc"]]
        component = loc[0] if loc else None
        prop = loc[2] if len(loc) > 2 and loc[1] == "props" else None
        message = first["msg"].removeprefix("Value error, ")
        if prop is None and len(loc) > 1:
            message = f"{'.'.join(loc[1:])}: {message}"
        count = error.error_count()
        if count > 1:
            message = f"{message} (and {count - 1} more error(s))"
        return RegistryError(message, component=component, prop=prop, source=self.source)


def _to_descriptor(name: str, schema: ComponentSchema) -> ComponentDescriptor:
    axes: dict[str, PropAxis] = {}
    other: dict[str, dict[str, Any]] = {}
    for prop_name, prop in schema.props.items():
        if prop.values is None:
            other[prop_name] = prop.model_dump(exclude_none=True)
            continue
        values: tuple[AxisValue, ...] = tuple(prop.values)
        axes[prop_name] = PropAxis(
            name=prop_name,
            values=values,
            classes=prop.classes or {},
            descriptions=prop.descriptions or {},
            default=prop.default,
            type=prop.type or ("boolean" if all(isinstance(v, bool) for v in values) else "enum"),
        )

    sub_components = {
        key: SubComponent(
            name=sub.name or key,
            description=sub.description,
            base_classes=sub.base_classes,
        )
        for key, sub in (schema.sub_components or {}).items()
    }
    return ComponentDescriptor(
        name=name,
        description=schema.description,
        category=schema.category,
        props=axes,
        colors=tuple(schema.colors),
        base_classes=schema.base_classes,
        sub_components=sub_components,
        styling=schema.styling or {},
        other_props=other,
    )


def load_registry(data: str | bytes | Mapping[str, Any] | Path) -> ComponentRegistry:
    """Convenience function to load and validate a registry."""
    return RegistryLoader().load(data)
