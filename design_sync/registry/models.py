"""Read-only component registry model."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ..errors import NotFoundError

AxisValue = str | bool | int | float


def value_key(value: AxisValue) -> str:
    """JSON object key for an axis value: booleans become "true"/"false"."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class PropAxis:
    """One variant axis: an ordered finite set of values with class strings."""

    name: str
    values: tuple[AxisValue, ...]
    classes: Mapping[str, str]
    descriptions: Mapping[str, str]
    default: AxisValue
    type: str = "enum"

    def __post_init__(self) -> None:
        object.__setattr__(self, "classes", MappingProxyType(dict(self.classes)))
        object.__setattr__(self, "descriptions", MappingProxyType(dict(self.descriptions)))

    def __len__(self) -> int:
        return len(self.values)

    def class_for(self, value: AxisValue) -> str:
        return self.classes[value_key(value)]

    def description_for(self, value: AxisValue) -> str:
        return self.descriptions[value_key(value)]

    def index_of(self, value: AxisValue) -> int:
        """Declared position of ``value``."""
        key = value_key(value)
        for index, candidate in enumerate(self.values):
            if value_key(candidate) == key:
                return index
        raise ValueError(f"{value!r} is not a value of axis {self.name}")


@dataclass(frozen=True)
class SubComponent:
    """A named sub-element rendered inside a component (e.g. Dialog.Title)."""

    name: str
    description: str = ""
    base_classes: str | None = None


@dataclass(frozen=True)
class ComponentDescriptor:
    """A validated component entry."""

    name: str
    description: str
    category: str
    props: Mapping[str, PropAxis]
    colors: tuple[str, ...] = ()
    base_classes: str | None = None
    sub_components: Mapping[str, SubComponent] = field(default_factory=dict)
    styling: Mapping[str, Any] = field(default_factory=dict)
    # Declared props that are not variant axes (free-form strings, callbacks)
    other_props: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "props", MappingProxyType(dict(self.props)))
        object.__setattr__(
            self, "sub_components", MappingProxyType(dict(self.sub_components))
        )
        object.__setattr__(self, "styling", MappingProxyType(dict(self.styling)))
        object.__setattr__(self, "other_props", MappingProxyType(dict(self.other_props)))

    @property
    def axes(self) -> list[PropAxis]:
        """Variant axes in declaration order."""
        return list(self.props.values())

    @property
    def variant_count(self) -> int:
        count = 1
        for axis in self.props.values():
            count *= len(axis)
        return count

    def variant_values(self, prop: str) -> tuple[AxisValue, ...] | None:
        axis = self.props.get(prop)
        return axis.values if axis else None

    def default_value(self, prop: str) -> AxisValue | None:
        axis = self.props.get(prop)
        return axis.default if axis else None

    def descriptions(self, prop: str) -> Mapping[str, str] | None:
        axis = self.props.get(prop)
        return axis.descriptions if axis else None


class ComponentRegistry:
    """Read-only mapping of component name to descriptor.

    ``get`` never raises: unknown names produce a ``NotFoundError`` value.
    """

    def __init__(self, components: Mapping[str, ComponentDescriptor], source: str = "registry"):
        self._components = MappingProxyType(dict(components))
        self.source = source

    def get(self, name: str) -> ComponentDescriptor | NotFoundError:
        descriptor = self._components.get(name)
        if descriptor is None:
            return NotFoundError.for_name(name, self._components)
        return descriptor

    lookup = get

    def require(self, name: str) -> ComponentDescriptor:
        """Like ``get`` but raises ``ConfigError`` for unknown names."""
        result = self.get(name)
        if isinstance(result, NotFoundError):
            raise result.to_error()
        return result

    def names(self) -> list[str]:
        return list(self._components)

    def by_category(self, category: str) -> list[ComponentDescriptor]:
        return [c for c in self._components.values() if c.category == category]

    def categories(self) -> list[str]:
        return sorted({c.category for c in self._components.values()})

    def colors(self, name: str | None = None) -> list[str]:
        """Color classes declared by one component, or by all of them, deduplicated."""
        components = [self.require(name)] if name else self._components.values()
        return list(dict.fromkeys(color for c in components for color in c.colors))

    def __getitem__(self, name: str) -> ComponentDescriptor:
        return self._components[name]

    def __contains__(self, name: object) -> bool:
        return name in self._components

    def __iter__(self) -> Iterator[str]:
        return iter(self._components)

    def __len__(self) -> int:
        return len(self._components)

    def values(self) -> list[ComponentDescriptor]:
        return list(self._components.values())
