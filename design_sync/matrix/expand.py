"""Cartesian expansion of variant axes and row/column assignment.

Cells follow axis declaration order with the last axis varying fastest.
Row and column indices are mixed-radix numbers over the declared value
order of the row axes and the column axes respectively, so the same
registry always yields the same grid.
"""

import itertools
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from ..errors import ConfigError
from ..registry.models import AxisValue, ComponentDescriptor, PropAxis, value_key


@dataclass(frozen=True)
class AxisAssignment:
    """Which axes index grid rows and which index grid columns."""

    row_axes: tuple[str, ...]
    col_axes: tuple[str, ...]


def cartesian_product(axes: Sequence[PropAxis]) -> list[dict[str, AxisValue]]:
    """Every combination of axis values, in declaration order."""
    names = [axis.name for axis in axes]
    return [
        dict(zip(names, combination, strict=True))
        for combination in itertools.product(*(axis.values for axis in axes))
    ]


def assign_axes(
    descriptor: ComponentDescriptor, row_axes: Sequence[str] | None = None
) -> AxisAssignment:
    """Split a component's axes into row axes and column axes.

    By default the first declared axis indexes rows and the rest index
    columns. Explicit ``row_axes`` keep the declaration order of the
    component, not the order they are listed in.

    Raises:
        ConfigError: If ``row_axes`` names an axis the component lacks.
    """
    declared = list(descriptor.props)
    if row_axes is None:
        chosen = set(declared[:1])
    else:
        unknown = [name for name in row_axes if name not in descriptor.props]
        if unknown:
            raise ConfigError(
                f"{descriptor.name}: row axes {unknown} are not variant axes",
                source="matrix.rowAxes",
                expected=f"one of {declared}",
                suggestion=f"Use axis names declared by {descriptor.name}",
            )
        chosen = set(row_axes)
    return AxisAssignment(
        row_axes=tuple(name for name in declared if name in chosen),
        col_axes=tuple(name for name in declared if name not in chosen),
    )


def track_count(descriptor: ComponentDescriptor, axis_names: Sequence[str]) -> int:
    count = 1
    for name in axis_names:
        count *= len(descriptor.props[name])
    return count


def mixed_radix_index(
    descriptor: ComponentDescriptor,
    axis_names: Sequence[str],
    values: Mapping[str, AxisValue],
) -> int:
    """Position of ``values`` along the track formed by ``axis_names``."""
    index = 0
    for name in axis_names:
        axis = descriptor.props[name]
        index = index * len(axis) + axis.index_of(values[name])
    return index


def track_label(axis_names: Sequence[str], values: Mapping[str, AxisValue]) -> str:
    return ", ".join(f"{name}={value_key(values[name])}" for name in axis_names)


def track_labels(descriptor: ComponentDescriptor, axis_names: Sequence[str]) -> list[str]:
    """Labels for every track, in index order."""
    axes = [descriptor.props[name] for name in axis_names]
    return [track_label(axis_names, combo) for combo in cartesian_product(axes)]
