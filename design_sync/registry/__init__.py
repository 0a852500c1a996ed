"""Component registry: validated, read-only view of component descriptors."""

from .loader import RegistryLoader, load_registry
from .models import (
    ComponentDescriptor,
    ComponentRegistry,
    PropAxis,
    SubComponent,
    value_key,
)

__all__ = [
    "ComponentDescriptor",
    "ComponentRegistry",
    "PropAxis",
    "RegistryLoader",
    "SubComponent",
    "load_registry",
    "value_key",
]
