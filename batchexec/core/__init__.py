"""Attribute and list-of-values registries.

- attributes: AttributeRegistry, the per-object typed property store
- lov: EnumRegistry, shared sets of valid values
- clone: inherit()/clone() bulk copies between registry owners
- base: Attributed, the base class tying an object to its registry
"""

from .models import ALL, AttributeDescriptor, ClonePolicy, Kind
from .attributes import AttributeRegistry
from .clone import clone, inherit
from .base import AttributeTarget, Attributed, registry_of
from .lov import Chooser, EnumRegistry, ShuffleChooser

__all__ = [
    "ALL",
    "AttributeDescriptor",
    "AttributeRegistry",
    "AttributeTarget",
    "Attributed",
    "Chooser",
    "ClonePolicy",
    "EnumRegistry",
    "Kind",
    "ShuffleChooser",
    "clone",
    "inherit",
    "registry_of",
]
