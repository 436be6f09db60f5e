"""Base class for objects whose state lives in an AttributeRegistry."""

import logging
from typing import Union

from ..errors import CallSyntaxError
from .attributes import AttributeRegistry
from .clone import clone, inherit
from .models import ClonePolicy


class Attributed:
    """Owns an AttributeRegistry and remembers its inheritable attributes.

    Subclasses define their attributes in _define_attributes(). Every public
    attribute present once that hook returns is captured in `inheritable`;
    anything defined later is not copied by inherit().
    """

    def __init__(self, log: logging.Logger | None = None):
        self.attrs = AttributeRegistry(owner=type(self).__name__, log=log)
        self._define_attributes()
        self.inheritable: tuple[str, ...] = tuple(self.attrs.names())

    def _define_attributes(self) -> None:
        pass

    def inherit(self, source: "Attributed") -> int:
        """Copy the captured inheritable attributes from `source`."""
        return inherit(self, source)

    def clone(
        self, source: "Attributed", policy: ClonePolicy = ClonePolicy.NORMAL
    ) -> int:
        """Copy every public attribute from `source` under `policy`."""
        return clone(self, source, policy)


AttributeTarget = Union[AttributeRegistry, Attributed]


def registry_of(target: AttributeTarget) -> AttributeRegistry:
    """The AttributeRegistry behind a target object."""
    if isinstance(target, AttributeRegistry):
        return target
    if isinstance(target, Attributed):
        return target.attrs
    raise CallSyntaxError(
        f"expected an AttributeRegistry or Attributed object, got {type(target).__name__}"
    )
