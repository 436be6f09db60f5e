"""Per-object registry of typed, named attributes.

Every configurable value on a batchexec host object lives here rather than
in a Python attribute, so it can be listed, reset to its default, frozen
read-only and copied wholesale between objects:

    attrs = AttributeRegistry(owner="Job")
    attrs.define("retries", Kind.BOOLEAN, 1, 1)
    attrs.set("retries", 0)
    attrs.reset("retries")      # back to 1
    attrs.ro("retries")         # further set() calls raise

All checks run before any mutation, so a failing call leaves the registry
exactly as it was.
"""

import logging
from typing import Any, Iterable

from ..errors import (
    CallSyntaxError,
    DuplicateAttributeError,
    InvalidKindError,
    ReadOnlyViolationError,
    UnknownAttributeError,
)
from ..utils.logging import trace
from ..utils.tabulate import log_table
from .models import ALL, BOOLEAN_VALUES, DESCRIPTOR_FIELDS, AttributeDescriptor, Kind

logger = logging.getLogger(__name__)


class AttributeRegistry:
    """Name -> AttributeDescriptor store owned by a single object."""

    def __init__(self, owner: str = "", log: logging.Logger | None = None):
        self.owner = owner
        self.log = log or logger
        self._attrs: dict[str, AttributeDescriptor] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._attrs

    def __len__(self) -> int:
        return len(self._attrs)

    def __repr__(self) -> str:
        return f"AttributeRegistry(owner={self.owner!r}, attributes={len(self)})"

    # ── Checks ──

    def _lookup(self, name: str) -> AttributeDescriptor:
        if name is None:
            raise CallSyntaxError("attribute name must be specified")
        try:
            return self._attrs[name]
        except KeyError:
            raise UnknownAttributeError(name) from None

    def _check_boolean(self, name: str, kind: Kind, value: Any) -> Any:
        """Validate a value against the boolean constraint.

        Undefined booleans become 0 (with a warning) rather than failing;
        the strings "0" and "1" are stored as ints.
        """
        if kind is not Kind.BOOLEAN:
            return value
        if value is None:
            self.log.warning("attribute [%s] boolean undefined, defaulting to 0", name)
            return 0
        if isinstance(value, (bool, int)) and value in BOOLEAN_VALUES:
            return value
        if isinstance(value, str) and value in ("0", "1"):
            return int(value)
        raise InvalidKindError(
            f"attribute [{name}] value is not boolean [{value}], try: {{ 0, 1 }}"
        )

    def _expand(self, names: Iterable[str]) -> list[AttributeDescriptor]:
        """Resolve a bulk-verb argument list (or ALL) to descriptors.

        Every name is resolved before the caller mutates anything.
        """
        names = list(names)
        if not names:
            raise CallSyntaxError("at least one attribute name (or ALL) is required")
        if ALL in names:
            return list(self._attrs.values())
        return [self._lookup(name) for name in names]

    # ── Verbs ──

    def define(
        self,
        name: str,
        kind: Kind | str = Kind.ANY,
        value: Any = None,
        default: Any = None,
    ) -> AttributeDescriptor:
        """Create a new typed attribute.

        Raises:
            CallSyntaxError: If no usable name was given
            DuplicateAttributeError: If the name already exists
            InvalidKindError: If the kind is unknown or a boolean value is not 0/1
        """
        if not name or not isinstance(name, str) or name == ALL:
            raise CallSyntaxError(f"invalid attribute name [{name}]")
        if name in self._attrs:
            raise DuplicateAttributeError(name, self.owner)

        kind = Kind.parse(kind)
        value = self._check_boolean(name, kind, value)
        default = self._check_boolean(name, kind, default)

        attr = AttributeDescriptor(
            name=name,
            kind=kind,
            value=value,
            default=default,
            owner_class=self.owner,
        )
        self._attrs[name] = attr
        trace(self.log, "defined attribute [%s] kind [%s]", name, kind.value)
        return attr

    def get(self, name: str) -> Any:
        """Current value of an attribute."""
        return self._lookup(name).value

    def set(self, name: str, value: Any, default: Any = None) -> Any:
        """Set the current value (and the default, when one is given).

        Returns:
            The stored value.

        Raises:
            ReadOnlyViolationError: If the attribute is read-only
        """
        attr = self._lookup(name)
        if attr.read_only:
            raise ReadOnlyViolationError(name)

        value = self._check_boolean(name, attr.kind, value)
        if default is not None:
            default = self._check_boolean(name, attr.kind, default)

        attr.value = value
        if default is not None:
            attr.default = default
        return value

    def default(self, name: str) -> Any:
        """Default value of an attribute (no mutation)."""
        return self._lookup(name).default

    def has(self, name: str) -> bool:
        return name in self._attrs

    def reset(self, *names: str) -> int:
        """Restore value := default. Ignores read-only; accepts ALL."""
        attrs = self._expand(names)
        for attr in attrs:
            attr.value = attr.default
        return len(attrs)

    def sync(self, *names: str) -> int:
        """Record default := value. Ignores read-only; accepts ALL."""
        attrs = self._expand(names)
        for attr in attrs:
            attr.default = attr.value
        return len(attrs)

    def ro(self, *names: str) -> int:
        """Mark attributes read-only. Counts ones that already were."""
        attrs = self._expand(names)
        for attr in attrs:
            attr.read_only = True
        return len(attrs)

    def rw(self, *names: str) -> int:
        """Mark attributes writable. Counts ones that already were."""
        attrs = self._expand(names)
        for attr in attrs:
            attr.read_only = False
        return len(attrs)

    def prop(self, name: str, field: str | None = None) -> Any:
        """Read one metadata field of an attribute.

        Fields: owner_class, default, name, read_only, kind, value.
        """
        attr = self._lookup(name)
        if field is None:
            raise CallSyntaxError(
                f"specify a property, one of {{ {', '.join(sorted(DESCRIPTOR_FIELDS))} }}"
            )
        if field not in DESCRIPTOR_FIELDS:
            raise UnknownAttributeError(
                name, f"invalid property [{field}] for attribute [{name}]"
            )
        return getattr(attr, field)

    def remove(self, name: str) -> AttributeDescriptor:
        """Purge an attribute, returning a snapshot of what it held."""
        attr = self._lookup(name)
        del self._attrs[name]
        return attr.model_copy()

    # ── Introspection ──

    def names(self, verbose: bool = False) -> list[str]:
        """Sorted public attribute names.

        With verbose, every descriptor is also tabulated to the log.
        """
        have = sorted(name for name, attr in self._attrs.items() if attr.is_public)
        self.log.debug("am [%s] have [%s]", self.owner, ", ".join(have))
        if verbose:
            log_table(
                self.log,
                (
                    {field: getattr(attr, field) for field in DESCRIPTOR_FIELDS}
                    for attr in self.descriptors()
                ),
            )
        return have

    def descriptors(self) -> list[AttributeDescriptor]:
        """Copies of every descriptor, public and private, sorted by name."""
        return [self._attrs[name].model_copy() for name in sorted(self._attrs)]
