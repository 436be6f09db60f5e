"""List-of-values (LoV) registry: named, shared sets of valid keys.

A LoV class maps keys to human-readable descriptions. Host objects use the
registry to validate attribute assignments, to pick a random valid value,
or to fill in a default only where nothing is set yet:

    lov = EnumRegistry()
    lov.register("color", {"red": "warm", "blue": "cool"})
    lov.force_set("color", job, "state", "red")
    lov.conditional_default("color", job, "shade", "blue")
    lov.random("color", job, "accent")

One registry is normally shared by every host object in the process
(EnumRegistry.shared()); tests build their own instances. Writers
(register/clear) are serialized against readers with a ReadWriteLock.

Registering an existing class merges keys into it. Where both sides carry
the same key the description already registered wins; to redefine a class,
clear() it first.
"""

import logging
import random as _random
import threading
from pathlib import Path
from typing import Any, Mapping, Protocol, Sequence

import yaml

from ..errors import CallSyntaxError, UnknownClassError, UnknownKeyError
from ..utils.logging import trace
from ..utils.rwlock import ReadWriteLock
from .base import AttributeTarget, registry_of

logger = logging.getLogger(__name__)


# =============================================================================
# Random selection
# =============================================================================


class Chooser(Protocol):
    """Picks one element of a non-empty sequence."""

    def choose(self, options: Sequence[str]) -> str: ...


class ShuffleChooser:
    """Shuffle a copy of the options and take the first."""

    def __init__(self, rng: _random.Random | None = None):
        self.rng = rng or _PROCESS_RNG

    def choose(self, options: Sequence[str]) -> str:
        if not options:
            raise ValueError("cannot choose from an empty sequence")
        mix = list(options)
        self.rng.shuffle(mix)
        return mix[0]


# Seeded once per process; never reseeded per call
_PROCESS_RNG = _random.Random()


# =============================================================================
# Registry
# =============================================================================


class EnumRegistry:
    """Class-keyed sets of valid values with descriptions."""

    _instance: "EnumRegistry | None" = None
    _lock_cls = threading.Lock()  # Class-level lock for singleton creation

    def __init__(
        self,
        chooser: Chooser | None = None,
        log: logging.Logger | None = None,
    ):
        self.chooser = chooser or ShuffleChooser()
        self.log = log or logger
        self._classes: dict[str, dict[str, str]] = {}
        self._rwlock = ReadWriteLock()

    @classmethod
    def shared(cls) -> "EnumRegistry":
        """Get or create the process-wide registry."""
        if cls._instance is None:
            with cls._lock_cls:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_shared(cls) -> None:
        """Drop the process-wide registry (test fixtures only)."""
        with cls._lock_cls:
            cls._instance = None

    def __repr__(self) -> str:
        return f"EnumRegistry(classes={self.classes()})"

    # ── Writers ──

    def register(self, lov_class: str, mapping: Mapping[str, str]) -> int:
        """Register a class, or merge new keys into an existing one.

        Returns:
            Number of keys in the class afterwards.
        """
        if lov_class is None:
            raise CallSyntaxError("register(CLASS, MAPPING) requires a class name")
        if not isinstance(mapping, Mapping):
            raise CallSyntaxError(
                f"register({lov_class!r}, ...) must be passed a mapping, "
                f"got {type(mapping).__name__}"
            )

        with self._rwlock.write_locked():
            existing = self._classes.get(lov_class)
            if existing is None:
                self.log.info("registering %s", lov_class)
                self._classes[lov_class] = dict(mapping)
            else:
                self.log.info("merging %s", lov_class)
                merged = dict(mapping)
                merged.update(existing)
                self._classes[lov_class] = merged
            count = len(self._classes[lov_class])

        trace(self.log, "lov [%s] now has %d keys", lov_class, count)
        return count

    def clear(self, lov_class: str) -> int:
        """Remove a class. Returns how many keys it had (0 if none)."""
        with self._rwlock.write_locked():
            removed = self._classes.pop(lov_class, None)
        return len(removed) if removed is not None else 0

    def load_yaml(self, path: str | Path) -> dict[str, int]:
        """Register every class in a YAML file of {class: {key: description}}.

        The whole document is checked before any class is registered.

        Returns:
            Resulting key count per class found in the file.

        Raises:
            CallSyntaxError: If the file is not valid YAML or not shaped as
                {class: {key: description}}
        """
        path = Path(path)
        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise CallSyntaxError(f"{path}: {exc}") from exc

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise CallSyntaxError(f"{path}: expected a mapping of LoV classes")

        mappings: dict[str, dict[str, str]] = {}
        for lov_class, entries in data.items():
            if not isinstance(entries, dict):
                raise CallSyntaxError(
                    f"{path}: LoV [{lov_class}] must be a mapping of key: description"
                )
            mappings[str(lov_class)] = {
                str(key): "" if desc is None else str(desc)
                for key, desc in entries.items()
            }

        return {
            lov_class: self.register(lov_class, mapping)
            for lov_class, mapping in mappings.items()
        }

    # ── Readers ──

    def classes(self) -> list[str]:
        with self._rwlock.read_locked():
            return sorted(self._classes)

    def has_class(self, lov_class: str) -> bool:
        with self._rwlock.read_locked():
            return lov_class in self._classes

    def keys(self, lov_class: str) -> list[str]:
        """Sorted keys of a registered class."""
        with self._rwlock.read_locked():
            entries = self._classes.get(lov_class)
            if entries is None:
                raise UnknownClassError(lov_class)
            return sorted(entries)

    def lookup(self, lov_class: str, key: str) -> str:
        """Description registered for a key."""
        with self._rwlock.read_locked():
            entries = self._classes.get(lov_class)
            if entries is None:
                raise UnknownClassError(lov_class)
            if key not in entries:
                raise UnknownKeyError(lov_class, key, sorted(entries))
            return entries[key]

    def validate(self, lov_class: str, value: Any) -> Any:
        """Check that `value` is currently a key of `lov_class`."""
        with self._rwlock.read_locked():
            entries = self._classes.get(lov_class)
            if entries is None:
                raise UnknownClassError(lov_class)
            if value is None or value not in entries:
                raise UnknownKeyError(lov_class, value, sorted(entries))
        return value

    # ── Assignment helpers ──

    def random(self, lov_class: str, target: AttributeTarget, attr: str) -> str:
        """Set `attr` on `target` to a randomly chosen key of the class."""
        attrs = registry_of(target)
        attrs.prop(attr, "name")  # fails before drawing if attr is unknown

        options = self.keys(lov_class)
        if not options:
            raise UnknownKeyError(lov_class, None, options)

        value = self.chooser.choose(options)
        self.log.info("randomising attribute [%s] to [%s]", attr, value)
        return attrs.set(attr, value)

    def conditional_default(
        self, lov_class: str, target: AttributeTarget, attr: str, key: str
    ) -> Any:
        """Set `attr` to `key` only if it currently holds no value.

        Returns:
            The attribute's value after the call.
        """
        attrs = registry_of(target)
        self.validate(lov_class, key)

        current = attrs.get(attr)
        if current is not None:
            self.log.info("skipping attribute default for [%s]", attr)
            return current

        self.log.info("defaulting attribute [%s] to [%s]", attr, key)
        return attrs.set(attr, key)

    def force_set(
        self, lov_class: str, target: AttributeTarget, attr: str, key: str
    ) -> Any:
        """Validate `key` against the class and set it unconditionally."""
        attrs = registry_of(target)
        attrs.prop(attr, "name")
        self.validate(lov_class, key)

        self.log.info("setting [%s] to [%s]", attr, key)
        return attrs.set(attr, key)
