"""Bulk copy of attribute values between two Attributed objects.

inherit() copies only the attributes the target captured when it was
constructed; clone() copies every public attribute the target has now and
takes a ClonePolicy for read-only destinations:

- NORMAL: any read-only destination aborts the copy
- FORCE: read-only destinations are unlocked, copied and locked again
- SKIP: read-only destinations are left alone and not counted

Source values and read-only conflicts are resolved before the first write,
so an aborted copy changes nothing.
"""

import logging
from typing import TYPE_CHECKING, Any, Iterable

from ..errors import ReadOnlyViolationError
from .models import ClonePolicy

if TYPE_CHECKING:
    from .base import Attributed

logger = logging.getLogger(__name__)


def _read_source(source: "Attributed", names: Iterable[str]) -> dict[str, Any]:
    return {name: source.attrs.get(name) for name in names}


def inherit(target: "Attributed", source: "Attributed") -> int:
    """Copy `target.inheritable` from `source` into `target`.

    Raises:
        ReadOnlyViolationError: If any inheritable target attribute is read-only
    """
    values = _read_source(source, target.inheritable)
    for name in values:
        if target.attrs.prop(name, "read_only"):
            raise ReadOnlyViolationError(name)

    for name, value in values.items():
        target.attrs.set(name, value)

    target.attrs.log.info("inherited %d attributes", len(values))
    return len(values)


def clone(
    target: "Attributed",
    source: "Attributed",
    policy: ClonePolicy = ClonePolicy.NORMAL,
) -> int:
    """Copy every public attribute of `target` from `source`.

    Returns:
        Number of attributes actually copied.
    """
    policy = ClonePolicy(policy)
    attrs = target.attrs
    log = attrs.log

    values = _read_source(source, attrs.names())
    locked = {name for name in values if attrs.prop(name, "read_only")}

    if locked and policy is ClonePolicy.NORMAL:
        raise ReadOnlyViolationError(sorted(locked)[0])

    changed = 0
    for name, value in values.items():
        if name not in locked:
            attrs.set(name, value)
            changed += 1
        elif policy is ClonePolicy.SKIP:
            log.info("skipping read-only attribute change on [%s]", name)
        else:
            log.info("forcing read-only attribute change on [%s]", name)
            attrs.rw(name)
            try:
                attrs.set(name, value)
            finally:
                attrs.ro(name)
            changed += 1

    log.info("cloned %d attributes", changed)
    return changed
