"""Pydantic models and enums for the attribute registry.

- Kind: type tag constraining what an attribute may hold
- ClonePolicy: how read-only destination attributes are treated by clone()
- AttributeDescriptor: the record behind one named attribute
- ALL: name placeholder meaning "every defined attribute" for bulk verbs
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..errors import InvalidKindError


ALL = "(all)"

BOOLEAN_VALUES = (0, 1)


class Kind(str, Enum):
    ANY = "any"
    BOOLEAN = "bool"
    HANDLE = "handle"

    @classmethod
    def parse(cls, value: "Kind | str") -> "Kind":
        """Convert a kind tag (or one of its aliases) to a Kind.

        Raises:
            InvalidKindError: If the tag is not recognised.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            tag = _KIND_ALIASES.get(value.strip().lower())
            if tag is not None:
                return tag
        raise InvalidKindError(
            f"kind [{value}] does not exist, try: "
            f"{{ {', '.join(sorted(k.value for k in cls))} }}"
        )


_KIND_ALIASES = {
    "any": Kind.ANY,
    "bool": Kind.BOOLEAN,
    "boolean": Kind.BOOLEAN,
    "handle": Kind.HANDLE,
    "log": Kind.HANDLE,
}


class ClonePolicy(str, Enum):
    """Read-only handling for clone(): abort, force-overwrite, or skip."""

    NORMAL = "normal"
    FORCE = "force"
    SKIP = "skip"


class AttributeDescriptor(BaseModel):
    """One typed, named attribute held by an AttributeRegistry.

    `value` and `default` are independent; None means unset.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    kind: Kind = Kind.ANY
    value: Any = None
    default: Any = None
    read_only: bool = False
    owner_class: str = Field(default="", description="Type that defined the attribute")

    @property
    def is_public(self) -> bool:
        return not self.name.startswith("_")


# Fields readable through AttributeRegistry.prop()
DESCRIPTOR_FIELDS = tuple(AttributeDescriptor.model_fields)
