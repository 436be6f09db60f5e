"""batchexec: batch executive with typed attribute and list-of-values registries.

Quick start:
    from batchexec import BatchExec, ClonePolicy

    bx = BatchExec(echo=1, fatal=0)
    bx.lov.register("color", {"red": "warm", "blue": "cool"})
    bx.lov.force_set("color", bx, "leader", "red")

    other = BatchExec()
    other.clone(bx, ClonePolicy.SKIP)
"""

__version__ = "0.1.0"

from .config import BatchExecConfig, configure, get_config, reset_config
from .core import (
    ALL,
    AttributeDescriptor,
    AttributeRegistry,
    Attributed,
    ClonePolicy,
    EnumRegistry,
    Kind,
    ShuffleChooser,
)
from .errors import (
    BatchExecError,
    CallSyntaxError,
    DuplicateAttributeError,
    FatalError,
    InvalidKindError,
    ReadOnlyViolationError,
    UnknownAttributeError,
    UnknownClassError,
    UnknownKeyError,
)
from .executive import COUGH_SENTINEL, BatchExec

__all__ = [
    "ALL",
    "AttributeDescriptor",
    "AttributeRegistry",
    "Attributed",
    "BatchExec",
    "BatchExecConfig",
    "BatchExecError",
    "COUGH_SENTINEL",
    "CallSyntaxError",
    "ClonePolicy",
    "DuplicateAttributeError",
    "EnumRegistry",
    "FatalError",
    "InvalidKindError",
    "Kind",
    "ReadOnlyViolationError",
    "ShuffleChooser",
    "UnknownAttributeError",
    "UnknownClassError",
    "UnknownKeyError",
    "configure",
    "get_config",
    "reset_config",
]
