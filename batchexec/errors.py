"""Exception hierarchy for batchexec.

The registries raise these before mutating any state. Whether a failure
terminates the run is decided by the host object (see BatchExec.cough),
never by the registry that detected it.
"""


class BatchExecError(Exception):
    """Base class for every error raised by batchexec."""

    pass


class CallSyntaxError(BatchExecError, TypeError):
    """A required call argument is missing or of the wrong shape."""

    pass


class DuplicateAttributeError(BatchExecError, ValueError):
    """An attribute name was defined twice on the same object."""

    def __init__(self, name: str, owner: str = ""):
        self.name = name
        self.owner = owner
        where = f" on [{owner}]" if owner else ""
        super().__init__(f"attribute [{name}] already exists{where}")


class UnknownAttributeError(BatchExecError, KeyError):
    """Reference to an attribute (or attribute property) that was never defined."""

    def __init__(self, name: str, detail: str = ""):
        self.name = name
        super().__init__(detail or f"attribute [{name}] does not exist")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0])


class ReadOnlyViolationError(BatchExecError):
    """Direct set on a read-only attribute."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"attribute [{name}] is read-only")


class InvalidKindError(BatchExecError, ValueError):
    """Unsupported attribute kind, or a value that breaks the kind's constraint."""

    pass


class UnknownClassError(BatchExecError, KeyError):
    """LoV class was never registered, or has been cleared."""

    def __init__(self, lov_class: str):
        self.lov_class = lov_class
        super().__init__(f"no such LoV exists [{lov_class}]")

    def __str__(self) -> str:
        return str(self.args[0])


class UnknownKeyError(BatchExecError, KeyError):
    """Value is not a member of the referenced LoV class."""

    def __init__(self, lov_class: str, key: object, members: list[str]):
        self.lov_class = lov_class
        self.key = key
        self.members = members
        super().__init__(
            f"LoV [{lov_class}] contains no such value [{key}] "
            f"[{', '.join(members)}]"
        )

    def __str__(self) -> str:
        return str(self.args[0])


class FatalError(BatchExecError):
    """Escalated failure raised by a host object running in fatal mode."""

    pass
