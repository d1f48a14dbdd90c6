"""Failure taxonomy for module declaration, composition and access."""


class MetaModuleError(Exception):
    """Base class for every failure raised by the metamodule runtime."""

    kind = "error"


class ValidationError(MetaModuleError, ValueError):
    """A name, field or hook value does not have the required shape."""

    kind = "validation"


class ReservedFieldError(ValidationError):
    """A declaration uses a field name owned by the runtime."""


class HookTypeError(ValidationError, TypeError):
    """A protocol hook was given a value of the wrong kind."""


class CircularReferenceError(MetaModuleError, ValueError):
    """A container refers back to one of its ancestors."""

    kind = "structural"

    def __init__(self, path, ancestor):
        self.path = path
        self.ancestor = ancestor
        super().__init__(
            f"unable to copy circularly referenced values: {path!r} refers to {ancestor!r}"
        )


class ResolutionError(MetaModuleError, LookupError):
    """A module or package could not be resolved."""

    kind = "resolution"


class NotFoundError(ResolutionError):
    """No module is registered under the requested name."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"{name!r} not found")


class EmbedError(ResolutionError):
    """An embedded module could not be loaded."""


class AlreadyRegisteredError(MetaModuleError, ValueError):
    """A module with the same fully-qualified name already exists."""

    kind = "conflict"

    def __init__(self, name):
        self.name = name
        super().__init__(f"{name!r} is already registered")


class SealedDeclarationError(MetaModuleError, TypeError):
    """A sealed object was written to."""

    kind = "runtime-access"


class NoSuchAttributeError(MetaModuleError, AttributeError):
    """An instance lookup missed both state and dispatch table."""

    kind = "runtime-access"


__all__ = [
    "AlreadyRegisteredError",
    "CircularReferenceError",
    "EmbedError",
    "HookTypeError",
    "MetaModuleError",
    "NoSuchAttributeError",
    "NotFoundError",
    "ReservedFieldError",
    "ResolutionError",
    "SealedDeclarationError",
    "ValidationError",
]
