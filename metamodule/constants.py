"""Shared constant values for the metamodule runtime."""

MODULE_NAME_PATTERN = r"^[A-Z][a-zA-Z0-9]*$"
PACKAGE_SEGMENT_PATTERN = r"^[a-z0-9_]+$"
PROTOCOL_NAME_PATTERN = r"^__[a-z][a-z0-9_]*__$"

FUNCTION = "function"
STRING = "string"

PROTOCOL_HOOKS = {
    # arithmetic
    "__add__": FUNCTION,
    "__sub__": FUNCTION,
    "__mul__": FUNCTION,
    "__truediv__": FUNCTION,
    "__floordiv__": FUNCTION,
    "__mod__": FUNCTION,
    "__pow__": FUNCTION,
    "__neg__": FUNCTION,
    # bitwise
    "__and__": FUNCTION,
    "__or__": FUNCTION,
    "__xor__": FUNCTION,
    "__invert__": FUNCTION,
    "__lshift__": FUNCTION,
    "__rshift__": FUNCTION,
    # comparison
    "__eq__": FUNCTION,
    "__lt__": FUNCTION,
    "__le__": FUNCTION,
    "__concat__": FUNCTION,
    "__len__": FUNCTION,
    "__call__": FUNCTION,
    "__getattr__": FUNCTION,
    "__setattr__": FUNCTION,
    "__str__": FUNCTION,
    "__del__": FUNCTION,
    "__exit__": FUNCTION,
    # configuration
    "__mode__": STRING,
    "__name__": STRING,
}

WEAK_MODES = ("k", "v", "kv")

IDENT_FIELDS = frozenset({"_PACKAGE", "_NAME", "_STRING"})

RESERVED_FIELDS = frozenset({"constructor", "instanceof"})

RESERVED_DUNDERS = frozenset(
    {
        "__init__",
        "__new__",
        "__class__",
        "__dict__",
        "__slots__",
        "__getattribute__",
        "__weakref__",
        "__init_subclass__",
        "__module__",
        "__qualname__",
    }
)

TYPE_TAG = "instanceof"
INITIALIZER = "init"

__all__ = [
    "FUNCTION",
    "IDENT_FIELDS",
    "INITIALIZER",
    "MODULE_NAME_PATTERN",
    "PACKAGE_SEGMENT_PATTERN",
    "PROTOCOL_HOOKS",
    "PROTOCOL_NAME_PATTERN",
    "RESERVED_DUNDERS",
    "RESERVED_FIELDS",
    "STRING",
    "TYPE_TAG",
    "WEAK_MODES",
]
