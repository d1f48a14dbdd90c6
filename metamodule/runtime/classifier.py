"""Split a raw module declaration into state, behaviors and protocol hooks."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from ..constants import (
    FUNCTION,
    IDENT_FIELDS,
    INITIALIZER,
    PROTOCOL_HOOKS,
    RESERVED_DUNDERS,
    RESERVED_FIELDS,
    STRING,
    WEAK_MODES,
)
from ..errors import HookTypeError, ReservedFieldError, ValidationError
from .copier import deep_copy
from .names import is_protocol_name


def is_behavior(value: Any) -> bool:
    """Return True for values dispatched as methods rather than stored as state."""

    return callable(value) and not isinstance(value, type)


@dataclass
class ClassifiedDeclaration:
    """Mutable working form of a declaration while a module is being built."""

    state: dict[str, Any] = field(default_factory=dict)
    behaviors: dict[str, Callable] = field(default_factory=dict)
    protocol: dict[str, Any] = field(default_factory=dict)
    embeds: list[str] = field(default_factory=list)


def _check_field_name(key) -> None:
    if not isinstance(key, str):
        raise ValidationError(f"field name must be string: {key!r}")
    if key in IDENT_FIELDS or key in RESERVED_FIELDS or key in RESERVED_DUNDERS:
        raise ReservedFieldError(f"reserved field {key!r} cannot be used")


def _check_string_hook(key: str, value: Any) -> None:
    if not isinstance(value, str):
        raise HookTypeError(f"the type of protocol hook {key!r} must be {STRING}")
    if key == "__mode__" and value not in WEAK_MODES:
        raise HookTypeError(
            f"protocol hook '__mode__' must be one of {', '.join(WEAK_MODES)}: {value!r}"
        )


def classify(name: str, declaration: Mapping[str, Any]) -> ClassifiedDeclaration:
    """Inspect ``declaration`` for the module registered as ``name``.

    Every field lands in exactly one bucket:

    * dunder-shaped names are protocol hooks; catalog hooks must carry the
      kind the catalog lists, other dunders holding plain data become state
    * callables (other than classes) are behaviors
    * everything else is deep-copied into state

    The returned buckets share no mutable containers with ``declaration``.
    """

    seen = {id(declaration): name}
    decl = ClassifiedDeclaration()

    for key, value in declaration.items():
        _check_field_name(key)

        if is_protocol_name(key):
            kind = PROTOCOL_HOOKS.get(key)
            if kind == STRING:
                _check_string_hook(key, value)
                decl.protocol[key] = value
            elif is_behavior(value):
                decl.protocol[key] = value
            elif kind == FUNCTION:
                raise HookTypeError(f"the type of protocol hook {key!r} must be {FUNCTION}")
            else:
                decl.state[key] = deep_copy(value, f"{name}.{key}", seen)
        elif is_behavior(value):
            decl.behaviors[key] = value
        elif key == INITIALIZER:
            raise ValidationError(f"field {INITIALIZER!r} must be function")
        else:
            decl.state[key] = deep_copy(value, f"{name}.{key}", seen)

    return decl


__all__ = ["ClassifiedDeclaration", "classify", "is_behavior"]
