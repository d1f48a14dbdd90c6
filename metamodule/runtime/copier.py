"""Cycle-safe structural copy of declaration values."""
from __future__ import annotations

from collections import defaultdict
from typing import Any

from ..errors import CircularReferenceError

CONTAINER_TYPES = (dict, list, tuple, set, frozenset)


def _child_path(path: str, key: Any) -> str:
    return f"{path}.{key}"


def _copy_items(value, path, seen):
    return [
        deep_copy(item, _child_path(path, index), seen)
        for index, item in enumerate(value)
    ]


def deep_copy(value: Any, path: str, seen: dict[int, str] | None = None) -> Any:
    """Copy builtin containers recursively, rejecting ancestor cycles.

    ``seen`` maps the identity of every container currently being copied to
    the path it was reached through. Entries are released on the way back
    up, so the same container may appear in sibling subtrees.
    Dict and set subclasses and namedtuples keep their type. Non-container values
    are returned unchanged.
    """

    if seen is None:
        seen = {}

    if not isinstance(value, CONTAINER_TYPES):
        return value

    ident = id(value)
    if ident in seen:
        raise CircularReferenceError(path, seen[ident])

    seen[ident] = path
    try:
        if isinstance(value, dict):
            items = {
                key: deep_copy(item, _child_path(path, key), seen)
                for key, item in value.items()
            }
            if isinstance(value, defaultdict):
                return type(value)(value.default_factory, items)
            if type(value) is not dict:
                return type(value)(items)
            return items
        if isinstance(value, list):
            return _copy_items(value, path, seen)
        if isinstance(value, tuple):
            items = _copy_items(value, path, seen)
            if hasattr(value, "_fields"):  # namedtuple
                return type(value)(*items)
            return tuple(items)
        return type(value)(_copy_items(value, path, seen))
    finally:
        del seen[ident]


__all__ = ["CONTAINER_TYPES", "deep_copy"]
