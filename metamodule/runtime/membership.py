"""Runtime type-membership across the embedding closure."""
from __future__ import annotations

from ..constants import TYPE_TAG
from .factory import ModuleInstance
from .registry import REGISTRY


def module_name_of(obj) -> str | None:
    """Return the registered module name of ``obj``, or None for other values."""

    if not isinstance(obj, ModuleInstance):
        return None
    tag = type(obj)._dispatch.methods.get(TYPE_TAG)
    return REGISTRY.name_for_tag(tag)


def instanceof(obj, name) -> bool:
    """Return True if ``obj`` was built by module ``name`` or a module embedding it.

    Never raises: non-instances and non-string names simply answer False.
    """

    if not isinstance(name, str):
        return False
    own = module_name_of(obj)
    if own is None:
        return False
    if own == name:
        return True
    record = REGISTRY.get(own)
    return record is not None and record.embeds_module(name)


__all__ = ["instanceof", "module_name_of"]
