"""On-demand resolution of module names through the import system."""
from __future__ import annotations

import importlib
import logging

from ..errors import NotFoundError
from .names import is_package_name, split_qualified_name
from .registry import REGISTRY, ModuleRecord

logger = logging.getLogger(__name__)


def package_for(name: str) -> str | None:
    """Return the importable package that should declare ``name``, if any."""

    package, _ = split_qualified_name(name)
    if is_package_name(package):
        return package
    return None


def load_module(name: str) -> ModuleRecord:
    """Return the record for ``name``, importing its package if needed.

    Errors raised while importing the package propagate unchanged. A
    package that imports cleanly without registering ``name`` yields
    :class:`NotFoundError`.
    """

    record = REGISTRY.get(name)
    if record is not None:
        return record

    package = package_for(name)
    if package is not None:
        logger.debug("loading package %r for module %r", package, name)
        importlib.import_module(package)
        record = REGISTRY.get(name)

    if record is None:
        raise NotFoundError(name)
    return record


__all__ = ["load_module", "package_for"]
