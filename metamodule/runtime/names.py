"""Name shapes, search-path templates and package inference."""
from __future__ import annotations

import inspect
import logging
import os
import re
import sys
from typing import Iterable

from ..constants import (
    MODULE_NAME_PATTERN,
    PACKAGE_SEGMENT_PATTERN,
    PROTOCOL_NAME_PATTERN,
)

logger = logging.getLogger(__name__)

_MODULE_NAME = re.compile(MODULE_NAME_PATTERN)
_PACKAGE_SEGMENT = re.compile(PACKAGE_SEGMENT_PATTERN)
_PROTOCOL_NAME = re.compile(PROTOCOL_NAME_PATTERN)

_PACKAGE_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_IMPORT_BOOTSTRAP = "<frozen importlib._bootstrap"


def is_module_name(name) -> bool:
    return isinstance(name, str) and _MODULE_NAME.fullmatch(name) is not None


def is_package_name(name) -> bool:
    if not isinstance(name, str):
        return False
    return all(_PACKAGE_SEGMENT.fullmatch(seg) for seg in name.split("."))


def is_protocol_name(name) -> bool:
    return isinstance(name, str) and _PROTOCOL_NAME.fullmatch(name) is not None


def qualified_name(package: str | None, module: str | None) -> str | None:
    """Join a package and module name the way the registry keys them."""

    if package and module:
        return f"{package}.{module}"
    return module or package


def split_qualified_name(name: str) -> tuple[str, str | None]:
    """Return ``(package, module)`` for a fully-qualified name.

    The trailing segment is only treated as a module name when it has the
    capitalised module shape and a package precedes it.
    """

    head, _, tail = name.rpartition(".")
    if head and is_module_name(tail):
        return head, tail
    return name, None


def normalize_path(path: str) -> str:
    return os.path.normpath(path).replace(os.sep, "/")


def prepare_search_path(entries: Iterable[str]) -> list[re.Pattern]:
    """Compile ``sys.path`` style entries into source-file templates.

    Each entry ``E`` becomes ``E/?.py`` with ``?`` capturing the module
    path. Longer entries come first so the most specific root wins.
    """

    roots = []
    for entry in entries:
        entry = (entry or "").strip()
        if not entry:
            continue
        roots.append(normalize_path(os.path.abspath(entry)))

    patterns = []
    for root in sorted(set(roots), key=len, reverse=True):
        prefix = root.rstrip("/")
        patterns.append(re.compile(f"^{re.escape(prefix)}/(.+)\\.py$"))
    return patterns


SEARCH_PATH = prepare_search_path(sys.path)


def configure_search_path(entries: Iterable[str] | None = None) -> list[re.Pattern]:
    """Rebuild the search-path templates, defaulting to the current ``sys.path``."""

    global SEARCH_PATH
    SEARCH_PATH = prepare_search_path(sys.path if entries is None else entries)
    return SEARCH_PATH


def pathname_to_package(pathname: str, templates: list[re.Pattern] | None = None) -> str | None:
    """Recover the dotted package name of a source file, if it is importable."""

    pathname = normalize_path(pathname)
    for pattern in SEARCH_PATH if templates is None else templates:
        match = pattern.match(pathname)
        if not match:
            continue
        captured = match.group(1)
        if captured.endswith("/__init__"):
            captured = captured[: -len("/__init__")]
        elif captured == "__init__":
            continue
        dotted = captured.replace("/", ".")
        if is_package_name(dotted):
            return dotted
    return None


def _is_internal(frame) -> bool:
    return os.path.abspath(frame.f_code.co_filename).startswith(_PACKAGE_ROOT + os.sep)


def _entered_by_import(frame) -> bool:
    frame = frame.f_back
    while frame is not None:
        if frame.f_code.co_filename.startswith(_IMPORT_BOOTSTRAP):
            return True
        frame = frame.f_back
    return False


def infer_package() -> str | None:
    """Return the package declaring a module when called during its import.

    The declaring frame is the first frame outside this package. A package
    name is only produced when the import machinery appears somewhere above
    that frame, so declarations made from helper functions while a package
    is loading are still attributed to it. A direct call yields ``None``.
    """

    frame = inspect.currentframe()
    try:
        while frame is not None and _is_internal(frame):
            frame = frame.f_back
        if frame is None or not _entered_by_import(frame):
            return None
        package = pathname_to_package(frame.f_code.co_filename)
        logger.debug("inferred package %r for %s", package, frame.f_code.co_filename)
        return package
    finally:
        del frame


__all__ = [
    "configure_search_path",
    "infer_package",
    "is_module_name",
    "is_package_name",
    "is_protocol_name",
    "normalize_path",
    "pathname_to_package",
    "prepare_search_path",
    "qualified_name",
    "split_qualified_name",
]
