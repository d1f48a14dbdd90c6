"""Public declaration API: ``declare``, ``new`` and sealed declarations."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..constants import MODULE_NAME_PATTERN
from ..errors import AlreadyRegisteredError, SealedDeclarationError, ValidationError
from .classifier import classify
from .embedding import embed_modules
from .factory import ModuleConstructor, register
from .names import infer_package, is_module_name, is_package_name, qualified_name
from .registry import REGISTRY


def _check_writable(self):
    if self._sealed:
        raise SealedDeclarationError("attempt to assign to a sealed declaration")


class Declaration(dict):
    """A module declaration that becomes read-only once its module is registered."""

    _sealed = False

    def seal(self) -> "Declaration":
        self._sealed = True
        return self

    @property
    def sealed(self) -> bool:
        return self._sealed

    def __setitem__(self, key, value):
        _check_writable(self)
        super().__setitem__(key, value)

    def __delitem__(self, key):
        _check_writable(self)
        super().__delitem__(key)

    def __ior__(self, other):
        _check_writable(self)
        return super().__ior__(other)

    def update(self, *args, **kwargs):
        _check_writable(self)
        super().update(*args, **kwargs)

    def setdefault(self, key, default=None):
        if key not in self:
            _check_writable(self)
        return super().setdefault(key, default)

    def pop(self, *args):
        _check_writable(self)
        return super().pop(*args)

    def popitem(self):
        _check_writable(self)
        return super().popitem()

    def clear(self):
        _check_writable(self)
        super().clear()


def declare(
    declaration: Mapping[str, Any],
    *embeds: str,
    name: str | None = None,
    package: str | None = None,
) -> ModuleConstructor:
    """Register a module and return its constructor.

    ``package`` defaults to the package being imported when the call
    happens at the top level of that package's source; pass it explicitly
    anywhere else. ``embeds`` name previously declared modules, loading
    their packages on demand.
    """

    if name is not None and not is_module_name(name):
        raise ValidationError(f"module name must match the pattern {MODULE_NAME_PATTERN!r}: {name!r}")
    if package is None:
        package = infer_package()
    elif not is_package_name(package):
        raise ValidationError(f"invalid package name: {package!r}")

    regname = qualified_name(package, name)
    if regname is None:
        raise ValidationError("module name must not be None")

    if not isinstance(declaration, Mapping):
        raise ValidationError(
            f"module declaration must be a mapping, got {type(declaration).__name__}"
        )

    if regname in REGISTRY:
        raise AlreadyRegisteredError(regname)

    decl = classify(regname, declaration)
    embed_modules(decl, *embeds)
    constructor = register(regname, decl, package)

    if isinstance(declaration, Declaration):
        declaration.seal()
    return constructor


class _Declarator:
    """``new.Name(decl, *embeds)`` / ``new(decl, *embeds)`` entry point."""

    __slots__ = ()

    def __getattr__(self, modname):
        if modname.startswith("__"):
            raise AttributeError(modname)

        def declare_named(declaration, *embeds, package=None):
            return declare(declaration, *embeds, name=modname, package=package)

        declare_named.__name__ = modname
        return declare_named

    def __call__(self, declaration, *embeds, package=None):
        return declare(declaration, *embeds, package=package)

    def __setattr__(self, key, value):
        raise SealedDeclarationError(f"attempt to assign to a readonly property: {key!r}")

    def __delattr__(self, key):
        raise SealedDeclarationError(f"attempt to delete a readonly property: {key!r}")

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        return "<metamodule.new>"


new = _Declarator()


__all__ = ["Declaration", "declare", "new"]
