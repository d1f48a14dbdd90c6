"""Instance types, dispatch tables and constructors for registered modules."""
from __future__ import annotations

from types import FunctionType, MappingProxyType, MethodType
from typing import Any, Callable, Mapping

from ..constants import INITIALIZER, TYPE_TAG
from ..errors import AlreadyRegisteredError, NoSuchAttributeError
from .classifier import ClassifiedDeclaration
from .names import is_protocol_name
from .registry import REGISTRY, ModuleRecord

# Hooks handled by ModuleInstance itself instead of being installed on the type.
_INSTANCE_HOOKS = {"__getattr__": "_getattr_hook", "__setattr__": "_setattr_hook"}


def default_initializer(self, *args, **kwargs):
    return self


def default_tostring(self):
    return self._STRING


class DispatchTable:
    """Read-only behavior lookup shared by every instance of a module.

    ``methods`` is the flattened, unqualified surface. ``namespaces`` maps
    every module reachable through embedding to its own behaviors so an
    ancestor's version stays callable after being overridden.
    """

    __slots__ = ("methods", "namespaces")

    def __init__(self, methods: Mapping[str, Callable], namespaces: Mapping[str, Mapping[str, Callable]]):
        self.methods = MappingProxyType(dict(methods))
        self.namespaces = MappingProxyType(dict(namespaces))

    def __contains__(self, key) -> bool:
        return key in self.methods or key in self.namespaces

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        return f"<DispatchTable methods={len(self.methods)} namespaces={len(self.namespaces)}>"


def build_dispatch_table(behaviors: Mapping[str, Callable], lineage) -> DispatchTable:
    """Flatten the behaviors of ``lineage`` (breadth-first embed order) into a table.

    Each embedded module is reachable by its fully-qualified name and, when
    unambiguous, by its bare module name.
    """

    namespaces: dict[str, Mapping[str, Callable]] = {}
    for name in lineage:
        record = REGISTRY.get(name)
        if record is not None:
            namespaces[name] = record.behaviors

    aliases: dict[str, str | None] = {}
    for name in namespaces:
        short = name.rpartition(".")[2]
        if short == name or short in namespaces or short in behaviors:
            continue
        aliases[short] = None if short in aliases else name
    for short, name in aliases.items():
        if name is not None:
            namespaces[short] = namespaces[name]

    return DispatchTable(behaviors, namespaces)


class Namespace:
    """Behaviors of one embedded module, bound to a specific instance."""

    __slots__ = ("_instance", "_name", "_methods")

    def __init__(self, instance, name: str, methods: Mapping[str, Callable]):
        self._instance = instance
        self._name = name
        self._methods = methods

    def __getattr__(self, key):
        try:
            method = self._methods[key]
        except KeyError:
            raise NoSuchAttributeError(f"module {self._name!r} has no behavior {key!r}") from None
        return MethodType(method, self._instance)

    def __dir__(self):
        return sorted(self._methods)

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        return f"<Namespace {self._name} of {self._instance!r}>"


class ModuleInstance:
    """Base type of every object produced by a module constructor.

    Instance state lives in ``__dict__``; behaviors are resolved through the
    module's shared :class:`DispatchTable` only when state does not hold
    the name.
    """

    _module_name = "<unregistered>"
    _dispatch = DispatchTable({}, {})
    _protocol: Mapping[str, Any] = MappingProxyType({})
    _getattr_hook = None
    _setattr_hook = None

    def __getattr__(self, key):
        cls = type(self)
        dispatch = cls._dispatch
        method = dispatch.methods.get(key)
        if method is not None:
            return MethodType(method, self)
        methods = dispatch.namespaces.get(key)
        if methods is not None:
            return Namespace(self, key, methods)
        hook = cls._getattr_hook
        if hook is None or is_protocol_name(key):
            raise NoSuchAttributeError(f"no such attribute {key!r} on {cls._module_name!r}")
        return hook(self, key)

    def __setattr__(self, key, value):
        hook = type(self)._setattr_hook
        if hook is None or key in self.__dict__:
            object.__setattr__(self, key, value)
        else:
            hook(self, key, value)

    def __dir__(self):
        dispatch = type(self)._dispatch
        return sorted(set(self.__dict__) | set(dispatch.methods) | set(dispatch.namespaces))

    def __repr__(self) -> str:
        return f"<{self.__dict__.get('_STRING', type(self)._module_name)}>"


def _enter(self):
    return self


def _as_method(hook):
    """Return ``hook`` in a form that receives the instance when installed on a type.

    Only plain functions bind as methods; partials, builtins and callable
    objects get a forwarding function.
    """

    if isinstance(hook, FunctionType) or not callable(hook):
        return hook

    def method(self, *args, **kwargs):
        return hook(self, *args, **kwargs)

    method.__name__ = getattr(hook, "__name__", type(hook).__name__)
    return method


def build_instance_type(record: ModuleRecord, dispatch: DispatchTable) -> type:
    """Create the Python type that carries ``record``'s protocol hooks."""

    namespace: dict[str, Any] = {
        "__module__": record.package or __name__,
        "_module_name": record.name,
        "_dispatch": dispatch,
        "_protocol": record.protocol,
    }
    type_name = record.name.rpartition(".")[2]

    for key, value in record.protocol.items():
        if key in _INSTANCE_HOOKS:
            namespace[_INSTANCE_HOOKS[key]] = staticmethod(value)
        elif key == "__name__":
            type_name = value
        else:
            namespace[key] = _as_method(value)

    protocol = record.protocol
    if "__concat__" in protocol and "__add__" not in protocol:
        namespace["__add__"] = namespace["__concat__"]
    if "__eq__" in protocol and "__hash__" not in protocol:
        namespace["__hash__"] = object.__hash__
    if "__exit__" in protocol and "__enter__" not in protocol:
        namespace["__enter__"] = _enter

    namespace["__qualname__"] = type_name if "__name__" in protocol else record.name
    return type(type_name, (ModuleInstance,), namespace)


class ModuleConstructor:
    """Callable returned by module declaration; produces module instances."""

    def __init__(self, record: ModuleRecord, instance_type: type):
        self.record = record
        self.instance_type = instance_type

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def dispatch(self) -> DispatchTable:
        return self.instance_type._dispatch

    def __call__(self, *args, **kwargs):
        instance = object.__new__(self.instance_type)
        state = instance.__dict__
        state.update(self.record.state)
        state["_STRING"] = f"{self.record.name}: {id(instance):#x}"
        return instance.init(*args, **kwargs)

    def __repr__(self) -> str:
        return f"<ModuleConstructor {self.record.name}>"


def register(name: str, decl: ClassifiedDeclaration, package: str | None = None) -> ModuleConstructor:
    """Finalize ``decl`` as module ``name`` and return its constructor.

    Nothing is stored in the registry unless every step succeeds.
    """

    if name in REGISTRY:
        raise AlreadyRegisteredError(name)

    def instanceof(self):
        return name

    behaviors = dict(decl.behaviors)
    behaviors[TYPE_TAG] = instanceof
    behaviors.setdefault(INITIALIZER, default_initializer)

    protocol = dict(decl.protocol)
    protocol.setdefault("__str__", default_tostring)

    state = dict(decl.state)
    state["_PACKAGE"] = package
    state["_NAME"] = name

    embeds = tuple(decl.embeds)
    record = ModuleRecord(
        name=name,
        package=package,
        embeds=embeds,
        state=MappingProxyType(state),
        behaviors=MappingProxyType(behaviors),
        protocol=MappingProxyType(protocol),
        lineage=REGISTRY.lineage(embeds),
    )
    dispatch = build_dispatch_table(record.behaviors, record.lineage)
    instance_type = build_instance_type(record, dispatch)

    REGISTRY.add(record, instanceof)
    return ModuleConstructor(record, instance_type)


def rawset(instance: ModuleInstance, key: str, value: Any) -> None:
    """Store ``value`` in instance state without consulting the attribute-set hook."""

    object.__setattr__(instance, key, value)


def ancestor(instance: ModuleInstance, name: str) -> Namespace:
    """Return the behaviors of embedded module ``name`` bound to ``instance``."""

    methods = type(instance)._dispatch.namespaces.get(name)
    if methods is None:
        raise NoSuchAttributeError(f"{type(instance)._module_name!r} does not embed {name!r}")
    return Namespace(instance, name, methods)


__all__ = [
    "DispatchTable",
    "ModuleConstructor",
    "ModuleInstance",
    "Namespace",
    "ancestor",
    "build_dispatch_table",
    "build_instance_type",
    "default_initializer",
    "default_tostring",
    "rawset",
    "register",
]
