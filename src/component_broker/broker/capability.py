# component_broker/broker/capability.py
"""
Capability descriptors
──────────────────────────────────────────────
Every lookup is driven by a Capability:
    key   → fully qualified name ("pkg.module.IEmployeeRepository")
    name  → simple name used by the naming convention
    kind  → INTERFACE | ABSTRACT | CONCRETE
    type  → the Python class, if there is one

describe(cls) infers the kind:
    • typing.Protocol subclasses                      → INTERFACE
    • ABCs whose public members are all abstract      → INTERFACE
      (including empty marker ABCs deriving straight from ABC)
    • ABCs with at least one concrete public member   → ABSTRACT
    • anything instantiable                           → CONCRETE

@interface / @abstract / @concrete pin the kind explicitly and win over
inference. The tag is not inherited by subclasses.
──────────────────────────────────────────────
"""
from __future__ import annotations

import inspect
from abc import ABCMeta
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional, Set, Type, TypeVar

from component_broker.broker.errors import InvalidKeyError

C = TypeVar("C", bound=type)

_KIND_ATTR = "__capability_kind__"
_SKIP_MODULES = frozenset({"builtins", "abc", "typing", "typing_extensions"})


class CapabilityKind(str, Enum):
    INTERFACE = "interface"
    ABSTRACT = "abstract"
    CONCRETE = "concrete"


@dataclass(frozen=True)
class Capability:
    """Tagged description of a requested capability."""

    key: str
    name: str
    kind: CapabilityKind
    type: Optional[Type[Any]] = None

    @property
    def is_interface(self) -> bool:
        return self.kind is CapabilityKind.INTERFACE

    @property
    def is_concrete(self) -> bool:
        return self.kind is CapabilityKind.CONCRETE

    @classmethod
    def named(cls, key: str, kind: CapabilityKind = CapabilityKind.INTERFACE) -> "Capability":
        """Describe a capability that has no Python class at the call site."""
        if not key:
            raise InvalidKeyError("key")
        return cls(key=key, name=key.rsplit(".", 1)[-1], kind=kind)


def qualified_name(cls: Type[Any]) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def describe(target: Any) -> Capability:
    """Return the Capability for a class (or pass a Capability through)."""
    if isinstance(target, Capability):
        return target
    if target is None:
        raise InvalidKeyError("capability")
    if isinstance(target, str):
        return Capability.named(target)
    if not isinstance(target, type):
        raise TypeError(f"Expected a class or Capability, got {type(target).__name__}")
    return Capability(
        key=qualified_name(target),
        name=target.__name__,
        kind=kind_of(target),
        type=target,
    )


def kind_of(cls: Type[Any]) -> CapabilityKind:
    pinned = vars(cls).get(_KIND_ATTR)
    if pinned is not None:
        return CapabilityKind(pinned)
    if is_protocol(cls):
        return CapabilityKind.INTERFACE
    if isinstance(cls, ABCMeta) and _only_abstract_members(cls):
        # marker ABCs declare nothing, so isabstract() is False for them
        if inspect.isabstract(cls) or _derives_only_from_library(cls):
            return CapabilityKind.INTERFACE
    if inspect.isabstract(cls):
        return CapabilityKind.ABSTRACT
    return CapabilityKind.CONCRETE


# ──────────────────────────────────────────────
# Explicit tagging
# ──────────────────────────────────────────────
def _tag(kind: CapabilityKind):
    def decorator(cls: C) -> C:
        setattr(cls, _KIND_ATTR, kind)
        return cls

    return decorator


interface = _tag(CapabilityKind.INTERFACE)
abstract = _tag(CapabilityKind.ABSTRACT)
concrete = _tag(CapabilityKind.CONCRETE)


# ──────────────────────────────────────────────
# Conformance check used on factory output
# ──────────────────────────────────────────────
def implements(obj: Any, capability: Capability) -> bool:
    cls = capability.type
    if cls is None:
        return obj is not None
    if is_protocol(cls):
        if getattr(cls, "_is_runtime_protocol", False):
            return isinstance(obj, cls)
        return all(hasattr(obj, name) for name in _protocol_members(cls))
    return isinstance(obj, cls)


def is_protocol(cls: Type[Any]) -> bool:
    return bool(getattr(cls, "_is_protocol", False))


def _own_classes(cls: Type[Any]) -> Iterable[Type[Any]]:
    for klass in cls.__mro__:
        if klass is object or klass.__module__ in _SKIP_MODULES:
            continue
        yield klass


def _derives_only_from_library(cls: Type[Any]) -> bool:
    return all(base is object or base.__module__ in _SKIP_MODULES for base in cls.__bases__)


def _only_abstract_members(cls: Type[Any]) -> bool:
    for klass in _own_classes(cls):
        for name, value in vars(klass).items():
            if name.startswith("_"):
                continue
            if isinstance(value, (staticmethod, classmethod)):
                value = value.__func__
            if not (callable(value) or isinstance(value, property)):
                continue
            if not getattr(value, "__isabstractmethod__", False):
                return False
    return True


def _protocol_members(cls: Type[Any]) -> Set[str]:
    names: Set[str] = set()
    for klass in _own_classes(cls):
        if not is_protocol(klass):
            continue
        names.update(n for n in vars(klass) if not n.startswith("_"))
        names.update(n for n in inspect.get_annotations(klass) if not n.startswith("_"))
    return names
