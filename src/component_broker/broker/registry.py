from __future__ import annotations

import inspect
from typing import Any, Callable, Dict, Optional, Tuple, Type, TypeVar, Union, overload

from component_broker.broker.capability import (
    Capability,
    CapabilityKind,
    describe,
    implements,
    is_protocol,
    qualified_name,
)
from component_broker.broker.convention import derive_implementation_identifier
from component_broker.broker.errors import ComponentConstructionError, InvalidKeyError
from component_broker.broker.locator import Constructor, ConstructorTable
from component_broker.broker.scope import InstanceCache, Scope, get_scope
from component_broker.broker.tables import RegistrationTable
from component_broker.config.settings import BrokerSettings, get_settings
from component_broker.log import get_logger

"""
──────────────────────────────────────────────────────────────────────────────
Component Broker
──────────────────────────────────────────────────────────────────────────────
Purpose:
    Single point of object instantiation. Callers ask for a capability
    instead of calling a constructor, which keeps test doubles easy to swap
    in and lets one unit of work share a single instance of a component.

State:
    - factories     capability key → factory identifier     (process-wide)
    - types         capability key → concrete identifier    (process-wide)
    - constructors  identifier → callable                   (process-wide)
    - instances     storage key → object                    (per Scope)
    - interface_mask                                        (process-wide)

Resolution (retrieve / retrieve_new):
    cached instance? → return it (retrieve only)
    interface:  factory > type association > naming convention
    abstract:   factory > type association > ComponentConstructionError
    concrete:   call the class directly

Instances live in the Scope bound to the current context (ScopeMiddleware
binds one per request). With no scope bound they go to a process-wide
fallback cache, so tests must call reset() between cases.

Usage:
    broker = ComponentBroker()
    broker.register_factory(IUserService, UserServiceFactory)
    svc = broker.retrieve(IUserService, repo)       # factory gets `repo`
    broker.register_component("now", datetime.now())
    now = broker.retrieve_by_key("now")
"""

T = TypeVar("T")
Target = Union[Type[Any], Capability, str]
Implementation = Union[Type[Any], str]

logger = get_logger(__name__)


class ComponentBroker:
    def __init__(
        self,
        interface_mask: Optional[str] = None,
        *,
        settings: Optional[BrokerSettings] = None,
    ):
        settings = settings or get_settings()
        self._default_mask: str = interface_mask or settings.interface_mask
        self._mask: str = self._default_mask
        self._factories = RegistrationTable("factories")
        self._types = RegistrationTable("types")
        self._constructors = ConstructorTable()
        # used whenever no Scope is bound (scripts, tests)
        self._fallback = InstanceCache()

    # ------------------------------------------------------------------
    # Interface convention
    # ------------------------------------------------------------------
    @property
    def interface_mask(self) -> str:
        """Regex stripped from an interface name to get its implementation name."""
        return self._mask

    @interface_mask.setter
    def interface_mask(self, mask: str) -> None:
        self._mask = mask

    @property
    def default_interface_mask(self) -> str:
        return self._default_mask

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------
    def register_factory(self, target: Target, factory: Implementation) -> None:
        key = _key(target)
        identifier = self._identifier(factory)
        self._factories.register(key, identifier)
        logger.debug("[broker] factory %s → %s", key, identifier)

    def has_factory(self, target: Target) -> bool:
        return self._factories.has(_key(target))

    def unregister_factory(self, target: Target) -> None:
        self._factories.unregister(_key(target))

    def unregister_all_factories(self) -> None:
        self._factories.unregister_all()

    # ------------------------------------------------------------------
    # Type associations
    # ------------------------------------------------------------------
    def register_type(self, target: Target, concrete: Implementation) -> None:
        key = _key(target)
        identifier = self._identifier(concrete)
        self._types.register(key, identifier)
        logger.debug("[broker] type %s → %s", key, identifier)

    def has_type(self, target: Target) -> bool:
        return self._types.has(_key(target))

    def unregister_type(self, target: Target) -> None:
        self._types.unregister(_key(target))

    def unregister_all_types(self) -> None:
        self._types.unregister_all()

    # ------------------------------------------------------------------
    # Constructors (identifier → callable)
    # ------------------------------------------------------------------
    def register_constructor(self, target: Implementation, constructor: Optional[Constructor] = None):
        """
        Tell the broker how to build `target`.

            broker.register_constructor(EmployeeRepository)              # class under its own name
            broker.register_constructor("app.repos.Cached", make_cached)  # any callable

        Also works as a decorator, bare on a class or with an identifier:

            @broker.register_constructor("app.repos.EmployeeRepository")
            def make_repo(): ...
        """
        if constructor is None:
            if isinstance(target, type):
                self._constructors.register(qualified_name(target), target)
                return target

            def decorator(fn: Constructor) -> Constructor:
                self.register_constructor(target, fn)
                return fn

            return decorator
        identifier = target if isinstance(target, str) else qualified_name(target)
        self._constructors.register(identifier, constructor)
        return constructor

    def has_constructor(self, target: Implementation) -> bool:
        return self._constructors.has(target if isinstance(target, str) else qualified_name(target))

    def unregister_constructor(self, target: Implementation) -> None:
        self._constructors.unregister(target if isinstance(target, str) else qualified_name(target))

    def unregister_all_constructors(self) -> None:
        self._constructors.clear()

    # ------------------------------------------------------------------
    # Components (scoped instances)
    # ------------------------------------------------------------------
    def instances(self, scope: Optional[Scope] = None) -> InstanceCache:
        """The instance cache for `scope`, the bound scope, or the fallback."""
        scope = scope or get_scope()
        if scope is None:
            return self._fallback
        cache = scope.items.get(self)
        if cache is None:
            cache = scope.items[self] = InstanceCache()
        return cache

    def register_component(self, target: Target, component: Any, *, scope: Optional[Scope] = None) -> None:
        """
        Store `component` under `target`, replacing any previous one.
        `target` may be a class (stored under its qualified name) or any string,
        which allows several named instances of the same type side by side.
        """
        self.instances(scope).register(_key(target), component)

    def has_component(self, target: Target, *, scope: Optional[Scope] = None) -> bool:
        return self.instances(scope).has(_key(target))

    def unregister_component(self, target: Target, *, scope: Optional[Scope] = None) -> None:
        self.instances(scope).unregister(_key(target))

    def unregister_all_components(self, *, scope: Optional[Scope] = None) -> None:
        self.instances(scope).unregister_all()

    # ------------------------------------------------------------------
    # Retrieval
    # ------------------------------------------------------------------
    @overload
    def retrieve(self, capability: Type[T], *args: Any, register: bool = ..., scope: Optional[Scope] = ..., **kwargs: Any) -> T: ...

    @overload
    def retrieve(self, capability: Union[Capability, str], *args: Any, register: bool = ..., scope: Optional[Scope] = ..., **kwargs: Any) -> Any: ...

    def retrieve(self, capability, *args, register=True, scope=None, **kwargs):
        """
        Return the cached instance for `capability`, creating (and, unless
        register=False, caching) one if there is none. Positional and keyword
        arguments go to the constructor, or to the factory if one is registered.

        A plain string is treated as a storage key: see retrieve_by_key().
        """
        if isinstance(capability, str):
            return self.retrieve_by_key(capability, scope=scope)
        cap = describe(capability)
        cache = self.instances(scope)
        if cache.has(cap.key):
            return cache.retrieve(cap.key)
        component = self.create(cap, *args, **kwargs)
        if register:
            cache.register(cap.key, component)
        return component

    @overload
    def retrieve_new(self, capability: Type[T], *args: Any, register: bool = ..., scope: Optional[Scope] = ..., **kwargs: Any) -> T: ...

    @overload
    def retrieve_new(self, capability: Capability, *args: Any, register: bool = ..., scope: Optional[Scope] = ..., **kwargs: Any) -> Any: ...

    def retrieve_new(self, capability, *args, register=True, scope=None, **kwargs):
        """
        Always build a fresh instance; with register=True it replaces the cached one.

        Plain strings are rejected: retrieve("x") is a key lookup, so a fresh build
        of a string identifier has to say so with Capability.named("x").
        """
        if isinstance(capability, str):
            raise TypeError(
                f"retrieve_new() cannot build from the key '{capability}'; "
                "pass a class or Capability.named(...)"
            )
        cap = describe(capability)
        component = self.create(cap, *args, **kwargs)
        if register:
            self.instances(scope).register(cap.key, component)
        return component

    def retrieve_by_key(self, key: str, as_type: Optional[Type[T]] = None, *, scope: Optional[Scope] = None) -> Any:
        """Cached instance for `key`; never constructs. Raises ComponentNotFoundError."""
        component = self.instances(scope).retrieve(_key(key))
        if as_type is not None and not isinstance(component, as_type):
            raise TypeError(
                f"Component registered for '{key}' is {type(component).__name__}, "
                f"not {as_type.__name__}"
            )
        return component

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def create(self, capability: Target, *args: Any, **kwargs: Any) -> Any:
        """Build an instance of `capability` without touching any cache."""
        cap = describe(capability)

        if cap.kind is CapabilityKind.CONCRETE:
            if cap.type is not None:
                return self._call(cap.key, cap.type, args, kwargs)
            return self._instantiate(cap.key, args, kwargs)

        factory_id = self._factories.get(cap.key)
        if factory_id is not None:
            return self._create_with_factory(cap, factory_id, args, kwargs)

        type_id = self._types.get(cap.key)
        if type_id is not None:
            logger.debug("[broker] %s via type association %s", cap.key, type_id)
            return self._instantiate(type_id, args, kwargs)

        if cap.kind is CapabilityKind.ABSTRACT:
            # no reliable convention for abstract classes
            raise ComponentConstructionError(cap.key, "abstract class without factory or type association")

        implementation = derive_implementation_identifier(cap.key, self._mask, cap.name)
        if implementation == cap.key:
            # mask did not match; the only candidate is the capability itself
            raise ComponentConstructionError(implementation, "no implementation found by convention")
        constructor = self._constructors.locate(implementation)
        if cap.type is not None and constructor is cap.type:
            raise ComponentConstructionError(implementation, "no implementation found by convention")
        logger.debug("[broker] %s via convention %s", cap.key, implementation)
        return self._call(implementation, constructor, args, kwargs)

    def _create_with_factory(
        self, cap: Capability, factory_id: str, args: Tuple[Any, ...], kwargs: Dict[str, Any]
    ) -> Any:
        logger.debug("[broker] %s via factory %s", cap.key, factory_id)
        factory = self._instantiate(factory_id, args, kwargs)
        produce: Optional[Callable[[], Any]] = getattr(factory, "create", None)
        if not callable(produce):
            raise ComponentConstructionError(factory_id, "factory has no create() method")
        component = produce()
        if not implements(component, cap):
            raise ComponentConstructionError(
                cap.key, f"factory {factory_id} produced {type(component).__name__}"
            )
        return component

    def _identifier(self, implementation: Implementation) -> str:
        # classes are also recorded as constructors so non-importable ones resolve
        if isinstance(implementation, str):
            if not implementation:
                raise InvalidKeyError("identifier")
            return implementation
        if isinstance(implementation, type):
            identifier = qualified_name(implementation)
            self._constructors.register(identifier, implementation)
            return identifier
        raise TypeError(f"Expected a class or identifier string, got {type(implementation).__name__}")

    def _instantiate(self, identifier: str, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Any:
        constructor = self._constructors.locate(identifier)
        return self._call(identifier, constructor, args, kwargs)

    @staticmethod
    def _call(identifier: str, constructor: Constructor, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Any:
        if inspect.isclass(constructor) and inspect.isabstract(constructor):
            raise ComponentConstructionError(identifier, "cannot instantiate an abstract class")
        if inspect.isclass(constructor) and is_protocol(constructor):
            raise ComponentConstructionError(identifier, "cannot instantiate a Protocol")
        try:
            signature = inspect.signature(constructor)
        except (TypeError, ValueError):
            signature = None
        if signature is not None:
            try:
                signature.bind(*args, **kwargs)
            except TypeError as exc:
                raise ComponentConstructionError(identifier, str(exc)) from exc
        return constructor(*args, **kwargs)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reset(self, *, scope: Optional[Scope] = None) -> None:
        """
        Unregister everything, returning the broker to its initial state:
        factories, type associations, the reachable scope's instances, the
        fallback instances, and the interface mask.
        Constructors registered with register_constructor() are kept.
        """
        self.unregister_all_factories()
        self.unregister_all_types()
        self.instances(scope).unregister_all()
        self._fallback.unregister_all()
        self._mask = self._default_mask
        logger.debug("[broker] reset")

    def __repr__(self) -> str:
        return (
            f"<ComponentBroker factories={len(self._factories)} types={len(self._types)} "
            f"constructors={len(self._constructors)} mask={self._mask!r}>"
        )


def _key(target: Target) -> str:
    if target is None or (isinstance(target, str) and not target):
        raise InvalidKeyError("key")
    if isinstance(target, str):
        return target
    return describe(target).key
