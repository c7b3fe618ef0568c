# component_broker/broker/locator.py
"""
Identifier → constructor lookup
──────────────────────────────────────────────
Two sources, checked in order:
    1) constructors registered explicitly (register_constructor)
    2) import by dotted path ("pkg.module.Class" or "pkg.module:Outer.Inner")

Registering a class with the broker (factory/type) also records it here, so
classes defined inside functions still resolve.
──────────────────────────────────────────────
"""
from __future__ import annotations

import importlib
import threading
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

from component_broker.broker.errors import ComponentConstructionError, InvalidKeyError

Constructor = Callable[..., Any]


class ConstructorTable:
    def __init__(self) -> None:
        self._constructors: Dict[str, Constructor] = {}
        self._lock = threading.RLock()

    def register(self, identifier: str, constructor: Constructor) -> None:
        if not identifier:
            raise InvalidKeyError("identifier")
        if not callable(constructor):
            raise TypeError(f"Constructor for '{identifier}' must be callable")
        with self._lock:
            self._constructors[identifier] = constructor

    def has(self, identifier: str) -> bool:
        if not identifier:
            raise InvalidKeyError("identifier")
        with self._lock:
            return identifier in self._constructors

    def get(self, identifier: str) -> Optional[Constructor]:
        with self._lock:
            return self._constructors.get(identifier)

    def unregister(self, identifier: str) -> None:
        if not identifier:
            raise InvalidKeyError("identifier")
        with self._lock:
            self._constructors.pop(identifier, None)

    def clear(self) -> None:
        with self._lock:
            self._constructors.clear()

    def __len__(self) -> int:
        return len(self._constructors)

    def locate(self, identifier: str) -> Constructor:
        """Return the constructor for `identifier` or raise ComponentConstructionError."""
        if not identifier:
            raise InvalidKeyError("type")
        constructor = self.get(identifier)
        if constructor is None:
            constructor = import_by_path(identifier)
        if not callable(constructor):
            raise ComponentConstructionError(identifier, "not callable")
        return constructor


def import_by_path(identifier: str) -> Any:
    """Import the object named by a dotted (or colon-separated) identifier."""
    for module_name, attrs in _candidates(identifier):
        try:
            obj: Any = importlib.import_module(module_name)
        except ModuleNotFoundError as exc:
            # only swallow "this prefix is not a module"; broken imports inside it propagate
            if exc.name and (module_name == exc.name or module_name.startswith(exc.name + ".")):
                continue
            raise ComponentConstructionError(identifier, str(exc)) from exc
        try:
            for attr in attrs:
                obj = getattr(obj, attr)
        except AttributeError as exc:
            raise ComponentConstructionError(identifier, str(exc)) from exc
        return obj
    raise ComponentConstructionError(identifier, "no importable module")


def _candidates(identifier: str) -> Iterator[Tuple[str, Tuple[str, ...]]]:
    if ":" in identifier:
        module_name, _, qualname = identifier.partition(":")
        yield module_name, tuple(qualname.split("."))
        return
    parts = identifier.split(".")
    # longest module prefix first: pkg.mod.Outer.Inner → (pkg.mod.Outer, Inner), (pkg.mod, Outer.Inner) ...
    for i in range(len(parts) - 1, 0, -1):
        yield ".".join(parts[:i]), tuple(parts[i:])
