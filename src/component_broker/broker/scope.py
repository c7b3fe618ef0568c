# component_broker/broker/scope.py
"""
ContextVar-based unit-of-work scopes
──────────────────────────────────────────────
• Each request (or task) binds one Scope via ScopeMiddleware
• get_scope() returns it, or None when nothing is bound
• current_scope() is the strict variant; raises if none bound
• reset_scope(token) cleans up after the unit of work
• unit_of_work() binds a fresh Scope for CLI/jobs/tests

A Scope is a bag of per-unit-of-work items. Brokers keep their
InstanceCache in that bag, so closing the scope drops every instance
resolved inside it.
──────────────────────────────────────────────
"""
from __future__ import annotations

import itertools
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any, Dict, Hashable, Iterator, List, Optional

from component_broker.broker.errors import (
    ComponentNotFoundError,
    InvalidComponentError,
    InvalidKeyError,
)

_scope_cv: ContextVar[Optional["Scope"]] = ContextVar("_cb_scope", default=None)
_ids = itertools.count(1)


class Scope:
    def __init__(self, name: Optional[str] = None):
        self.name = name or f"scope-{next(_ids)}"
        self.items: Dict[Hashable, Any] = {}
        self.closed = False
        self._tokens: List[Token] = []

    def close(self) -> None:
        """Discard everything stored in this scope."""
        self.items.clear()
        self.closed = True

    def __enter__(self) -> "Scope":
        self._tokens.append(set_scope(self))
        return self

    def __exit__(self, *exc_info) -> None:
        reset_scope(self._tokens.pop())
        if not self._tokens:
            self.close()

    def __repr__(self) -> str:
        return f"<Scope {self.name} items={len(self.items)} closed={self.closed}>"


def set_scope(scope: Scope) -> Token:
    """Bind a Scope to the current context. Keep the token for reset_scope()."""
    return _scope_cv.set(scope)


def get_scope() -> Optional[Scope]:
    return _scope_cv.get()


def current_scope() -> Scope:
    """Return the bound Scope or raise if none bound."""
    scope = _scope_cv.get()
    if scope is None:
        raise RuntimeError(
            "No active Scope found. Did you enable ScopeMiddleware or use unit_of_work()?"
        )
    return scope


def reset_scope(token: Token) -> None:
    _scope_cv.reset(token)


@contextmanager
def unit_of_work(name: Optional[str] = None) -> Iterator[Scope]:
    """Run a block inside a fresh Scope; instances resolved in it die with it."""
    with Scope(name) as scope:
        yield scope


class InstanceCache:
    """Resolved instances: storage key → object."""

    def __init__(self) -> None:
        self._instances: Dict[str, Any] = {}

    def register(self, key: str, instance: Any) -> None:
        if not key:
            raise InvalidKeyError("key")
        if instance is None:
            raise InvalidComponentError("component")
        self._instances[key] = instance

    def has(self, key: str) -> bool:
        if not key:
            raise InvalidKeyError("key")
        return key in self._instances

    def retrieve(self, key: str) -> Any:
        if not key:
            raise InvalidKeyError("key")
        try:
            return self._instances[key]
        except KeyError:
            raise ComponentNotFoundError(key) from None

    def unregister(self, key: str) -> None:
        if not key:
            raise InvalidKeyError("key")
        self._instances.pop(key, None)

    def unregister_all(self) -> None:
        self._instances.clear()

    def keys(self) -> List[str]:
        return list(self._instances)

    def __len__(self) -> int:
        return len(self._instances)
