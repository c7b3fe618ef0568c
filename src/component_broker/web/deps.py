# component_broker/web/deps.py
"""
FastAPI dependencies
──────────────────────────────────────────────
Resolve components inside the request Scope opened by ScopeMiddleware.

Usage:
    from component_broker.web.deps import component, keyed

    @router.get("/birthdays")
    def birthdays(repo: IEmployeeRepository = Depends(component(IEmployeeRepository))):
        ...

    @router.get("/now")
    def now(now: datetime = Depends(keyed("now", datetime))):
        ...
──────────────────────────────────────────────
"""
from __future__ import annotations

from typing import Any, Callable, Optional, Type

from fastapi import Request

from component_broker.broker.instance import get_broker
from component_broker.broker.registry import ComponentBroker, Target
from component_broker.broker.scope import Scope


def request_broker(request: Request) -> ComponentBroker:
    """The broker attached by create_app(), or the default broker."""
    broker: Optional[ComponentBroker] = getattr(request.app.state, "broker", None)
    return broker or get_broker()


def request_scope(request: Request) -> Optional[Scope]:
    """The request's Scope, or None when ScopeMiddleware is not installed."""
    return getattr(request.state, "scope", None)


def component(
    capability: Target, *args: Any, fresh: bool = False, register: bool = True, **kwargs: Any
) -> Callable[[Request], Any]:
    """Dependency returning `capability` from the request scope (fresh=True always builds)."""

    def _resolve(request: Request) -> Any:
        broker = request_broker(request)
        scope = request_scope(request)
        if fresh:
            return broker.retrieve_new(capability, *args, register=register, scope=scope, **kwargs)
        return broker.retrieve(capability, *args, register=register, scope=scope, **kwargs)

    return _resolve


def keyed(key: str, as_type: Optional[Type[Any]] = None) -> Callable[[Request], Any]:
    """Dependency returning the instance registered under `key` in the request scope."""

    def _retrieve(request: Request) -> Any:
        return request_broker(request).retrieve_by_key(key, as_type, scope=request_scope(request))

    return _retrieve
