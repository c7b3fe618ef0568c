# src/component_broker/web/api.py
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from fastapi import FastAPI

from component_broker.broker.instance import get_broker
from component_broker.broker.registry import ComponentBroker
from component_broker.config.settings import BrokerSettings, get_settings
from component_broker.log import configure_logging, get_logger
from component_broker.web.errors import add_error_handlers
from component_broker.web.middleware import RequestLoggerMiddleware, ScopeMiddleware

"""
──────────────────────────────────────────────────────────────
component_broker.web.api
──────────────────────────────────────────────────────────────
Purpose:
    FastAPI app factory for services that resolve their
    components through a ComponentBroker.

Responsibilities:
    • Attach the broker to app.state.broker
    • Open one Scope per request (ScopeMiddleware)
    • Optional request logging
    • Map broker errors to JSON envelopes
──────────────────────────────────────────────────────────────
"""

logger = get_logger(__name__)


def create_app(
    *,
    title: Optional[str] = None,
    broker: Optional[ComponentBroker] = None,
    settings: Optional[BrokerSettings] = None,
    middlewares: Optional[List[Dict[str, Any]]] = None,
    routers: Iterable[Any] = (),
    enable_request_logging: Optional[bool] = None,
    log_allowlist: Iterable[str] = ("/healthz",),
) -> FastAPI:
    """
    Build a FastAPI app wired to a broker.
    Without an explicit broker the process-wide default is used.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title=title or settings.app_name)
    app.state.broker = broker or get_broker()
    logger.info("[broker] attached %r", app.state.broker)

    app.add_middleware(ScopeMiddleware)
    logger.info("[broker] request scope middleware active")

    for mw in middlewares or []:
        app.add_middleware(mw["cls"], **mw.get("kwargs", {}))

    if enable_request_logging is None:
        enable_request_logging = settings.enable_request_logging
    if enable_request_logging:
        app.add_middleware(RequestLoggerMiddleware, allowlist=set(log_allowlist))
        logger.info("[broker] request logger active")

    add_error_handlers(app)
    logger.info("[broker] error handlers registered")

    mount_routers(app, list(routers))

    logger.info("[broker] app '%s' ready", app.title)
    return app


def mount_routers(app: FastAPI, routers: list) -> None:
    """Mount multiple routers safely."""
    for r in routers:
        app.include_router(r)
