# component_broker/web/middleware.py
from __future__ import annotations

import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Receive, Scope as ASGIScope, Send

from component_broker.broker.scope import Scope, reset_scope, set_scope
from component_broker.log import get_logger

logger = get_logger(__name__)


class ScopeMiddleware(BaseHTTPMiddleware):
    """
    Per-request unit-of-work middleware.

    Opens one Scope per request, exposes it as request.state.scope, binds it
    to the context for the broker, and closes it when the response is done,
    which drops every component resolved during the request.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        scope = Scope(name=f"{request.method} {request.url.path}")
        request.state.scope = scope
        token = set_scope(scope)
        try:
            return await call_next(request)
        finally:
            reset_scope(token)
            scope.close()


class RequestLoggerMiddleware:
    """Logs method, path, status and elapsed time for each HTTP request."""

    def __init__(self, app: ASGIApp, allowlist: Optional[set] = None):
        self.app = app
        self.allowlist = allowlist or set()

    async def __call__(self, scope: ASGIScope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        path = scope.get("path", "")
        if any(path.startswith(p) for p in self.allowlist):
            return await self.app(scope, receive, send)

        method = scope.get("method", "")
        start_time = time.perf_counter()
        status = {"code": 500}

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                status["code"] = message["status"]
            await send(message)

        logger.info("[REQ] %s %s", method, path)
        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            elapsed = (time.perf_counter() - start_time) * 1000
            logger.info("[RES] %s %s %s (%.2f ms)", method, path, status["code"], elapsed)
