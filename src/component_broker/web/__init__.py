"""
Web glue for FastAPI/Starlette hosts.
──────────────────────────────────────────────────────────────
ScopeMiddleware opens one broker Scope per request; deps resolve
components inside it.
──────────────────────────────────────────────────────────────
"""
from .api import create_app, mount_routers
from .deps import component, keyed, request_broker, request_scope
from .middleware import RequestLoggerMiddleware, ScopeMiddleware

__all__ = [
    "RequestLoggerMiddleware",
    "ScopeMiddleware",
    "component",
    "create_app",
    "keyed",
    "mount_routers",
    "request_broker",
    "request_scope",
]
