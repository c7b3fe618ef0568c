# component_broker/web/errors.py
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from component_broker.broker.errors import (
    ComponentConstructionError,
    ComponentNotFoundError,
    InvalidComponentError,
    InvalidKeyError,
)
from component_broker.log import get_logger

logger = get_logger(__name__)


def error_envelope(code: str, message: str, details=None):
    return {"error": {"code": code, "message": message, "details": details or {}}}


async def not_found_handler(request: Request, exc: ComponentNotFoundError) -> JSONResponse:
    return JSONResponse(
        error_envelope("NOT_FOUND", str(exc), {"key": exc.key}), status_code=404
    )


async def bad_request_handler(request: Request, exc: ValueError) -> JSONResponse:
    return JSONResponse(
        error_envelope("BAD_REQUEST", str(exc), {"param": getattr(exc, "param", None)}),
        status_code=400,
    )


async def construction_error_handler(request: Request, exc: ComponentConstructionError) -> JSONResponse:
    # a missing registration or a bad convention mask, not a client problem
    logger.error("[broker] %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        error_envelope("CONFIGURATION_ERROR", "Component could not be created", {"identifier": str(exc.identifier)}),
        status_code=500,
    )


def add_error_handlers(app: FastAPI) -> None:
    """Map broker exceptions to the JSON error envelope."""
    app.add_exception_handler(ComponentNotFoundError, not_found_handler)
    app.add_exception_handler(InvalidKeyError, bad_request_handler)
    app.add_exception_handler(InvalidComponentError, bad_request_handler)
    app.add_exception_handler(ComponentConstructionError, construction_error_handler)
