"""
Global middleware and exception handlers.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.settings import config
from core.errors import AppError, Internal, ValidationFailed

logger = logging.getLogger(__name__)


def register_middleware(app: FastAPI) -> None:
    """Attach any app-level middleware."""

    @app.middleware("http")
    async def request_timer(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.debug("%s %s — %.3fs", request.method, request.url.path, elapsed)
        return response


def _validation_details(exc: RequestValidationError) -> List[Dict[str, Any]]:
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        msg = err.get("msg", "")
        # pydantic prefixes messages raised from our own validators
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        details.append({"field": ".".join(loc), "message": msg})
    return details


def register_exception_handlers(app: FastAPI) -> None:
    """Map every failure onto the ``{"success": false, ...}`` envelope."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        err = ValidationFailed(details=_validation_details(exc))
        return JSONResponse(status_code=err.status_code, content=err.to_body())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            body = {"success": False, "error": "Route not found", "path": request.url.path}
        else:
            body = {"success": False, "error": str(exc.detail)}
        return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        err = Internal(f"{type(exc).__name__}: {exc}" if config.debug else None)
        return JSONResponse(status_code=err.status_code, content=err.to_body())
