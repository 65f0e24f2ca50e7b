"""Global error handlers rendering every failure as ``{"error", "request_id"}``."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from publicgoods.api.request_id import get_request_id

logger = logging.getLogger(__name__)

METHOD_NOT_ALLOWED = "Method not allowed"
INTERNAL_ERROR = "Internal server error"


def as_http_error(exc: Exception, *, headers: Optional[dict[str, str]] = None) -> HTTPException:
    """Translate a domain error carrying ``reason``/``status_code`` into an HTTPException."""
    reason = getattr(exc, "reason", None) or str(exc) or INTERNAL_ERROR
    status_code = int(getattr(exc, "status_code", 500))
    return HTTPException(status_code=status_code, detail=reason, headers=headers)


def _message(detail: Any) -> str:
    if isinstance(detail, str) and detail:
        return detail
    if detail:
        return str(detail)
    return INTERNAL_ERROR


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    msg = first.get("msg") or "invalid"
    return f"Invalid request: {loc}: {msg}" if loc else f"Invalid request: {msg}"


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exc_handler(request: Request, exc: StarletteHTTPException):  # type: ignore[override]
        rid = get_request_id(request)
        message = METHOD_NOT_ALLOWED if exc.status_code == 405 else _message(exc.detail)
        payload = {"error": message, "request_id": rid}
        # Keep Allow on 405 and any headers the route attached
        return JSONResponse(status_code=exc.status_code, content=payload, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exc_handler(request: Request, exc: RequestValidationError):  # type: ignore[override]
        rid = get_request_id(request)
        payload = {"error": _validation_message(exc), "request_id": rid}
        return JSONResponse(status_code=400, content=payload)

    @app.exception_handler(Exception)
    async def unhandled_exc_handler(request: Request, exc: Exception):  # type: ignore[override]
        logger.exception("unhandled_error path=%s", request.url.path)
        rid = get_request_id(request)
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR, "request_id": rid})
