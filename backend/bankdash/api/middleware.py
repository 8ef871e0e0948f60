"""Middleware for request logging, error handling, request IDs, and data-source tagging.

Middleware stack (executed in reverse registration order):
    1. RequestIDMiddleware   → Assigns unique X-Request-ID to every request
    2. LoggingMiddleware     → Logs method, path, status, duration and gateway mode
    3. BackendModeMiddleware → Adds X-Backend-Mode / X-Data-Source headers
    4. ErrorHandlerMiddleware → Catches unhandled exceptions → JSON error response

X-Data-Source is MOCK whenever the response may contain sample data, so the
dashboard can label it without a second request.

Called by: main.py (``register_middleware()``)
Depends on: core/mode.py (via app.state.gateway)
"""

from __future__ import annotations

import time
import uuid

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()


def _gateway_mode(request: Request) -> tuple[str, str] | None:
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        return None
    info = gateway.get_mode_info()
    return info.mode.value, info.label


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Reuse the client's ``X-Request-ID`` or generate one, and echo it back."""

    async def dispatch(self, request: Request, call_next):  # noqa: ANN001
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with method, path, status, duration and mode."""

    async def dispatch(self, request: Request, call_next):  # noqa: ANN001
        start = time.perf_counter()

        response: Response = await call_next(request)

        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        mode = _gateway_mode(request)
        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=duration_ms,
            backend_mode=mode[0] if mode else None,
            request_id=getattr(request.state, "request_id", "unknown"),
        )
        return response


class BackendModeMiddleware(BaseHTTPMiddleware):
    """Tag every response with the gateway mode after the call finished.

        X-Backend-Mode: forced-mock | live-unknown | live-available | live-unavailable
        X-Data-Source:  MOCK | API
    """

    async def dispatch(self, request: Request, call_next):  # noqa: ANN001
        response = await call_next(request)
        mode = _gateway_mode(request)
        if mode is not None:
            response.headers["X-Backend-Mode"], response.headers["X-Data-Source"] = mode
        return response


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Catch unhandled exceptions and return a sanitized JSON 500.

    Classified backend errors never reach this point; api/errors.py
    handles them. Anything arriving here is a bug.
    """

    async def dispatch(self, request: Request, call_next):  # noqa: ANN001
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception(
                "unhandled_error",
                error=str(exc),
                request_id=getattr(request.state, "request_id", "unknown"),
                path=request.url.path,
            )
            return JSONResponse(
                status_code=500,
                content={
                    "error": {
                        "code": "INTERNAL_ERROR",
                        "kind": None,
                        "message": "Something went wrong on our side. Please try again shortly.",
                        "details": None,
                    }
                },
            )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add standard browser hardening headers to every response."""

    async def dispatch(self, request: Request, call_next):  # noqa: ANN001
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = "camera=(), microphone=(), geolocation=()"
        return response


def register_middleware(app: FastAPI) -> None:
    """Register all middleware in the correct order.

    Starlette runs middleware in reverse registration order:
        1. ErrorHandler    (registered first → outermost wrapper)
        2. SecurityHeaders
        3. BackendMode
        4. Logging
        5. RequestID       (registered last → runs first)
    """
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(BackendModeMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
