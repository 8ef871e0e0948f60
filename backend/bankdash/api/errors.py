"""Exception handler turning classified backend errors into JSON responses.

    HttpStatusError / DomainError → same status code
    NetworkError                  → 502 (mock fallback was not possible)

Body shape matches ErrorHandlerMiddleware:
    {"error": {"code": ..., "kind": ..., "message": ..., "details": ...}}

Called by: main.py (``register_exception_handlers()``)
Depends on: core/errors.py
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from bankdash.core.errors import ApiError, ErrorKind

logger = structlog.get_logger()

_STATUS_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    409: "CONFLICT",
    422: "UNPROCESSABLE_ENTITY",
}

BAD_GATEWAY = 502


def error_code(exc: ApiError) -> str:
    if exc.kind is ErrorKind.NETWORK:
        return "BACKEND_UNREACHABLE"
    if exc.status >= 500:
        return "BACKEND_ERROR"
    return _STATUS_CODES.get(exc.status, "REQUEST_FAILED")


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    status = BAD_GATEWAY if exc.kind is ErrorKind.NETWORK or not exc.status else exc.status
    logger.info(
        "api_error",
        path=request.url.path,
        kind=exc.kind.value,
        status=status,
        message=exc.message,
        request_id=getattr(request.state, "request_id", "unknown"),
    )
    return JSONResponse(
        status_code=status,
        content={
            "error": {
                "code": error_code(exc),
                "kind": exc.kind.value,
                "message": exc.message,
                "details": exc.details,
            }
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
