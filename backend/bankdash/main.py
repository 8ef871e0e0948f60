"""FastAPI application factory.

Builds the FastAPI app with middleware, routes, and lifespan events. The
lifespan is the composition root: it builds the one ResilientGateway the
process uses and closes it on shutdown.

Starting data source is controlled by FORCE_MOCK_MODE:
    - false → live-unknown (backend probed on first call, mock on outage)
    - true  → forced-mock (sample data until an operator lifts it)

Called by: Uvicorn (``uvicorn bankdash.main:app``)
Depends on: config.py, environment.py, gateway.py, routes/*, middleware.py
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bankdash.api.errors import register_exception_handlers
from bankdash.api.middleware import register_middleware
from bankdash.config import get_settings
from bankdash.core.environment import APP_VERSION, validate_environment
from bankdash.core.gateway import ResilientGateway, build_gateway

_settings = get_settings()
_log_level = getattr(logging, _settings.log_level.upper(), logging.INFO)

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer() if not _settings.is_production
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(_log_level),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Validate settings, own the gateway for the app's lifetime."""
    validate_environment()
    settings = get_settings()
    if getattr(app.state, "gateway", None) is None:
        app.state.gateway = build_gateway(settings)
    gateway: ResilientGateway = app.state.gateway
    logger.info(
        "app_startup",
        env=settings.app_env,
        backend=settings.normalized_api_base_url,
        mode=gateway.get_mode_info().mode.value,
    )
    yield
    await gateway.aclose()
    logger.info("app_shutdown")


def _register_routes(app: FastAPI) -> None:
    from bankdash.api.routes import admin, auth, backend_status, customer, health

    app.include_router(health.router)
    app.include_router(backend_status.router)
    app.include_router(auth.router)
    app.include_router(customer.router)
    app.include_router(admin.router)


def create_app(gateway: ResilientGateway | None = None) -> FastAPI:
    """Build and configure the FastAPI application.

    Args:
        gateway: Pre-built gateway (tests). Built from settings at startup
            when omitted.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="BankDash Gateway",
        description="Banking dashboard API with live/mock failover",
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
    )
    app.state.gateway = gateway

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Backend-Mode", "X-Data-Source", "X-Request-ID"],
    )

    register_middleware(app)
    register_exception_handlers(app)
    _register_routes(app)

    return app


app = create_app()
