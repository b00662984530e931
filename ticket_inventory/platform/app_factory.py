"""
Shared FastAPI App Factory

Provides common app setup for production and test environments.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from ticket_inventory.platform.config.core_setting import settings
from ticket_inventory.platform.constant.route_constant import (
    DASHBOARD_BASE,
    EVENT_BASE,
    HEALTH,
    METRICS,
    TICKET_BASE,
)
from ticket_inventory.platform.exception.exception_handlers import register_exception_handlers
from ticket_inventory.platform.observability.tracing import TracingConfig
from ticket_inventory.service.ticketing.driving_adapter.http_controller.dashboard_controller import (
    router as dashboard_router,
)
from ticket_inventory.service.ticketing.driving_adapter.http_controller.event_controller import (
    router as event_router,
)
from ticket_inventory.service.ticketing.driving_adapter.http_controller.ticket_controller import (
    router as ticket_router,
)


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    tracing: TracingConfig | None = None,
) -> FastAPI:
    """
    Create a configured FastAPI application.

    Args:
        lifespan: Async context manager for app lifespan (startup/shutdown)
        tracing: When given and enabled, FastAPI is auto-instrumented with it

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description='Event discovery and oversell-safe ticket purchase',
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # Must run before routes are mounted
    if tracing and tracing.enabled:
        tracing.instrument_fastapi(app=app)

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    app.include_router(event_router, prefix=EVENT_BASE, tags=['event'])
    app.include_router(ticket_router, prefix=TICKET_BASE, tags=['ticket'])
    app.include_router(dashboard_router, prefix=DASHBOARD_BASE, tags=['dashboard'])

    _register_common_endpoints(app)

    return app


def _register_common_endpoints(app: FastAPI) -> None:
    """Register health and metrics endpoints."""

    @app.get(HEALTH)
    async def health_check() -> dict[str, str]:
        """Health check endpoint for container orchestration."""
        return {'status': 'healthy', 'service': settings.PROJECT_NAME}

    @app.get(METRICS)
    async def get_metrics() -> PlainTextResponse:
        """Prometheus metrics endpoint."""
        return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
