"""
Production FastAPI Application

Ticket inventory API: event catalogue, ticket purchase and dashboards.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
import uvicorn

from ticket_inventory.platform.app_factory import create_app
from ticket_inventory.platform.config.core_setting import settings
from ticket_inventory.platform.config.di import container
from ticket_inventory.platform.config.wire_modules import WIRE_MODULES
from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.platform.observability.tracing import TracingConfig


tracing = TracingConfig(service_name='ticket-inventory')


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Ticket Inventory] Starting up...')

    tracing.setup()
    if tracing.enabled:
        Logger.base.info('📊 [Ticket Inventory] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Ticket Inventory] Dependency injection wired')

    database = container.database()
    if tracing.enabled:
        tracing.instrument_sqlalchemy(engine=database.engine)
    if settings.AUTO_CREATE_TABLES:
        await database.create_tables()
    Logger.base.info('🗄️  [Ticket Inventory] Database engine ready')

    Logger.base.info('✅ [Ticket Inventory] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Ticket Inventory] Shutting down...')

    await database.dispose()
    Logger.base.info('🗄️  [Ticket Inventory] Database engine disposed')

    tracing.shutdown()
    container.unwire()

    Logger.base.info('👋 [Ticket Inventory] Shutdown complete')


app = create_app(lifespan=lifespan, tracing=tracing)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run(
        'ticket_inventory.main:app',
        host='0.0.0.0',
        port=8000,
        log_config=None,  # stdlib logging is already routed into loguru
    )
