"""Application lifespan: startup and shutdown wiring only.

Startup: logging, collaborators on app.state (storage, notification
dispatcher), telemetry when enabled. Shutdown: drain pending notifications,
flush telemetry, dispose the SQL engine.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from tramites.application.services.notification_dispatcher import NotificationDispatcher
from tramites.core.config import get_settings
from tramites.infrastructure.external.email import NotificationFactory
from tramites.infrastructure.external.storage import StorageFactory
from tramites.infrastructure.persistence import database
from tramites.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    setup_logging()

    app.state.storage = StorageFactory.create_storage_service(settings)
    app.state.dispatcher = NotificationDispatcher(
        NotificationFactory.create_notification_service(settings)
    )
    app.state.telemetry = None

    if settings.telemetry_enabled:
        from tramites.shared.telemetry.telemetry import TelemetryConfig

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            environment=settings.telemetry_environment,
        )
        telemetry.setup(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        telemetry.instrument_fastapi(app)
        database.get_session_factory()
        if database.engine is not None:
            telemetry.instrument_sqlalchemy(database.engine)
        app.state.telemetry = telemetry
        logger.info("Telemetry initialized")

    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    dispatcher: NotificationDispatcher = app.state.dispatcher
    if dispatcher.pending:
        logger.info("Waiting for %d pending notifications", dispatcher.pending)
    await dispatcher.drain()

    if app.state.telemetry is not None:
        app.state.telemetry.shutdown()
        logger.info("Telemetry shutdown complete")

    await database.dispose_engine()
