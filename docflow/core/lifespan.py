"""Startup and shutdown hooks for the FastAPI app."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from docflow.core.config import get_settings
from docflow.infrastructure.persistence import database
from docflow.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


def _start_tracing(app: FastAPI) -> None:
    # Imported here so the OpenTelemetry SDK is only loaded when enabled.
    from docflow.shared.telemetry.tracing import TracingConfig, set_tracing

    settings = get_settings()
    tracing = TracingConfig(
        service_name=settings.app_name,
        service_version=settings.app_version,
        environment=settings.telemetry_environment,
    )
    tracing.setup(
        exporter_type=settings.telemetry_exporter,
        otlp_endpoint=settings.telemetry_otlp_endpoint,
        sample_rate=settings.telemetry_sample_rate,
    )
    tracing.instrument_fastapi(app)
    database._ensure_engine()
    if database.engine is not None:
        tracing.instrument_sqlalchemy(database.engine)
    set_tracing(tracing)


def _stop_tracing() -> None:
    from docflow.shared.telemetry.tracing import get_tracing, set_tracing

    tracing = get_tracing()
    if tracing is not None:
        tracing.shutdown()
        set_tracing(None)
        logger.info("Tracing flushed and shut down")


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    setup_logging()
    if settings.telemetry_enabled:
        _start_tracing(app)
    if not settings.database_url:
        logger.warning("DATABASE_URL is not set; only /health will succeed")
    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    if settings.telemetry_enabled:
        _stop_tracing()
    if database.engine is not None:
        await database.dispose_engine()
        logger.info("Database engine disposed")
