"""OpenTelemetry wiring for the catalog service.

Spans come from three places: FastAPI request instrumentation, SQLAlchemy
statement instrumentation on the shared engine, and the ``catalog.*``
``associations.*`` spans opened through ``get_tracer``.
"""

import logging
from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanExporter,
)
from opentelemetry.trace import Tracer

from library_catalog import __version__
from library_catalog.core.config import Settings, get_settings

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)

_tracer_provider: TracerProvider | None = None


def _otlp_exporter(settings: Settings) -> SpanExporter:
    if settings.otel_exporter_otlp_protocol == "grpc":
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
    else:
        from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
    return OTLPSpanExporter(endpoint=settings.otel_exporter_otlp_endpoint)


def build_tracer_provider(settings: Settings) -> TracerProvider:
    """Create a provider tagged with the service resource and its exporters."""
    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": settings.otel_service_name,
                "service.version": __version__,
                "deployment.environment": settings.environment,
            }
        )
    )
    provider.add_span_processor(BatchSpanProcessor(_otlp_exporter(settings)))
    if settings.otel_console_export:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    return provider


def setup_tracing(app: "FastAPI") -> None:
    """Install the tracer provider and instrument the app and its engine.

    Does nothing when ``otel_enabled`` is false.
    """
    global _tracer_provider

    settings = get_settings()
    if not settings.otel_enabled:
        logger.info("OpenTelemetry tracing is disabled")
        return

    logger.info("Initializing OpenTelemetry tracing for service '%s'", settings.otel_service_name)
    _tracer_provider = build_tracer_provider(settings)
    trace.set_tracer_provider(_tracer_provider)

    from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
    from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor

    from library_catalog.core.database import engine

    FastAPIInstrumentor.instrument_app(app, excluded_urls="health")
    SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine)

    logger.info(
        "OpenTelemetry tracing initialized (%s exporter, %s)",
        settings.otel_exporter_otlp_protocol,
        settings.otel_exporter_otlp_endpoint,
    )


def shutdown_tracing() -> None:
    """Flush pending spans and shut the tracer provider down."""
    global _tracer_provider

    if _tracer_provider is not None:
        logger.info("Shutting down OpenTelemetry tracing")
        _tracer_provider.shutdown()
        _tracer_provider = None


def get_tracer(name: str) -> Tracer:
    return trace.get_tracer(name)
