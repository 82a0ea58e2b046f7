"""
OpenTelemetry tracing for the Laundry Service

Order operations open their own spans through ``trace.get_tracer``; this
module installs the exporting provider and instruments the three
boundaries an order request crosses: the HTTP API, the database engine
and outbound calls to the notification dispatcher.
"""
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource, SERVICE_NAME, SERVICE_VERSION, DEPLOYMENT_ENVIRONMENT
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from laundry_service import __version__
from laundry_service.config import Settings
import logging

logger = logging.getLogger(__name__)

# Health and readiness endpoints are polled constantly and carry no order traffic
EXCLUDED_URLS = "health,ready"


def build_resource(settings: Settings) -> Resource:
    """Resource attributes identifying this deployment in traces"""
    return Resource(attributes={
        SERVICE_NAME: settings.service_name,
        SERVICE_VERSION: __version__,
        DEPLOYMENT_ENVIRONMENT: settings.environment,
    })


def setup_tracing(settings: Settings):
    """
    Install an OTLP-exporting tracer provider
    
    Returns:
        The provider, or None when tracing is disabled
    """
    if not settings.otel_enabled:
        logger.info("OpenTelemetry disabled")
        return None
    
    provider = TracerProvider(resource=build_resource(settings))
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otel_endpoint, insecure=True))
    )
    trace.set_tracer_provider(provider)
    
    logger.info(f"OpenTelemetry initialized for {settings.service_name}, sending traces to {settings.otel_endpoint}")
    return provider


def instrument_app(app, engine):
    """Instrument the API, the order database engine and the dispatcher client"""
    FastAPIInstrumentor.instrument_app(app, excluded_urls=EXCLUDED_URLS)
    SQLAlchemyInstrumentor().instrument(engine=engine)
    HTTPXClientInstrumentor().instrument()
    logger.info("FastAPI, SQLAlchemy and httpx instrumented with OpenTelemetry")


def uninstrument_app(app):
    FastAPIInstrumentor.uninstrument_app(app)
    SQLAlchemyInstrumentor().uninstrument()
    HTTPXClientInstrumentor().uninstrument()
