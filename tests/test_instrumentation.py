"""Tests for tracing setup"""
from fastapi import FastAPI
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, DEPLOYMENT_ENVIRONMENT

from laundry_service import __version__
from laundry_service.instrumentation import build_resource, instrument_app, setup_tracing, uninstrument_app


def test_tracing_disabled_installs_nothing(settings):
    assert setup_tracing(settings) is None


def test_resource_identifies_deployment(settings):
    settings.environment = "staging"
    
    attributes = build_resource(settings).attributes
    
    assert attributes[SERVICE_NAME] == "laundry-service"
    assert attributes[SERVICE_VERSION] == __version__
    assert attributes[DEPLOYMENT_ENVIRONMENT] == "staging"


def test_instrument_app_marks_application(database):
    app = FastAPI()
    
    instrument_app(app, database.engine)
    try:
        assert getattr(app, "_is_instrumented_by_opentelemetry", False)
    finally:
        uninstrument_app(app)
    
    assert not getattr(app, "_is_instrumented_by_opentelemetry", False)
