"""Tests for logging setup and configuration"""
import json
import logging

import pytest

from laundry_service.logging_config import setup_logging
from laundry_service.config import Settings


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_logging_includes_service(capsys, restore_root_logger):
    setup_logging("laundry-service", log_level="DEBUG", log_format="json")
    
    logging.getLogger("laundry_service.test").warning("order rejected")
    
    lines = [line for line in capsys.readouterr().out.splitlines() if line.strip()]
    record = json.loads(lines[-1])
    assert record["message"] == "order rejected"
    assert record["level"] == "WARNING"
    assert record["logger"] == "laundry_service.test"
    assert record["service"] == "laundry-service"


def test_text_logging(capsys, restore_root_logger):
    setup_logging("laundry-service", log_level="INFO", log_format="text")
    
    logging.getLogger("laundry_service.test").debug("hidden")
    logging.getLogger("laundry_service.test").info("visible")
    
    out = capsys.readouterr().out
    assert "visible" in out
    assert "hidden" not in out
    assert "laundry-service" in out


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("DELIVERY_FEE", "20")
    monkeypatch.setenv("NOTIFICATION_SERVICE_URL", "http://notify:3000")
    
    settings = Settings()
    
    assert settings.delivery_fee == 20
    assert settings.notification_service_url == "http://notify:3000"
    assert settings.service_name == "laundry-service"

