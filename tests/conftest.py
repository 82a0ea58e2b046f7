"""Shared fixtures: in-memory SQLite store, services and an API client"""
import pytest
from fastapi.testclient import TestClient

from laundry_service.config import Settings
from laundry_service.db.database import Database
from laundry_service.main import create_app
from laundry_service.services.order_repository import OrderRepository
from laundry_service.services.order_lifecycle import OrderLifecycle
from laundry_service.services.order_service import OrderService


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        otel_enabled=False,
        log_format="text",
        delivery_fee=10,
        notification_service_url=None,
    )


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.create_tables()
    yield db
    db.drop_tables()
    db.dispose()


@pytest.fixture
def db_session(database):
    with database.session() as session:
        yield session


@pytest.fixture
def repository(db_session):
    return OrderRepository(db_session)


@pytest.fixture
def lifecycle(repository):
    return OrderLifecycle(repository)


@pytest.fixture
def order_service(db_session):
    return OrderService(db_session, delivery_fee=10)


@pytest.fixture
def placed_order(order_service):
    return order_service.place_order(
        user_id=7,
        service_key="half-kg",
        service_title="Wash, Dry & Fold",
        delivery_option="pickup",
        address="12 Wilkinson Rd",
    )


@pytest.fixture
def app(settings, database):
    return create_app(settings, database=database)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def order_payload():
    return {
        "userId": 7,
        "servicePackageKey": "half-kg",
        "serviceTitle": "Wash, Dry & Fold",
        "deliveryOption": "pickup",
        "deliveryFee": 10,
        "address": "12 Wilkinson Rd",
    }
