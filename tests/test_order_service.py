"""Tests for order placement and retrieval"""
import pytest

from laundry_service.exceptions import InvalidOperation, NotFound, ValidationError
from laundry_service.models.order import DeliveryOption, OrderStatus
from laundry_service.services.order_lifecycle import ORDER_PLACED_NOTE
from laundry_service.services.order_service import OrderService


def test_place_order_pickup(order_service, placed_order):
    assert placed_order.delivery_fee == 10
    assert placed_order.total_amount == 10
    assert placed_order.status == OrderStatus.PENDING
    assert placed_order.delivery_option == DeliveryOption.PICKUP
    assert placed_order.address == "12 Wilkinson Rd"


def test_place_order_writes_single_pending_history_entry(order_service, placed_order):
    _, history = order_service.get_order(placed_order.id)
    
    assert len(history) == 1
    assert history[0].status == OrderStatus.PENDING
    assert history[0].notes == ORDER_PLACED_NOTE


def test_place_order_express_uses_configured_fee(db_session):
    service = OrderService(db_session, delivery_fee=20)
    
    order = service.place_order(7, "one-kg-iron", "Wash, Dry, Iron & Fold", "express", "4 Kissy St")
    
    assert order.delivery_fee == 20
    assert order.total_amount == 20


def test_place_order_without_delivery_is_free_and_has_no_address(order_service):
    order = order_service.place_order(7, "whites", "Whites", "none", address="ignored address")
    
    assert order.delivery_fee == 0
    assert order.total_amount == 0
    assert order.address is None


@pytest.mark.parametrize("field", ["user_id", "service_key", "service_title", "delivery_option"])
def test_place_order_missing_field(order_service, field):
    kwargs = {
        "user_id": 7,
        "service_key": "half-kg",
        "service_title": "Wash, Dry & Fold",
        "delivery_option": "pickup",
        "address": "12 Wilkinson Rd",
    }
    kwargs[field] = None
    
    with pytest.raises(ValidationError):
        order_service.place_order(**kwargs)
    
    assert order_service.list_orders(7) == []


def test_place_order_blank_strings_count_as_missing(order_service):
    with pytest.raises(ValidationError) as exc_info:
        order_service.place_order(7, "  ", "", "pickup", "12 Wilkinson Rd")
    
    assert "servicePackageKey" in exc_info.value.message
    assert "serviceTitle" in exc_info.value.message


def test_place_order_unknown_delivery_option(order_service):
    with pytest.raises(ValidationError):
        order_service.place_order(7, "half-kg", "Wash, Dry & Fold", "drone", "12 Wilkinson Rd")


@pytest.mark.parametrize("option", ["pickup", "express"])
def test_place_order_requires_address_for_delivery(order_service, option):
    with pytest.raises(ValidationError):
        order_service.place_order(7, "half-kg", "Wash, Dry & Fold", option, None)


def test_compute_delivery_fee(order_service):
    assert order_service.compute_delivery_fee(DeliveryOption.NONE) == 0
    assert order_service.compute_delivery_fee(DeliveryOption.PICKUP) == 10
    assert order_service.compute_delivery_fee(DeliveryOption.EXPRESS) == 10


def test_get_order_round_trip(order_service, placed_order):
    order, _ = order_service.get_order(placed_order.id)
    
    assert order.id == placed_order.id
    assert (order.user_id, order.service_key, order.service_title) == (7, "half-kg", "Wash, Dry & Fold")
    assert order.delivery_option == DeliveryOption.PICKUP
    assert order.address == "12 Wilkinson Rd"


def test_get_order_unknown(order_service):
    with pytest.raises(NotFound):
        order_service.get_order(999)


def test_list_orders_newest_first(order_service, placed_order):
    second = order_service.place_order(7, "whites", "Whites", "none")
    
    orders = order_service.list_orders(7)
    
    assert [order.id for order in orders] == [second.id, placed_order.id]


def test_washing_then_completed_scenario(order_service, placed_order):
    order_service.update_status(placed_order.id, "washing")
    order_service.update_status(placed_order.id, "completed")
    
    order, history = order_service.get_order(placed_order.id)
    
    assert order.status == OrderStatus.COMPLETED
    assert [entry.status.value for entry in history] == ["completed", "washing", "pending"]
    
    with pytest.raises(InvalidOperation) as exc_info:
        order_service.cancel_order(placed_order.id)
    assert "completed" in exc_info.value.message


def test_update_status_requires_status(order_service, placed_order):
    with pytest.raises(ValidationError):
        order_service.update_status(placed_order.id, None)
