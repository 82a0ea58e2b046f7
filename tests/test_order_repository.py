"""Tests for the order repository persistence primitives"""
import pytest

from laundry_service.exceptions import NotFound, RepositoryError
from laundry_service.models.order import DeliveryOption, OrderStatus


def insert_order(repository, user_id=7, delivery_option=DeliveryOption.PICKUP, address="12 Wilkinson Rd"):
    with repository.transaction():
        return repository.insert(
            user_id=user_id,
            service_key="one-kg",
            service_title="Wash, Dry & Fold",
            delivery_option=delivery_option,
            delivery_fee=10,
            total_amount=10,
            address=address,
        )


def test_insert_assigns_id_timestamps_and_pending(repository):
    order = insert_order(repository)
    
    assert order.id is not None
    assert order.status == OrderStatus.PENDING
    assert order.created_at is not None
    assert order.updated_at is not None


def test_find_by_id_round_trip(repository):
    order = insert_order(repository)
    
    found = repository.find_by_id(order.id)
    
    assert found.user_id == 7
    assert found.service_key == "one-kg"
    assert found.service_title == "Wash, Dry & Fold"
    assert found.delivery_option == DeliveryOption.PICKUP
    assert found.delivery_fee == 10
    assert found.total_amount == 10
    assert found.address == "12 Wilkinson Rd"


def test_find_by_id_unknown_raises_not_found(repository):
    with pytest.raises(NotFound):
        repository.find_by_id(999)


def test_find_by_user_newest_first_and_scoped(repository):
    first = insert_order(repository, user_id=7)
    second = insert_order(repository, user_id=7)
    insert_order(repository, user_id=8)
    
    orders = repository.find_by_user(7)
    
    assert [order.id for order in orders] == [second.id, first.id]


def test_find_by_user_without_orders_is_empty(repository):
    assert repository.find_by_user(42) == []


def test_update_status_does_not_validate_transition(repository):
    order = insert_order(repository)
    
    with repository.transaction():
        repository.update_status(order.id, OrderStatus.COMPLETED)
    with repository.transaction():
        updated = repository.update_status(order.id, OrderStatus.PENDING)
    
    assert updated.status == OrderStatus.PENDING


def test_update_status_unknown_order(repository):
    with pytest.raises(NotFound):
        repository.update_status(999, OrderStatus.WASHING)


def test_history_is_listed_newest_first(repository):
    order = insert_order(repository)
    
    with repository.transaction():
        repository.append_history(order.id, OrderStatus.PENDING, "placed")
        repository.append_history(order.id, OrderStatus.WASHING)
        repository.append_history(order.id, OrderStatus.DRYING, "tumble")
    
    history = repository.list_history(order.id)
    
    assert [entry.status for entry in history] == [
        OrderStatus.DRYING,
        OrderStatus.WASHING,
        OrderStatus.PENDING,
    ]
    assert history[1].notes is None
    assert history[0].notes == "tumble"


def test_list_history_unknown_order(repository):
    with pytest.raises(NotFound):
        repository.list_history(999)


def test_transaction_rolls_back_on_error(repository):
    order = insert_order(repository)
    
    with pytest.raises(NotFound):
        with repository.transaction():
            repository.update_status(order.id, OrderStatus.WASHING)
            repository.append_history(order.id, OrderStatus.WASHING)
            repository.find_by_id(999)
    
    assert repository.find_by_id(order.id).status == OrderStatus.PENDING
    assert repository.list_history(order.id) == []


def test_infrastructure_failure_surfaces_as_repository_error(database, repository):
    database.drop_tables()
    
    with pytest.raises(RepositoryError):
        repository.find_by_user(7)
