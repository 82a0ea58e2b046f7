"""
Persistence primitives for orders and their status history

No business rules live here: the lifecycle engine decides what may be
written, the repository only writes it. Nothing here commits; callers own
the transaction so an order change and its history entry land together.
"""
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func
from laundry_service.exceptions import NotFound, RepositoryError
from laundry_service.models.order import Order, OrderStatus, OrderStatusHistory, DeliveryOption
from typing import List, Optional
from contextlib import contextmanager
from functools import wraps
from opentelemetry import trace
import logging

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


def _wrap_db_errors(method):
    """Roll back and surface driver/ORM failures as RepositoryError"""
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except SQLAlchemyError as e:
            logger.error(f"Repository failure in {method.__name__}: {e}", exc_info=True)
            self.db.rollback()
            raise RepositoryError(f"Database error: {e.__class__.__name__}") from e
    return wrapper


class OrderRepository:
    """Order and status-history queries bound to one session"""
    
    def __init__(self, db: Session):
        self.db = db
    
    @_wrap_db_errors
    def insert(
        self,
        user_id: int,
        service_key: str,
        service_title: str,
        delivery_option: DeliveryOption,
        delivery_fee: int,
        total_amount: int,
        address: Optional[str] = None
    ) -> Order:
        """Insert a new order in pending status"""
        with tracer.start_as_current_span("order_repository.insert") as span:
            span.set_attribute("user.id", user_id)
            
            order = Order(
                user_id=user_id,
                service_key=service_key,
                service_title=service_title,
                delivery_option=delivery_option,
                delivery_fee=delivery_fee,
                total_amount=total_amount,
                address=address,
                status=OrderStatus.PENDING
            )
            self.db.add(order)
            self.db.flush()  # Get order ID
            self.db.refresh(order)
            
            span.set_attribute("order.id", order.id)
            return order
    
    @_wrap_db_errors
    def find_by_id(self, order_id: int) -> Order:
        """Get order by ID, raising NotFound when absent"""
        with tracer.start_as_current_span("order_repository.find_by_id") as span:
            span.set_attribute("order.id", order_id)
            
            order = self.db.get(Order, order_id)
            if order is None:
                raise NotFound(order_id)
            return order
    
    @_wrap_db_errors
    def find_by_user(self, user_id: int) -> List[Order]:
        """A user's orders, newest first"""
        with tracer.start_as_current_span("order_repository.find_by_user") as span:
            span.set_attribute("user.id", user_id)
            
            query = (
                select(Order)
                .where(Order.user_id == user_id)
                .order_by(Order.created_at.desc(), Order.id.desc())
            )
            orders = list(self.db.scalars(query))
            
            span.set_attribute("orders.returned", len(orders))
            return orders
    
    @_wrap_db_errors
    def update_status(self, order_id: int, status: OrderStatus) -> Order:
        """Set status and refresh updated_at; legality is not checked here"""
        with tracer.start_as_current_span("order_repository.update_status") as span:
            span.set_attribute("order.id", order_id)
            span.set_attribute("status.new", status.value)
            
            order = self.find_by_id(order_id)
            order.status = status
            order.updated_at = func.now()
            self.db.flush()
            self.db.refresh(order)
            return order
    
    @_wrap_db_errors
    def append_history(self, order_id: int, status: OrderStatus, notes: Optional[str] = None) -> None:
        """Append one status-history entry"""
        with tracer.start_as_current_span("order_repository.append_history") as span:
            span.set_attribute("order.id", order_id)
            span.set_attribute("status.new", status.value)
            
            self.db.add(OrderStatusHistory(order_id=order_id, status=status, notes=notes))
            self.db.flush()
    
    @_wrap_db_errors
    def list_history(self, order_id: int) -> List[OrderStatusHistory]:
        """An order's status history, newest first"""
        with tracer.start_as_current_span("order_repository.list_history") as span:
            span.set_attribute("order.id", order_id)
            
            # Surfaces NotFound for unknown orders instead of an empty list
            self.find_by_id(order_id)
            
            query = (
                select(OrderStatusHistory)
                .where(OrderStatusHistory.order_id == order_id)
                .order_by(OrderStatusHistory.changed_at.desc(), OrderStatusHistory.id.desc())
            )
            return list(self.db.scalars(query))
    
    @contextmanager
    def transaction(self):
        """Commit everything written inside the block, or none of it"""
        try:
            yield
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Commit failed, rolling back: {e}", exc_info=True)
            self.db.rollback()
            raise RepositoryError(f"Database error: {e.__class__.__name__}") from e
        except Exception:
            self.db.rollback()
            raise
