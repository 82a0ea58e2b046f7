"""
Order business logic: input validation, fee computation and orchestration
"""
from sqlalchemy.orm import Session
from laundry_service.exceptions import ValidationError
from laundry_service.models.order import Order, OrderStatus, OrderStatusHistory, DeliveryOption
from laundry_service.services.order_lifecycle import OrderLifecycle
from laundry_service.services.order_repository import OrderRepository
from typing import List, Optional, Tuple, Union
from opentelemetry import trace
import logging

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

DEFAULT_DELIVERY_FEE = 10


def _is_missing(value) -> bool:
    if isinstance(value, str):
        return not value.strip()
    return not value


class OrderService:
    """Order service for business logic"""
    
    def __init__(self, db: Session, delivery_fee: int = DEFAULT_DELIVERY_FEE):
        self.repository = OrderRepository(db)
        self.lifecycle = OrderLifecycle(self.repository)
        self.delivery_fee = delivery_fee
    
    def compute_delivery_fee(self, delivery_option: DeliveryOption) -> int:
        """Flat fee for pickup/express, free for self-delivery"""
        if delivery_option is DeliveryOption.NONE:
            return 0
        return self.delivery_fee
    
    def place_order(
        self,
        user_id: Optional[int],
        service_key: Optional[str],
        service_title: Optional[str],
        delivery_option: Union[str, DeliveryOption, None],
        address: Optional[str] = None
    ) -> Order:
        """
        Place a new order
        
        Process:
        1. Validate required fields and the delivery option
        2. Require an address unless the customer delivers the laundry themselves
        3. Compute the delivery fee (total is the fee alone)
        4. Insert the order and its initial history entry in one transaction
        """
        with tracer.start_as_current_span("order_service.place_order") as span:
            missing = [
                name for name, value in (
                    ("userId", user_id),
                    ("servicePackageKey", service_key),
                    ("serviceTitle", service_title),
                    ("deliveryOption", delivery_option),
                )
                if _is_missing(value)
            ]
            if missing:
                logger.warning(f"Order rejected, missing fields: {missing}")
                raise ValidationError(f"Missing required fields: {', '.join(missing)}")
            
            try:
                option = DeliveryOption(delivery_option)
            except ValueError:
                raise ValidationError(f"Invalid delivery option: {delivery_option}")
            
            if option is DeliveryOption.NONE:
                address = None
            elif _is_missing(address):
                raise ValidationError(f"Address is required for {option.value} delivery")
            else:
                address = address.strip()
            
            fee = self.compute_delivery_fee(option)
            
            span.set_attribute("user.id", user_id)
            span.set_attribute("order.delivery_option", option.value)
            span.set_attribute("order.total_amount", fee)
            
            logger.info(f"Creating order for user {user_id}: {service_key} ({option.value})")
            
            with self.repository.transaction():
                order = self.repository.insert(
                    user_id=user_id,
                    service_key=service_key,
                    service_title=service_title,
                    delivery_option=option,
                    delivery_fee=fee,
                    total_amount=fee,
                    address=address
                )
                self.lifecycle.record_creation(order)
            
            span.set_attribute("order.id", order.id)
            logger.info(f"Order {order.id} created successfully")
            
            return order
    
    def list_orders(self, user_id: int) -> List[Order]:
        """A user's orders, newest first"""
        return self.repository.find_by_user(user_id)
    
    def get_order(self, order_id: int) -> Tuple[Order, List[OrderStatusHistory]]:
        """Order with its full status history, newest first"""
        with tracer.start_as_current_span("order_service.get_order") as span:
            span.set_attribute("order.id", order_id)
            
            order = self.repository.find_by_id(order_id)
            history = self.repository.list_history(order_id)
            return order, history
    
    def update_status(
        self,
        order_id: int,
        status: Union[str, OrderStatus, None],
        notes: Optional[str] = None
    ) -> Order:
        """Move an order to a new status"""
        if _is_missing(status):
            raise ValidationError("Status is required")
        return self.lifecycle.transition(order_id, status, notes)
    
    def cancel_order(self, order_id: int, reason: Optional[str] = None) -> Order:
        """Cancel an order"""
        return self.lifecycle.cancel(order_id, reason)
