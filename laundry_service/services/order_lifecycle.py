"""
Order lifecycle engine

Statuses run pending -> accepted -> processing -> washing -> drying ->
folding -> ironing -> packaging -> ready -> completed, with cancelled
reachable from any non-terminal status. Adjacency is not enforced: any
recognized status other than pending may be set directly. pending is
only ever entered at creation.
"""
from laundry_service.exceptions import InvalidOperation, InvalidStatus
from laundry_service.models.order import Order, OrderStatus
from laundry_service.services.order_repository import OrderRepository
from typing import Optional, Union
from opentelemetry import trace
import logging

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

TRANSITION_TARGETS = frozenset(status for status in OrderStatus if status is not OrderStatus.PENDING)
TERMINAL_STATUSES = frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED})

ORDER_PLACED_NOTE = "Order placed successfully, awaiting confirmation"
DEFAULT_CANCEL_NOTE = "Order cancelled by user"


def parse_target_status(value: Union[str, OrderStatus, None]) -> OrderStatus:
    """Map a requested status onto the allow-list, raising InvalidStatus otherwise"""
    try:
        status = OrderStatus(value)
    except ValueError:
        raise InvalidStatus(value)
    
    if status not in TRANSITION_TARGETS:
        raise InvalidStatus(value)
    return status


class OrderLifecycle:
    """Applies status changes and records each one in the status history"""
    
    def __init__(self, repository: OrderRepository):
        self.repository = repository
    
    def record_creation(self, order: Order) -> None:
        """Initial history entry for a freshly inserted order"""
        self.repository.append_history(order.id, OrderStatus.PENDING, ORDER_PLACED_NOTE)
    
    def transition(
        self,
        order_id: int,
        target_status: Union[str, OrderStatus],
        notes: Optional[str] = None
    ) -> Order:
        """
        Move an order to target_status
        
        The status update and its history entry are committed together.
        
        Raises:
            InvalidStatus: target is not a recognized non-pending status
            NotFound: order does not exist
        """
        with tracer.start_as_current_span("order_lifecycle.transition") as span:
            span.set_attribute("order.id", order_id)
            
            status = parse_target_status(target_status)
            span.set_attribute("status.new", status.value)
            
            order = self.repository.find_by_id(order_id)
            old_status = order.status
            span.set_attribute("status.old", old_status.value)
            
            order = self._apply(order_id, status, notes)
            
            logger.info(f"Order {order_id} status updated: {old_status.value} -> {status.value}")
            return order
    
    def cancel(self, order_id: int, reason: Optional[str] = None) -> Order:
        """
        Cancel an order that has not reached a terminal status
        
        Raises:
            NotFound: order does not exist
            InvalidOperation: order is already completed or cancelled
        """
        with tracer.start_as_current_span("order_lifecycle.cancel") as span:
            span.set_attribute("order.id", order_id)
            
            order = self.repository.find_by_id(order_id)
            span.set_attribute("status.old", order.status.value)
            
            if order.status in TERMINAL_STATUSES:
                logger.warning(f"Cannot cancel order {order_id} with status {order.status.value}")
                raise InvalidOperation(f"Cannot cancel order with status: {order.status.value}")
            
            order = self._apply(order_id, OrderStatus.CANCELLED, reason or DEFAULT_CANCEL_NOTE)
            
            logger.info(f"Order {order_id} cancelled")
            return order
    
    def _apply(self, order_id: int, status: OrderStatus, notes: Optional[str]) -> Order:
        with self.repository.transaction():
            order = self.repository.update_status(order_id, status)
            self.repository.append_history(order_id, status, notes)
        return order
