"""
HTTP client for the notification dispatcher

Status changes are pushed to the order's owner fire-and-forget: a failed
dispatch is logged and never fails the order operation.
"""
import httpx
from laundry_service.models.order import OrderStatus
from typing import Dict, Optional
from opentelemetry import trace
import logging

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

STATUS_MESSAGES: Dict[OrderStatus, str] = {
    OrderStatus.PENDING: "Your order has been placed and is awaiting confirmation",
    OrderStatus.ACCEPTED: "Your order has been accepted",
    OrderStatus.PROCESSING: "Your order is being processed",
    OrderStatus.WASHING: "Your laundry is being washed",
    OrderStatus.DRYING: "Your laundry is drying",
    OrderStatus.FOLDING: "Your laundry is being folded",
    OrderStatus.IRONING: "Your laundry is being ironed",
    OrderStatus.PACKAGING: "Your laundry is being packaged",
    OrderStatus.READY: "Your laundry is ready",
    OrderStatus.COMPLETED: "Your order is complete. Thank you!",
    OrderStatus.CANCELLED: "Your order has been cancelled",
}


def build_status_notification(order_id: int, user_id: int, status: OrderStatus) -> Dict:
    """Payload understood by the dispatcher's send endpoint"""
    return {
        "userIds": [user_id],
        "title": f"Order #{order_id} update",
        "body": STATUS_MESSAGES[status],
        "data": {"orderId": order_id, "status": status.value},
    }


class NotificationClient:
    """Client for the notification dispatcher API"""
    
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/") if base_url else None
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)
        
        if not self.base_url:
            logger.warning("Notification service URL not set - notifications disabled")
        
        # Statistics
        self.notifications_sent = 0
        self.notifications_failed = 0
    
    def is_enabled(self) -> bool:
        """Check if notification dispatch is enabled"""
        return self.base_url is not None
    
    async def notify_status_change(self, order_id: int, user_id: int, status: OrderStatus) -> bool:
        """
        Tell the order's owner about a status change
        
        Returns:
            True if the dispatcher accepted the notification, False otherwise
        """
        if not self.is_enabled():
            logger.debug("Notifications disabled - skipping")
            return False
        
        with tracer.start_as_current_span("notification_client.notify_status_change") as span:
            span.set_attribute("order.id", order_id)
            span.set_attribute("status.new", status.value)
            
            url = f"{self.base_url}/api/notifications/send"
            payload = build_status_notification(order_id, user_id, status)
            
            try:
                response = await self.client.post(url, json=payload)
                span.set_attribute("http.status_code", response.status_code)
                
                if response.status_code == 200:
                    self.notifications_sent += 1
                    logger.info(f"Notification sent for order {order_id} ({status.value})")
                    return True
                
                self.notifications_failed += 1
                logger.error(f"Notification dispatcher error: {response.status_code}")
                return False
            
            except httpx.HTTPError as e:
                self.notifications_failed += 1
                logger.error(f"Failed to call notification dispatcher: {e}")
                span.record_exception(e)
                return False
    
    async def close(self):
        """Close the HTTP client"""
        await self.client.aclose()
