"""
FastAPI routes for the Laundry Service
"""
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from laundry_service.db.database import get_db
from laundry_service.services import catalog
from laundry_service.services.order_service import OrderService
from laundry_service.services.notification_client import NotificationClient
from laundry_service.models.schemas import (
    OrderCreate,
    OrderStatusUpdate,
    OrderCancel,
    OrderEnvelope,
    OrderResponse,
    StatusHistoryResponse,
    OrderListResponse,
    OrderDetailResponse,
    ServicePackageListResponse,
    ServicePackageResponse,
)
from typing import Optional
import logging

logger = logging.getLogger(__name__)

# Create routers
router = APIRouter(prefix="/api/orders", tags=["orders"])
catalog_router = APIRouter(prefix="/api/service-packages", tags=["service-packages"])


def get_order_service(request: Request, db: Session = Depends(get_db)) -> OrderService:
    """Dependency for Order Service"""
    return OrderService(db, delivery_fee=request.app.state.settings.delivery_fee)


def get_notification_client(request: Request) -> NotificationClient:
    """Dependency for the notification dispatcher client"""
    return request.app.state.notification_client


@router.post("", response_model=OrderEnvelope, status_code=status.HTTP_201_CREATED)
def create_order(
    order: OrderCreate,
    order_service: OrderService = Depends(get_order_service)
):
    """
    Place a new order
    
    - **userId**: Owning user (required)
    - **servicePackageKey**: Catalog key of the package (required)
    - **serviceTitle**: Package title (required)
    - **deliveryOption**: pickup, express or none (required)
    - **address**: Required unless deliveryOption is none
    
    The delivery fee is computed server-side; a client-sent deliveryFee is ignored.
    """
    logger.info(f"Received order request for user {order.user_id}")
    
    if order.delivery_fee is not None:
        logger.debug(f"Ignoring client-sent delivery fee {order.delivery_fee}")
    
    new_order = order_service.place_order(
        user_id=order.user_id,
        service_key=order.service_key,
        service_title=order.service_title,
        delivery_option=order.delivery_option,
        address=order.address
    )
    
    return OrderEnvelope(message="Order created successfully", order=OrderResponse.model_validate(new_order))


@router.get("/user/{user_id}", response_model=OrderListResponse)
def get_user_orders(
    user_id: int,
    order_service: OrderService = Depends(get_order_service)
):
    """
    Get all orders for a specific user, newest first
    
    - **user_id**: User ID
    """
    logger.info(f"Getting orders for user {user_id}")
    
    orders = order_service.list_orders(user_id)
    return OrderListResponse(
        orders=[OrderResponse.model_validate(order) for order in orders],
        total=len(orders)
    )


@router.get("/{order_id}", response_model=OrderDetailResponse)
def get_order(
    order_id: int,
    order_service: OrderService = Depends(get_order_service)
):
    """
    Get an order with its status history
    
    - **order_id**: Order ID
    """
    logger.info(f"Getting order {order_id}")
    
    order, history = order_service.get_order(order_id)
    return OrderDetailResponse(
        order=OrderResponse.model_validate(order),
        status_history=[StatusHistoryResponse.model_validate(entry) for entry in history]
    )


@router.patch("/{order_id}/status", response_model=OrderEnvelope)
def update_order_status(
    order_id: int,
    status_update: OrderStatusUpdate,
    background_tasks: BackgroundTasks,
    order_service: OrderService = Depends(get_order_service),
    notifier: NotificationClient = Depends(get_notification_client)
):
    """
    Update order status
    
    Any status except pending may be set:
    accepted, processing, washing, drying, folding, ironing,
    packaging, ready, completed, cancelled
    """
    logger.info(f"Updating order {order_id} status to {status_update.status}")
    
    updated_order = order_service.update_status(order_id, status_update.status, status_update.notes)
    background_tasks.add_task(
        notifier.notify_status_change, updated_order.id, updated_order.user_id, updated_order.status
    )
    
    return OrderEnvelope(message="Order status updated successfully", order=OrderResponse.model_validate(updated_order))


@router.delete("/{order_id}", response_model=OrderEnvelope)
def cancel_order(
    order_id: int,
    background_tasks: BackgroundTasks,
    cancel: Optional[OrderCancel] = None,
    order_service: OrderService = Depends(get_order_service),
    notifier: NotificationClient = Depends(get_notification_client)
):
    """
    Cancel an order
    
    Completed and already cancelled orders cannot be cancelled.
    """
    logger.info(f"Cancelling order {order_id}")
    
    reason = cancel.reason if cancel else None
    cancelled_order = order_service.cancel_order(order_id, reason)
    background_tasks.add_task(
        notifier.notify_status_change, cancelled_order.id, cancelled_order.user_id, cancelled_order.status
    )
    
    return OrderEnvelope(message="Order cancelled successfully", order=OrderResponse.model_validate(cancelled_order))


@catalog_router.get("", response_model=ServicePackageListResponse)
def list_service_packages():
    """List the laundry packages on offer"""
    packages = catalog.list_packages()
    return ServicePackageListResponse(packages=packages, total=len(packages))


@catalog_router.get("/{key}", response_model=ServicePackageResponse)
def get_service_package(key: str):
    """Get one package by its catalog key"""
    package = catalog.get_package(key)
    if package is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Service package {key} not found"
        )
    return ServicePackageResponse(package=package)
