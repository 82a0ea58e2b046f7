"""
Pydantic schemas for the Laundry Service

Request bodies use the camelCase keys the mobile client sends; order and
history responses keep the snake_case column names the client reads.
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from datetime import datetime
from laundry_service.models.order import OrderStatus, DeliveryOption


class OrderCreate(BaseModel):
    """
    Schema for placing an order
    
    Required fields are checked by the order service so that a missing
    field yields the same 400 envelope as any other validation failure.
    """
    model_config = ConfigDict(populate_by_name=True)
    
    user_id: Optional[int] = Field(None, alias="userId")
    service_key: Optional[str] = Field(None, alias="servicePackageKey", max_length=50)
    service_title: Optional[str] = Field(None, alias="serviceTitle", max_length=255)
    delivery_option: Optional[str] = Field(None, alias="deliveryOption")
    # Sent by the client but recomputed server-side
    delivery_fee: Optional[int] = Field(None, alias="deliveryFee")
    address: Optional[str] = None


class OrderStatusUpdate(BaseModel):
    """Schema for moving an order to a new status"""
    status: Optional[str] = None
    notes: Optional[str] = None


class OrderCancel(BaseModel):
    """Schema for cancelling an order"""
    reason: Optional[str] = None


class OrderResponse(BaseModel):
    """Schema for order response, keyed like the orders table row"""
    id: int
    user_id: int
    service_key: str
    service_title: str
    delivery_option: DeliveryOption
    delivery_fee: int
    total_amount: int
    address: Optional[str] = None
    status: OrderStatus
    created_at: datetime
    updated_at: Optional[datetime] = None
    
    model_config = ConfigDict(from_attributes=True)


class StatusHistoryResponse(BaseModel):
    """Schema for one status history entry"""
    id: int
    order_id: int
    status: OrderStatus
    notes: Optional[str] = None
    changed_at: datetime
    
    model_config = ConfigDict(from_attributes=True)


class OrderEnvelope(BaseModel):
    """Envelope for endpoints returning a single order"""
    success: bool = True
    message: str
    order: OrderResponse


class OrderListResponse(BaseModel):
    """Schema for a user's orders"""
    success: bool = True
    orders: List[OrderResponse]
    total: int


class OrderDetailResponse(BaseModel):
    """Schema for an order with its status history"""
    success: bool = True
    order: OrderResponse
    status_history: List[StatusHistoryResponse] = Field(..., alias="statusHistory")
    
    model_config = ConfigDict(populate_by_name=True)


class ServicePackage(BaseModel):
    """One entry of the service-package catalog"""
    key: str
    title: str
    weight: str
    price: str


class ServicePackageListResponse(BaseModel):
    success: bool = True
    packages: List[ServicePackage]
    total: int


class ServicePackageResponse(BaseModel):
    success: bool = True
    package: ServicePackage


class ErrorResponse(BaseModel):
    """Error envelope"""
    success: bool = False
    error: str
