"""
Order database models
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, Enum as SQLEnum, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from laundry_service.db.database import Base
import enum


class OrderStatus(str, enum.Enum):
    """Order status enum"""
    PENDING = "pending"
    ACCEPTED = "accepted"
    PROCESSING = "processing"
    WASHING = "washing"
    DRYING = "drying"
    FOLDING = "folding"
    IRONING = "ironing"
    PACKAGING = "packaging"
    READY = "ready"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DeliveryOption(str, enum.Enum):
    """How the laundry travels between customer and shop"""
    PICKUP = "pickup"
    EXPRESS = "express"
    NONE = "none"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


def order_status_type():
    return SQLEnum(OrderStatus, name="order_status", values_callable=_enum_values)


class Order(Base):
    """Order model"""
    __tablename__ = "orders"
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    
    # Service package, as chosen from the catalog by the client
    service_key = Column(String(50), nullable=False)
    service_title = Column(String(255), nullable=False)
    
    delivery_option = Column(
        SQLEnum(DeliveryOption, name="delivery_option", values_callable=_enum_values),
        nullable=False
    )
    delivery_fee = Column(Integer, nullable=False, default=0)
    total_amount = Column(Integer, nullable=False)
    address = Column(Text, nullable=True)
    
    status = Column(order_status_type(), default=OrderStatus.PENDING, nullable=False, index=True)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    # Relationship
    status_history = relationship(
        "OrderStatusHistory",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True
    )
    
    def __repr__(self):
        return f"<Order(id={self.id}, status={self.status}, total={self.total_amount})>"


class OrderStatusHistory(Base):
    """Append-only audit entry, one per status an order enters"""
    __tablename__ = "order_status_history"
    
    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(order_status_type(), nullable=False)
    notes = Column(Text, nullable=True)
    changed_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    
    # Relationship
    order = relationship("Order", back_populates="status_history")
    
    def __repr__(self):
        return f"<OrderStatusHistory(order_id={self.order_id}, status={self.status})>"
