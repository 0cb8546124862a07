"""Order model and order status workflow"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Optional
from enum import Enum


class OrderStatus(str, Enum):
    """Order status enumeration"""
    NOT_PROCESSED = "Not Process"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "deliverd"
    CANCELLED = "cancel"


# Delivered and cancelled orders are final
TERMINAL_STATUSES: FrozenSet[OrderStatus] = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})

# Admins may move an open order to any other status, including corrections
# such as Shipped back to Processing
ORDER_STATUS_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    status: (
        frozenset() if status in TERMINAL_STATUSES
        else frozenset(s for s in OrderStatus if s != status)
    )
    for status in OrderStatus
}


def can_transition(current: OrderStatus, new: OrderStatus) -> bool:
    """
    Check whether an order may move from one status to another.

    Re-applying the current status is always allowed.
    """
    current = OrderStatus(current)
    new = OrderStatus(new)
    if current == new:
        return True
    return new in ORDER_STATUS_TRANSITIONS[current]


class Order(BaseModel):
    """Order model"""
    id: Optional[str] = Field(None, alias="_id")
    products: List[str]
    payment: Dict[str, Any] = {}
    buyer: str
    status: OrderStatus = OrderStatus.NOT_PROCESSED
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "products": ["507f191e810c19729de860ea"],
                "payment": {"success": True, "transaction_id": "pi_123"},
                "buyer": "507f1f77bcf86cd799439011",
                "status": "Not Process"
            }
        }
