"""Order and payment schemas"""

from pydantic import BaseModel, Field
from typing import Any, Dict, Optional, List
from datetime import datetime
from app.models.order import OrderStatus
from app.schemas.product import ProductResponse


class BuyerSummary(BaseModel):
    """Buyer as shown on an order"""
    id: str
    name: Optional[str] = None


class OrderResponse(BaseModel):
    """Response schema for order"""
    id: str
    products: List[ProductResponse]
    payment: Dict[str, Any] = {}
    buyer: Optional[BuyerSummary] = None
    status: OrderStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderStatusUpdate(BaseModel):
    """Request schema for changing an order's status"""
    status: OrderStatus

    class Config:
        json_schema_extra = {
            "example": {
                "status": "Processing"
            }
        }


class PaymentCartItem(BaseModel):
    """A cart line as sent by the client; only the product id is trusted"""
    id: str = Field(alias="_id")

    class Config:
        populate_by_name = True
        extra = "ignore"


class PaymentRequest(BaseModel):
    """Request schema for paying for a cart"""
    nonce: Optional[str] = None
    cart: Optional[List[PaymentCartItem]] = None

    class Config:
        json_schema_extra = {
            "example": {
                "nonce": "pm_card_visa",
                "cart": [
                    {"_id": "507f1f77bcf86cd799439011", "name": "Laptop", "price": 1499.99}
                ]
            }
        }


class PaymentResponse(BaseModel):
    """Response schema for a successful payment"""
    ok: bool = True
    orderId: str


class ClientTokenResponse(BaseModel):
    """Response schema for the client payment token"""
    clientToken: str
