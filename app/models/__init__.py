"""MongoDB models using Pydantic"""

from app.models.common import AddressValue
from app.models.user import User, UserRole, PRIVATE_USER_FIELDS
from app.models.product import Product, ProductPhoto, Category
from app.models.order import Order, OrderStatus, ORDER_STATUS_TRANSITIONS, can_transition

__all__ = [
    "AddressValue",
    "User",
    "UserRole",
    "PRIVATE_USER_FIELDS",
    "Product",
    "ProductPhoto",
    "Category",
    "Order",
    "OrderStatus",
    "ORDER_STATUS_TRANSITIONS",
    "can_transition",
]
