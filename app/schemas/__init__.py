"""Pydantic schemas for request/response validation"""

from app.schemas.common import SuccessResponse, ErrorResponse, AuthCheckResponse
from app.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    ForgotPasswordRequest,
    UpdateProfileRequest,
    UserResponse,
    RegisterResponse,
    TokenResponse,
    ProfileResponse,
)
from app.schemas.product import (
    CategoryCreate,
    CategoryResponse,
    CategoryResult,
    CategoryListResult,
    ProductResponse,
    ProductFilters,
    ProductResult,
    ProductListResult,
    ProductCountResult,
    ProductPageResult,
    ProductCategoryResult,
)
from app.schemas.order import (
    BuyerSummary,
    OrderResponse,
    OrderStatusUpdate,
    PaymentCartItem,
    PaymentRequest,
    PaymentResponse,
    ClientTokenResponse,
)

__all__ = [
    "SuccessResponse",
    "ErrorResponse",
    "AuthCheckResponse",
    "RegisterRequest",
    "LoginRequest",
    "ForgotPasswordRequest",
    "UpdateProfileRequest",
    "UserResponse",
    "RegisterResponse",
    "TokenResponse",
    "ProfileResponse",
    "CategoryCreate",
    "CategoryResponse",
    "CategoryResult",
    "CategoryListResult",
    "ProductResponse",
    "ProductFilters",
    "ProductResult",
    "ProductListResult",
    "ProductCountResult",
    "ProductPageResult",
    "ProductCategoryResult",
    "BuyerSummary",
    "OrderResponse",
    "OrderStatusUpdate",
    "PaymentCartItem",
    "PaymentRequest",
    "PaymentResponse",
    "ClientTokenResponse",
]
