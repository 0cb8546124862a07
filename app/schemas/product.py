"""Product and category schemas"""

from pydantic import BaseModel, Field
from typing import Optional, List, Union
from datetime import datetime


class CategoryCreate(BaseModel):
    """Schema for creating or renaming a category"""
    name: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Electronics"
            }
        }


class CategoryResponse(BaseModel):
    """Schema for category response"""
    id: str
    name: str
    slug: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        json_schema_extra = {
            "example": {
                "id": "507f1f77bcf86cd799439011",
                "name": "Electronics",
                "slug": "electronics",
                "created_at": "2024-01-01T00:00:00",
                "updated_at": "2024-01-01T00:00:00"
            }
        }


class CategoryResult(BaseModel):
    """Single category envelope"""
    success: bool = True
    message: str
    category: CategoryResponse


class CategoryListResult(BaseModel):
    """Category list envelope"""
    success: bool = True
    message: str
    category: List[CategoryResponse]


class ProductResponse(BaseModel):
    """Schema for product response (photo bytes are served separately)"""
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    price: float
    category: Optional[Union[CategoryResponse, str]] = None
    quantity: int
    shipping: Optional[bool] = None
    has_photo: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        json_schema_extra = {
            "example": {
                "id": "507f1f77bcf86cd799439011",
                "name": "Laptop",
                "slug": "Laptop",
                "description": "A powerful laptop",
                "price": 1499.99,
                "category": {
                    "id": "507f191e810c19729de860ea",
                    "name": "Electronics",
                    "slug": "electronics"
                },
                "quantity": 30,
                "shipping": True,
                "has_photo": True,
                "created_at": "2024-01-01T00:00:00",
                "updated_at": "2024-01-01T00:00:00"
            }
        }


class ProductFilters(BaseModel):
    """Filter body: category ids and a [min, max] price range"""
    checked: List[str] = []
    radio: List[float] = Field(default_factory=list, max_length=2)

    class Config:
        json_schema_extra = {
            "example": {
                "checked": ["507f1f77bcf86cd799439011"],
                "radio": [0, 99.99]
            }
        }


class ProductResult(BaseModel):
    """Single product envelope"""
    success: bool = True
    message: Optional[str] = None
    product: ProductResponse


class ProductListResult(BaseModel):
    """Product list envelope"""
    success: bool = True
    message: Optional[str] = None
    countTotal: Optional[int] = None
    products: List[ProductResponse]


class ProductCountResult(BaseModel):
    success: bool = True
    total: int


class ProductPageResult(BaseModel):
    """One page of products with pagination metadata"""
    success: bool = True
    products: List[ProductResponse]
    total: int
    page: int
    limit: int
    pages: int


class ProductCategoryResult(BaseModel):
    """Products belonging to one category"""
    success: bool = True
    category: CategoryResponse
    products: List[ProductResponse]
