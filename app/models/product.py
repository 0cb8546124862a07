"""Product and category models"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class ProductPhoto(BaseModel):
    """Binary product photo stored inline on the product document"""
    data: bytes
    content_type: str = "image/jpeg"


class Product(BaseModel):
    """Product model"""
    id: Optional[str] = Field(None, alias="_id")
    name: str
    slug: str
    description: str
    price: float = Field(ge=0)
    category: str
    quantity: int = Field(ge=0)
    shipping: Optional[bool] = None
    photo: Optional[ProductPhoto] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "name": "Laptop",
                "slug": "laptop",
                "description": "A powerful laptop",
                "price": 1499.99,
                "category": "507f1f77bcf86cd799439011",
                "quantity": 30,
                "shipping": True
            }
        }

    @property
    def in_stock(self) -> bool:
        """Whether at least one unit is available"""
        return self.quantity > 0


class Category(BaseModel):
    """Product category model"""
    id: Optional[str] = Field(None, alias="_id")
    name: str
    slug: str
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "name": "Electronics",
                "slug": "electronics"
            }
        }
