"""User models"""

from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Optional
from enum import IntEnum

from app.models.common import AddressValue


class UserRole(IntEnum):
    """User role enumeration"""
    USER = 0
    ADMIN = 1


class User(BaseModel):
    """User model for authentication and authorization"""
    id: Optional[str] = Field(None, alias="_id")
    name: str
    email: EmailStr
    password: str
    phone: str
    address: AddressValue
    answer: str
    role: UserRole = UserRole.USER
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "name": "John Doe",
                "email": "user@example.com",
                "phone": "1234567890",
                "address": "123 Main St",
                "role": 0
            }
        }


# Fields that never leave the database
PRIVATE_USER_FIELDS = ("password", "answer")
