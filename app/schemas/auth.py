"""Authentication schemas"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from app.models.common import AddressValue
from app.models.user import UserRole


class RegisterRequest(BaseModel):
    """Request schema for user registration.

    Fields are optional here so the handler can report the first missing
    one with a field-specific message.
    """
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[AddressValue] = None
    answer: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "John Doe",
                "email": "user@example.com",
                "password": "secret123",
                "phone": "1234567890",
                "address": "123 Main St",
                "answer": "football"
            }
        }


class LoginRequest(BaseModel):
    """Request schema for login"""
    email: Optional[str] = None
    password: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "email": "user@example.com",
                "password": "secret123"
            }
        }


class ForgotPasswordRequest(BaseModel):
    """Request schema for resetting a password with the security answer"""
    email: Optional[str] = None
    answer: Optional[str] = None
    new_password: Optional[str] = Field(None, alias="newPassword")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "email": "user@example.com",
                "answer": "football",
                "newPassword": "newsecret123"
            }
        }


class UpdateProfileRequest(BaseModel):
    """Request schema for updating user profile"""
    name: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[AddressValue] = None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "John Doe",
                "phone": "+1234567890"
            }
        }


class UserResponse(BaseModel):
    """Public view of a user"""
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[AddressValue] = None
    role: UserRole
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RegisterResponse(BaseModel):
    """Response schema for registration"""
    success: bool = True
    message: str
    user: UserResponse


class TokenResponse(BaseModel):
    """JWT token response"""
    success: bool = True
    message: str
    user: UserResponse
    token: str


class ProfileResponse(BaseModel):
    """Response schema for profile updates"""
    success: bool = True
    message: str
    updatedUser: UserResponse
