"""Common response schemas"""

from pydantic import BaseModel
from typing import Optional, Any, List


class SuccessResponse(BaseModel):
    """Standard success response"""
    success: bool = True
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    """Standard error response"""
    success: bool = False
    message: str
    errors: Optional[List[Any]] = None


class AuthCheckResponse(BaseModel):
    """Response used by client route guards"""
    ok: bool = True
