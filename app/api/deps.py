"""FastAPI dependencies for authentication and database access"""

from fastapi import Depends, HTTPException, status, Header
from motor.motor_asyncio import AsyncIOMotorDatabase
from app.database import get_database
from app.core.security import verify_token, extract_token
from app.models.user import UserRole, PRIVATE_USER_FIELDS
from app.utils.validators import validate_object_id
from bson import ObjectId
from typing import Optional
import logging

logger = logging.getLogger(__name__)


async def _load_user(db: AsyncIOMotorDatabase, user_id: str) -> Optional[dict]:
    """Fetch a user by id without its private fields"""
    if not validate_object_id(user_id):
        return None

    user = await db.users.find_one(
        {"_id": ObjectId(user_id)},
        {field: 0 for field in PRIVATE_USER_FIELDS}
    )
    if user:
        # Convert ObjectId to string for JSON serialization
        user["_id"] = str(user["_id"])
    return user


async def get_current_user(
    authorization: Optional[str] = Header(None),
    db: AsyncIOMotorDatabase = Depends(get_database)
) -> dict:
    """
    Dependency to get current authenticated user from JWT token

    Args:
        authorization: Authorization header, "Bearer <token>" or the bare token
        db: Database instance

    Returns:
        User dictionary from database

    Raises:
        HTTPException: If authentication fails
    """
    token = extract_token(authorization)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_token(token)

    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    user = await _load_user(db, user_id)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    return user


async def require_admin(
    current_user: dict = Depends(get_current_user)
) -> dict:
    """
    Dependency to require the admin role

    Args:
        current_user: Current user from get_current_user

    Returns:
        Admin user dictionary

    Raises:
        HTTPException: If user doesn't have required permissions
    """
    if current_user.get("role") != UserRole.ADMIN:
        logger.warning(f"Non-admin user {current_user['_id']} denied admin access")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized access",
        )

    return current_user

