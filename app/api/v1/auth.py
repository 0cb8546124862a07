"""Authentication, profile and order management endpoints"""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError
from motor.motor_asyncio import AsyncIOMotorDatabase
from datetime import datetime
from bson import ObjectId
from typing import List
import logging

from app.config import settings
from app.database import get_database
from app.api.deps import get_current_user, require_admin
from app.core.security import create_access_token, hash_password, compare_password, MAX_PASSWORD_BYTES
from app.models.order import OrderStatus, can_transition
from app.models.user import User, PRIVATE_USER_FIELDS
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
from app.schemas.common import SuccessResponse, AuthCheckResponse
from app.schemas.order import OrderResponse, OrderStatusUpdate
from app.utils.serializers import user_to_response, populate_orders
from app.utils.validators import require_fields, validate_object_id

logger = logging.getLogger(__name__)

router = APIRouter()

PRIVATE_PROJECTION = {field: 0 for field in PRIVATE_USER_FIELDS}


def _check_password_length(password: str):
    if len(password) < settings.min_password_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password is required and {settings.min_password_length} characters long"
        )
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at most {MAX_PASSWORD_BYTES} bytes long"
        )


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Register a new user account.
    """
    require_fields(
        request.model_dump(),
        [
            ("name", "Name"),
            ("email", "Email"),
            ("password", "Password"),
            ("phone", "Phone"),
            ("address", "Address"),
            ("answer", "Answer"),
        ]
    )
    _check_password_length(request.password)

    email = request.email.strip().lower()

    existing_user = await db.users.find_one({"email": email})
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Already registered, please login"
        )

    try:
        user = User(
            name=request.name.strip(),
            email=email,
            password=hash_password(request.password),
            phone=request.phone.strip(),
            address=request.address,
            answer=request.answer.strip(),
        )
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid email address"
        )
    user_doc = user.model_dump(exclude={"id"})
    user_doc["role"] = int(user.role)

    result = await db.users.insert_one(user_doc)
    logger.info(f"Registered user {result.inserted_id}")

    created_user = await db.users.find_one({"_id": result.inserted_id}, PRIVATE_PROJECTION)

    return RegisterResponse(
        success=True,
        message="User registered successfully",
        user=user_to_response(created_user)
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Verify email and password and return a JWT access token
    """
    if not request.email or not request.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid email or password"
        )

    user = await db.users.find_one({"email": request.email.strip().lower()})

    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Email is not registered"
        )

    if not compare_password(request.password, user.get("password")):
        logger.warning(f"Failed login for user {user['_id']}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid password"
        )

    access_token = create_access_token(data={"sub": str(user["_id"])})
    logger.info(f"User {user['_id']} logged in")

    return TokenResponse(
        success=True,
        message="Login successful",
        user=user_to_response(user),
        token=access_token
    )


@router.post("/forgot-password", response_model=SuccessResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Reset a password using the security answer given at registration
    """
    require_fields(
        request.model_dump(),
        [
            ("email", "Email"),
            ("answer", "Answer"),
            ("new_password", "New password"),
        ]
    )
    _check_password_length(request.new_password)

    user = await db.users.find_one({
        "email": request.email.strip().lower(),
        "answer": request.answer.strip(),
    })

    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Wrong email or answer"
        )

    await db.users.update_one(
        {"_id": user["_id"]},
        {"$set": {"password": hash_password(request.new_password), "updated_at": datetime.utcnow()}}
    )
    logger.info(f"Password reset for user {user['_id']}")

    return SuccessResponse(
        success=True,
        message="Password reset successfully"
    )


@router.get("/test")
async def protected_test(current_user: dict = Depends(require_admin)):
    """
    Admin-only route used to check the admin gate end to end
    """
    return "Protected Routes"


@router.get("/user-auth", response_model=AuthCheckResponse)
async def user_auth(current_user: dict = Depends(get_current_user)):
    """
    Route guard check for signed-in users
    """
    return AuthCheckResponse(ok=True)


@router.get("/admin-auth", response_model=AuthCheckResponse)
async def admin_auth(current_user: dict = Depends(require_admin)):
    """
    Route guard check for admins
    """
    return AuthCheckResponse(ok=True)


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    profile_update: UpdateProfileRequest,
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Update current user's profile.
    Fields that are not supplied keep their stored value.
    """
    update_data = {}

    if profile_update.password:
        _check_password_length(profile_update.password)
        update_data["password"] = hash_password(profile_update.password)

    if profile_update.name:
        update_data["name"] = profile_update.name.strip()

    if profile_update.phone:
        update_data["phone"] = profile_update.phone.strip()

    if profile_update.address:
        update_data["address"] = profile_update.address

    update_data["updated_at"] = datetime.utcnow()

    user_id = ObjectId(current_user["_id"])
    await db.users.update_one({"_id": user_id}, {"$set": update_data})

    updated_user = await db.users.find_one({"_id": user_id}, PRIVATE_PROJECTION)

    return ProfileResponse(
        success=True,
        message="Profile updated successfully",
        updatedUser=user_to_response(updated_user)
    )


@router.get("/orders", response_model=List[OrderResponse])
async def get_orders(
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    List current user's orders, newest first.
    """
    cursor = db.orders.find({"buyer": ObjectId(current_user["_id"])}).sort("created_at", -1)
    orders = await cursor.to_list(length=None)

    return await populate_orders(db, orders)


@router.get("/all-orders", response_model=List[OrderResponse])
async def get_all_orders(
    current_user: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    List every order, newest first (Admin only).
    """
    cursor = db.orders.find({}).sort("created_at", -1)
    orders = await cursor.to_list(length=None)

    return await populate_orders(db, orders)


@router.put("/order-status/{order_id}", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    status_update: OrderStatusUpdate,
    current_user: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Move an order to a new status (Admin only).
    Only the transitions allowed by the order workflow are accepted.
    """
    if not validate_object_id(order_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid order ID"
        )

    order = await db.orders.find_one({"_id": ObjectId(order_id)})

    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Order not found"
        )

    current_status = OrderStatus(order.get("status", OrderStatus.NOT_PROCESSED))
    new_status = status_update.status

    if not can_transition(current_status, new_status):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Cannot change order status from '{current_status.value}' to '{new_status.value}'"
        )

    await db.orders.update_one(
        {"_id": ObjectId(order_id)},
        {"$set": {"status": new_status.value, "updated_at": datetime.utcnow()}}
    )
    logger.info(f"Order {order_id} status {current_status.value} -> {new_status.value}")

    updated_order = await db.orders.find_one({"_id": ObjectId(order_id)})
    populated = await populate_orders(db, [updated_order])

    return populated[0]


@router.get("/all-users", response_model=List[UserResponse])
async def get_all_users(
    current_user: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    List all users, newest first (Admin only).
    """
    cursor = db.users.find({}, PRIVATE_PROJECTION).sort("created_at", -1)
    users = await cursor.to_list(length=None)

    return [user_to_response(user) for user in users]
