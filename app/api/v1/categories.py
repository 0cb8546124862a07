"""Category endpoints"""

from fastapi import APIRouter, Depends, HTTPException, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from datetime import datetime
from bson import ObjectId
from slugify import slugify
import logging

from app.database import get_database
from app.api.deps import require_admin
from app.models.product import Category
from app.schemas.product import CategoryCreate, CategoryResult, CategoryListResult
from app.schemas.common import SuccessResponse
from app.utils.serializers import category_to_response
from app.utils.validators import validate_object_id, require_fields

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_category_or_404(db: AsyncIOMotorDatabase, category_id: str) -> dict:
    if not validate_object_id(category_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid category ID"
        )

    category = await db.categories.find_one({"_id": ObjectId(category_id)})
    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found"
        )
    return category


@router.post("/create-category", response_model=CategoryResult, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    current_user: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Create a new category (Admin only).
    """
    require_fields(category_data.model_dump(), [("name", "Name")])
    name = category_data.name.strip()

    slug = slugify(name)

    existing = await db.categories.find_one({"$or": [{"name": name}, {"slug": slug}]})
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Category already exists"
        )

    category = Category(name=name, slug=slug)
    result = await db.categories.insert_one(category.model_dump(exclude={"id"}))
    logger.info(f"Created category {result.inserted_id} ({name})")

    created_category = await db.categories.find_one({"_id": result.inserted_id})

    return CategoryResult(
        success=True,
        message="New category created",
        category=category_to_response(created_category)
    )


@router.put("/update-category/{category_id}", response_model=CategoryResult)
async def update_category(
    category_id: str,
    category_data: CategoryCreate,
    current_user: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Rename a category and regenerate its slug (Admin only).
    """
    require_fields(category_data.model_dump(), [("name", "Name")])
    name = category_data.name.strip()

    await _get_category_or_404(db, category_id)

    slug = slugify(name)

    # Check if new name conflicts with another category
    existing = await db.categories.find_one({
        "$or": [{"name": name}, {"slug": slug}],
        "_id": {"$ne": ObjectId(category_id)}
    })
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Category already exists"
        )

    await db.categories.update_one(
        {"_id": ObjectId(category_id)},
        {"$set": {"name": name, "slug": slug, "updated_at": datetime.utcnow()}}
    )

    updated_category = await db.categories.find_one({"_id": ObjectId(category_id)})

    return CategoryResult(
        success=True,
        message="Category updated successfully",
        category=category_to_response(updated_category)
    )


@router.get("/get-category", response_model=CategoryListResult)
async def list_categories(
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    List all categories.
    Public endpoint - no authentication required.
    """
    cursor = db.categories.find({}).sort("name", 1)
    categories = await cursor.to_list(length=None)

    return CategoryListResult(
        success=True,
        message="All categories list",
        category=[category_to_response(cat) for cat in categories]
    )


@router.get("/single-category/{slug}", response_model=CategoryResult)
async def get_category(
    slug: str,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Get a specific category by slug.
    Public endpoint - no authentication required.
    """
    category = await db.categories.find_one({"slug": slug})

    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found"
        )

    return CategoryResult(
        success=True,
        message="Get single category successfully",
        category=category_to_response(category)
    )


@router.delete("/delete-category/{category_id}", response_model=SuccessResponse)
async def delete_category(
    category_id: str,
    current_user: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Delete a category (Admin only).
    """
    await _get_category_or_404(db, category_id)

    await db.categories.delete_one({"_id": ObjectId(category_id)})
    logger.info(f"Deleted category {category_id}")

    return SuccessResponse(
        success=True,
        message="Category deleted successfully"
    )
