"""Products endpoints"""

from fastapi import APIRouter, Depends, HTTPException, status, Path, Form, File, UploadFile, Response
from motor.motor_asyncio import AsyncIOMotorDatabase
from datetime import datetime
from bson import ObjectId
from slugify import slugify
from typing import List, Optional
import logging
import re

from app.config import settings
from app.database import get_database
from app.api.deps import require_admin
from app.models.product import Product, ProductPhoto
from app.schemas.product import (
    ProductResponse,
    ProductFilters,
    ProductResult,
    ProductListResult,
    ProductCountResult,
    ProductPageResult,
    ProductCategoryResult,
)
from app.schemas.common import SuccessResponse
from app.utils.pagination import page_offset, page_meta
from app.utils.serializers import WITHOUT_PHOTO, category_to_response, populate_products
from app.utils.validators import validate_object_id, require_fields, parse_number, parse_bool

logger = logging.getLogger(__name__)

router = APIRouter()


def _object_id_or_400(value: str, label: str) -> ObjectId:
    if not validate_object_id(value):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {label} ID"
        )
    return ObjectId(value)


async def _read_photo(photo: Optional[UploadFile]) -> Optional[ProductPhoto]:
    """Read an uploaded photo, enforcing the size limit"""
    if photo is None or not photo.filename:
        return None

    data = await photo.read()
    if len(data) > settings.max_photo_size:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Photo should be less than {settings.max_photo_size} bytes"
        )
    if not data:
        return None

    return ProductPhoto(data=data, content_type=photo.content_type or "image/jpeg")


async def _validate_product_form(
    db: AsyncIOMotorDatabase,
    form: dict,
    exclude_id: Optional[ObjectId] = None
) -> dict:
    """
    Check a submitted product form and return the cleaned values.

    The category must exist and no other product may use the same name
    in that category.
    """
    require_fields(
        form,
        [
            ("name", "Name"),
            ("description", "Description"),
            ("price", "Price"),
            ("category", "Category"),
            ("quantity", "Quantity"),
        ]
    )

    name = form["name"].strip()
    price = parse_number(form["price"], "Price")
    quantity = parse_number(form["quantity"], "Quantity", integer=True)
    category_id = _object_id_or_400(form["category"].strip(), "category")

    category = await db.categories.find_one({"_id": category_id})
    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found"
        )

    duplicate_query = {"name": name, "category": category_id}
    if exclude_id is not None:
        duplicate_query["_id"] = {"$ne": exclude_id}

    if await db.products.find_one(duplicate_query, {"_id": 1}):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Product with this name already exists in this category"
        )

    return {
        "name": name,
        "slug": slugify(name),
        "description": form["description"].strip(),
        "price": price,
        "category": category_id,
        "quantity": quantity,
        "shipping": parse_bool(form.get("shipping")),
    }


async def _populated_one(db: AsyncIOMotorDatabase, product: dict) -> ProductResponse:
    populated = await populate_products(db, [product])
    return populated[0]


@router.post("/create-product", response_model=ProductResult, status_code=status.HTTP_201_CREATED)
async def create_product(
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    quantity: Optional[str] = Form(None),
    shipping: Optional[str] = Form(None),
    photo: Optional[UploadFile] = File(None),
    current_user: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Create a new product from a multipart form (Admin only).
    """
    fields = await _validate_product_form(
        db,
        {
            "name": name,
            "description": description,
            "price": price,
            "category": category,
            "quantity": quantity,
            "shipping": shipping,
        }
    )
    product_photo = await _read_photo(photo)

    product = Product(
        **{**fields, "category": str(fields["category"])},
        photo=product_photo
    )
    product_doc = product.model_dump(exclude={"id"}, exclude_none=True)
    product_doc["category"] = fields["category"]

    result = await db.products.insert_one(product_doc)
    logger.info(f"Created product {result.inserted_id} ({fields['name']})")

    created_product = await db.products.find_one({"_id": result.inserted_id}, WITHOUT_PHOTO)

    return ProductResult(
        success=True,
        message="Product created successfully",
        product=await _populated_one(db, created_product)
    )


@router.get("/get-product", response_model=ProductListResult)
async def list_latest_products(
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    List the most recently created products.
    Public endpoint - no authentication required.
    """
    limit = settings.latest_products_limit
    cursor = db.products.find({}, WITHOUT_PHOTO).sort("created_at", -1).limit(limit)
    products = await cursor.to_list(length=limit)

    return ProductListResult(
        success=True,
        message="All products",
        countTotal=len(products),
        products=await populate_products(db, products)
    )


@router.get("/get-product/{slug}", response_model=ProductResult)
async def get_product_by_slug(
    slug: str,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Get a single product by slug.
    Public endpoint - no authentication required.
    """
    product = await db.products.find_one({"slug": slug}, WITHOUT_PHOTO)

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )

    return ProductResult(
        success=True,
        message="Single product fetched",
        product=await _populated_one(db, product)
    )


@router.get("/single-product/{product_id}", response_model=ProductResult)
async def get_product(
    product_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Get a single product by ID.
    Public endpoint - no authentication required.
    """
    oid = _object_id_or_400(product_id, "product")
    product = await db.products.find_one({"_id": oid}, WITHOUT_PHOTO)

    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )

    return ProductResult(
        success=True,
        message="Single product fetched",
        product=await _populated_one(db, product)
    )


@router.get("/product-photo/{product_id}")
async def get_product_photo(
    product_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Serve the raw photo bytes of a product
    """
    oid = _object_id_or_400(product_id, "product")
    product = await db.products.find_one({"_id": oid}, {"photo": 1})

    photo = (product or {}).get("photo") or {}
    if not photo.get("data"):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="There does not exist a photo"
        )

    return Response(
        content=bytes(photo["data"]),
        media_type=photo.get("content_type") or "image/jpeg"
    )


@router.delete("/delete-product/{product_id}", response_model=SuccessResponse)
async def delete_product(
    product_id: str,
    current_user: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Delete a product (Admin only).
    """
    oid = _object_id_or_400(product_id, "product")

    result = await db.products.delete_one({"_id": oid})
    if result.deleted_count == 0:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )

    logger.info(f"Deleted product {product_id}")

    return SuccessResponse(
        success=True,
        message="Product deleted successfully"
    )


@router.put("/update-product/{product_id}", response_model=ProductResult)
async def update_product(
    product_id: str,
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    quantity: Optional[str] = Form(None),
    shipping: Optional[str] = Form(None),
    photo: Optional[UploadFile] = File(None),
    current_user: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Replace a product's fields from a multipart form (Admin only).
    The stored photo is kept unless a new one is uploaded.
    """
    oid = _object_id_or_400(product_id, "product")

    existing_product = await db.products.find_one({"_id": oid}, {"_id": 1})
    if not existing_product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found"
        )

    update_data = await _validate_product_form(
        db,
        {
            "name": name,
            "description": description,
            "price": price,
            "category": category,
            "quantity": quantity,
            "shipping": shipping,
        },
        exclude_id=oid
    )
    if update_data["shipping"] is None:
        # Not sent, keep the stored value
        del update_data["shipping"]

    product_photo = await _read_photo(photo)
    if product_photo:
        update_data["photo"] = product_photo.model_dump()

    update_data["updated_at"] = datetime.utcnow()

    await db.products.update_one({"_id": oid}, {"$set": update_data})
    logger.info(f"Updated product {product_id}")

    updated_product = await db.products.find_one({"_id": oid}, WITHOUT_PHOTO)

    return ProductResult(
        success=True,
        message="Product updated successfully",
        product=await _populated_one(db, updated_product)
    )


@router.post("/product-filters", response_model=ProductListResult)
async def filter_products(
    filters: ProductFilters,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Filter products by category ids and a price range.
    Empty lists apply no constraint.
    """
    query = {}

    if filters.checked:
        query["category"] = {"$in": [_object_id_or_400(cid, "category") for cid in filters.checked]}

    if filters.radio:
        price_range = {"$gte": filters.radio[0]}
        if len(filters.radio) > 1:
            price_range["$lte"] = filters.radio[1]
        query["price"] = price_range

    cursor = db.products.find(query, WITHOUT_PHOTO).sort("created_at", -1)
    products = await cursor.to_list(length=None)

    return ProductListResult(
        success=True,
        products=await populate_products(db, products)
    )


@router.get("/product-count", response_model=ProductCountResult)
async def count_products(
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Total number of products.
    """
    total = await db.products.count_documents({})

    return ProductCountResult(success=True, total=total)


@router.get("/product-list/{page}", response_model=ProductPageResult)
async def list_products_page(
    page: int = Path(..., ge=1),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    One page of products, newest first.
    Public endpoint - no authentication required.
    """
    limit = settings.products_per_page

    total = await db.products.count_documents({})
    cursor = (
        db.products.find({}, WITHOUT_PHOTO)
        .sort("created_at", -1)
        .skip(page_offset(page, limit))
        .limit(limit)
    )
    products = await cursor.to_list(length=limit)

    return ProductPageResult(
        success=True,
        products=await populate_products(db, products),
        **page_meta(total, page, limit)
    )


@router.get("/search/{keyword}", response_model=List[ProductResponse])
async def search_products(
    keyword: str,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Search products by name or description.
    Public endpoint - no authentication required.
    """
    pattern = re.escape(keyword.strip())
    query = {
        "$or": [
            {"name": {"$regex": pattern, "$options": "i"}},
            {"description": {"$regex": pattern, "$options": "i"}},
        ]
    }

    cursor = db.products.find(query, WITHOUT_PHOTO)
    products = await cursor.to_list(length=None)

    return await populate_products(db, products)


@router.get("/related-product/{product_id}/{category_id}", response_model=ProductListResult)
async def related_products(
    product_id: str,
    category_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Other products from the same category.
    """
    oid = _object_id_or_400(product_id, "product")
    cid = _object_id_or_400(category_id, "category")

    limit = settings.related_products_limit
    cursor = db.products.find(
        {"category": cid, "_id": {"$ne": oid}},
        WITHOUT_PHOTO
    ).limit(limit)
    products = await cursor.to_list(length=limit)

    return ProductListResult(
        success=True,
        products=await populate_products(db, products)
    )


@router.get("/product-category/{slug}", response_model=ProductCategoryResult)
async def products_by_category(
    slug: str,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    A category and all of its products.
    """
    category = await db.categories.find_one({"slug": slug})

    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found"
        )

    cursor = db.products.find({"category": category["_id"]}, WITHOUT_PHOTO)
    products = await cursor.to_list(length=None)

    return ProductCategoryResult(
        success=True,
        category=category_to_response(category),
        products=await populate_products(db, products)
    )
