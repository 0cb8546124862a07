"""
MongoDB document serialization utilities
"""
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.schemas.auth import UserResponse
from app.schemas.order import BuyerSummary, OrderResponse
from app.schemas.product import CategoryResponse, ProductResponse

# Projection that keeps photo metadata but never loads the image bytes
WITHOUT_PHOTO = {"photo.data": 0}


def _id_str(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


def user_to_response(user: Dict[str, Any]) -> UserResponse:
    """Convert a user document to its public representation"""
    return UserResponse(
        id=str(user["_id"]),
        name=user.get("name", ""),
        email=user["email"],
        phone=user.get("phone"),
        address=user.get("address"),
        role=user.get("role", 0),
        created_at=user.get("created_at"),
        updated_at=user.get("updated_at"),
    )


def category_to_response(category: Dict[str, Any]) -> CategoryResponse:
    """Convert database category document to CategoryResponse"""
    return CategoryResponse(
        id=str(category["_id"]),
        name=category["name"],
        slug=category["slug"],
        created_at=category.get("created_at"),
        updated_at=category.get("updated_at"),
    )


def product_to_response(
    product: Dict[str, Any],
    category: Optional[Dict[str, Any]] = None
) -> ProductResponse:
    """
    Convert database product document to ProductResponse

    Args:
        product: Product document (photo bytes may be projected out)
        category: Category document to embed; the raw id is used otherwise
    """
    return ProductResponse(
        id=str(product["_id"]),
        name=product["name"],
        slug=product.get("slug", ""),
        description=product.get("description"),
        price=product.get("price", 0.0),
        category=category_to_response(category) if category else _id_str(product.get("category")),
        quantity=product.get("quantity", 0),
        shipping=product.get("shipping"),
        has_photo=bool(product.get("photo")),
        created_at=product.get("created_at", datetime.utcnow()),
        updated_at=product.get("updated_at", datetime.utcnow()),
    )


async def load_by_ids(
    collection,
    ids: Iterable[Any],
    projection: Optional[Dict[str, int]] = None
) -> Dict[str, Dict[str, Any]]:
    """Fetch documents for a set of ids, keyed by string id"""
    object_ids = list({ObjectId(i) for i in ids if i is not None and ObjectId.is_valid(str(i))})
    if not object_ids:
        return {}

    cursor = collection.find({"_id": {"$in": object_ids}}, projection)
    docs = await cursor.to_list(length=len(object_ids))
    return {str(doc["_id"]): doc for doc in docs}


async def populate_products(
    db: AsyncIOMotorDatabase,
    products: List[Dict[str, Any]]
) -> List[ProductResponse]:
    """Convert products to responses with their category embedded"""
    categories = await load_by_ids(db.categories, (p.get("category") for p in products))
    return [
        product_to_response(p, categories.get(_id_str(p.get("category"))))
        for p in products
    ]


async def populate_orders(
    db: AsyncIOMotorDatabase,
    orders: List[Dict[str, Any]]
) -> List[OrderResponse]:
    """
    Convert orders to responses with products and buyer names filled in.

    Products that no longer exist are left out of the order's product list.
    """
    product_ids = [pid for order in orders for pid in order.get("products", [])]
    products = await load_by_ids(db.products, product_ids, WITHOUT_PHOTO)
    buyers = await load_by_ids(db.users, (o.get("buyer") for o in orders), {"name": 1})

    responses = []
    for order in orders:
        buyer = buyers.get(_id_str(order.get("buyer")))
        responses.append(
            OrderResponse(
                id=str(order["_id"]),
                products=[
                    product_to_response(products[str(pid)])
                    for pid in order.get("products", [])
                    if str(pid) in products
                ],
                payment=order.get("payment", {}),
                buyer=BuyerSummary(id=str(buyer["_id"]), name=buyer.get("name")) if buyer else None,
                status=order.get("status", "Not Process"),
                created_at=order.get("created_at"),
                updated_at=order.get("updated_at"),
            )
        )
    return responses
