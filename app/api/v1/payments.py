"""Payments endpoints using Stripe"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId
from pymongo.errors import PyMongoError
import stripe
import logging

from app.database import get_database
from app.api.deps import get_current_user
from app.core.stripe_client import create_client_token, charge_payment_method, summarize_payment
from app.models.order import Order
from app.schemas.order import PaymentRequest, PaymentResponse, ClientTokenResponse
from app.utils.serializers import load_by_ids
from app.utils.validators import validate_object_id

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/payment/token", response_model=ClientTokenResponse)
async def get_client_token():
    """
    Issue a client secret the storefront uses to collect card details.
    """
    try:
        client_secret = await create_client_token()
    except stripe.StripeError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Payment provider unavailable"
        )

    return ClientTokenResponse(clientToken=client_secret)


@router.post("/payment", response_model=PaymentResponse)
async def pay_for_cart(
    request: PaymentRequest,
    current_user: dict = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Charge the buyer for a cart and record the order.

    The amount is computed from stored product prices; prices sent by the
    client are ignored.
    """
    if not request.nonce or not request.cart:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"ok": False, "error": "Invalid payment data: missing nonce or cart items"}
        )

    product_ids = [item.id for item in request.cart]
    for product_id in product_ids:
        if not validate_object_id(product_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid product ID"
            )

    products = await load_by_ids(db.products, product_ids, {"price": 1, "name": 1})

    total = 0.0
    for product_id in product_ids:
        product = products.get(product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Product {product_id} not found"
            )
        total += product.get("price", 0.0)

    try:
        payment_intent = await charge_payment_method(
            amount=total,
            payment_method=request.nonce,
            customer_email=current_user.get("email"),
            metadata={"buyer": current_user["_id"]}
        )
    except stripe.CardError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"ok": False, "error": e.user_message or str(e), "declined": True}
        )
    except stripe.StripeError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Payment provider error"
        )

    if payment_intent.status != "succeeded":
        raise HTTPException(
            status_code=status.HTTP_402_PAYMENT_REQUIRED,
            detail=f"Payment not completed (status: {payment_intent.status})"
        )

    order = Order(
        products=product_ids,
        payment=summarize_payment(payment_intent),
        buyer=current_user["_id"],
    )
    order_doc = order.model_dump(exclude={"id"})
    order_doc["products"] = [ObjectId(pid) for pid in product_ids]
    order_doc["buyer"] = ObjectId(current_user["_id"])
    order_doc["status"] = order.status.value

    try:
        result = await db.orders.insert_one(order_doc)
    except PyMongoError:
        logger.exception(f"Payment {payment_intent.id} captured but order could not be saved")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "Payment was captured but the order could not be saved",
                "paymentId": payment_intent.id,
            }
        )

    logger.info(f"Order {result.inserted_id} paid by user {current_user['_id']} ({total:.2f})")

    return PaymentResponse(ok=True, orderId=str(result.inserted_id))
