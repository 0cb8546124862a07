"""Stripe integration for payment processing"""

import stripe
from app.config import settings
from typing import Dict, Optional
import logging

logger = logging.getLogger(__name__)

# Initialize Stripe
stripe.api_key = settings.stripe_secret_key


def to_minor_units(amount: float) -> int:
    """Convert a decimal amount (e.g. 10.5) to cents (1050)"""
    return int(round(amount * 100))


async def create_client_token(metadata: Optional[Dict] = None) -> str:
    """
    Create a SetupIntent so the client can collect a payment method

    Returns:
        The SetupIntent client secret
    """
    try:
        setup_intent = stripe.SetupIntent.create(
            payment_method_types=["card"],
            metadata=metadata or {},
        )
        logger.info(f"Created setup intent: {setup_intent.id}")
        return setup_intent.client_secret
    except stripe.StripeError as e:
        logger.error(f"Stripe error creating setup intent: {str(e)}")
        raise


async def charge_payment_method(
    amount: float,
    payment_method: str,
    customer_email: Optional[str] = None,
    metadata: Optional[Dict] = None
) -> stripe.PaymentIntent:
    """
    Create and immediately confirm a PaymentIntent for a payment method

    Args:
        amount: Amount in major units (e.g., 10.00 for $10.00)
        payment_method: Stripe PaymentMethod id supplied by the client
        customer_email: Optional customer email for the receipt
        metadata: Optional metadata to attach to the payment intent

    Returns:
        Stripe PaymentIntent object

    Raises:
        stripe.CardError: If the card was declined
        stripe.StripeError: For any other provider failure
    """
    try:
        payment_intent_data = {
            "amount": to_minor_units(amount),
            "currency": settings.stripe_currency,
            "payment_method": payment_method,
            "payment_method_types": ["card"],
            "confirm": True,
            "metadata": metadata or {},
        }

        if customer_email:
            payment_intent_data["receipt_email"] = customer_email

        payment_intent = stripe.PaymentIntent.create(**payment_intent_data)
        logger.info(f"Created payment intent: {payment_intent.id} ({payment_intent.status})")
        return payment_intent
    except stripe.CardError as e:
        logger.warning(f"Card declined: {e.user_message or str(e)}")
        raise
    except stripe.StripeError as e:
        logger.error(f"Stripe error creating payment intent: {str(e)}")
        raise


def summarize_payment(payment_intent) -> Dict:
    """Reduce a PaymentIntent to the fields stored on an order"""
    return {
        "success": payment_intent.status == "succeeded",
        "provider": "stripe",
        "transaction_id": payment_intent.id,
        "status": payment_intent.status,
        "amount": payment_intent.amount / 100,
        "currency": payment_intent.currency,
    }
