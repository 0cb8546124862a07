"""Core utilities for the application"""

from app.core.security import (
    create_access_token,
    verify_token,
    extract_token,
    hash_password,
    compare_password,
)
from app.core.stripe_client import create_client_token, charge_payment_method

__all__ = [
    "create_access_token",
    "verify_token",
    "extract_token",
    "hash_password",
    "compare_password",
    "create_client_token",
    "charge_payment_method",
]
