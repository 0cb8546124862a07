"""Application configuration using Pydantic Settings"""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # App
    app_name: str = "Storefront API"
    debug: bool = False
    cors_origins: List[str] = ["*"]

    # Database
    mongodb_url: str
    mongodb_db_name: str = "storefront"

    # Security
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24 * 7  # 7 days
    bcrypt_rounds: int = 10
    min_password_length: int = 6

    # Catalog
    max_photo_size: int = 1_000_000  # bytes
    products_per_page: int = 6
    latest_products_limit: int = 12
    related_products_limit: int = 3

    # Stripe
    stripe_secret_key: str
    stripe_currency: str = "usd"

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
