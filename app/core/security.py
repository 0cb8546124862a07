"""Security utilities for passwords and JWT"""

from datetime import datetime, timedelta
from typing import Optional
import logging

import bcrypt
from jose import jwt, JWTError
from app.config import settings

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes and newer releases reject longer input
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """
    Hash a plain text password with bcrypt

    Args:
        password: Plain text password

    Returns:
        bcrypt hash as a string
    """
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def compare_password(password: str, hashed: str) -> bool:
    """
    Check a plain text password against a stored bcrypt hash

    Returns:
        True if the password matches, False otherwise (including malformed hashes)
    """
    if not password or not hashed:
        return False
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


def create_access_token(data: dict, expires_delta: timedelta = None) -> str:
    """
    Create a JWT access token

    Args:
        data: Dictionary containing the payload data (should include 'sub' for user ID)
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.jwt_expire_minutes)

    to_encode.update({"exp": expire, "iat": datetime.utcnow()})

    encoded_jwt = jwt.encode(
        to_encode,
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm
    )

    return encoded_jwt


def verify_token(token: str) -> Optional[dict]:
    """
    Verify and decode a JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dictionary or None if invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm]
        )
        return payload
    except JWTError:
        return None


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the JWT out of an Authorization header value.

    Both "Bearer <token>" and a bare "<token>" are accepted.
    """
    if not authorization:
        return None

    value = authorization.strip()
    scheme, _, credentials = value.partition(" ")
    if scheme.lower() == "bearer":
        value = credentials.strip()

    return value or None
