"""Custom validators"""

from typing import Any, Iterable, Mapping, Optional, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException, status


def validate_object_id(id_str: str) -> bool:
    """
    Validate if a string is a valid MongoDB ObjectId

    Args:
        id_str: String to validate

    Returns:
        True if valid ObjectId, False otherwise
    """
    if id_str is None:
        return False
    try:
        ObjectId(id_str)
        return True
    except (InvalidId, TypeError):
        return False


def is_blank(value: Any) -> bool:
    """True for None, empty strings/whitespace and empty containers"""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (dict, list, tuple)):
        return len(value) == 0
    return False


def require_fields(data: Mapping[str, Any], fields: Iterable[Tuple[str, str]]) -> None:
    """
    Ensure each field is present and non-blank, in order.

    Args:
        data: Submitted values
        fields: (key, label) pairs; the label is used in the error message

    Raises:
        HTTPException: 400 naming the first missing field
    """
    for key, label in fields:
        if is_blank(data.get(key)):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{label} is required"
            )


def parse_number(value: Any, label: str, integer: bool = False) -> float:
    """
    Parse a form value as a non-negative number

    Raises:
        HTTPException: 400 if the value is not numeric or is negative
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{label} must be a number"
        )

    if number != number or number < 0:  # NaN or negative
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{label} must be a non-negative number"
        )

    if integer:
        if not number.is_integer():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{label} must be a whole number"
            )
        return int(number)

    return number


def parse_bool(value: Optional[str]) -> Optional[bool]:
    """Interpret a form checkbox/select value; None when not supplied"""
    if value is None or value == "":
        return None
    return str(value).strip().lower() in ("1", "true", "yes", "on")
