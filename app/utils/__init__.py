"""Utility functions"""

from app.utils.pagination import page_offset, page_meta
from app.utils.validators import validate_object_id, require_fields, parse_number, parse_bool

__all__ = [
    "page_offset",
    "page_meta",
    "validate_object_id",
    "require_fields",
    "parse_number",
    "parse_bool",
]
