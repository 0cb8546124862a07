"""Pagination utilities"""

from math import ceil


def page_offset(page: int = 1, limit: int = 20) -> int:
    """
    Number of documents to skip for a 1-indexed page

    Args:
        page: Current page number (1-indexed)
        limit: Number of items per page
    """
    return (max(page, 1) - 1) * limit


def page_meta(total: int, page: int = 1, limit: int = 20) -> dict:
    """
    Pagination metadata for a result set

    Args:
        total: Total number of matching items
        page: Current page number (1-indexed)
        limit: Number of items per page

    Returns:
        Dictionary with pagination data
    """
    pages = ceil(total / limit) if total > 0 else 1

    return {
        "total": total,
        "page": page,
        "limit": limit,
        "pages": pages
    }
