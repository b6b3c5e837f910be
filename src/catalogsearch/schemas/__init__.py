"""
Pydantic schemas for API validation and data contracts.
"""

from .search import (
    SearchRequest,
    ProductSchema,
    SearchResponse,
    LoadRequest,
    LoadResponse,
)

__all__ = [
    'SearchRequest',
    'ProductSchema',
    'SearchResponse',
    'LoadRequest',
    'LoadResponse',
]
