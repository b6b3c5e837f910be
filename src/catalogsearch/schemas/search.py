"""
Pydantic schemas for search API validation.
"""
from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class SearchRequest(BaseModel):
    """Search request from query string or JSON body."""
    query: str = Field(..., min_length=1, description="Free-text query matched against product names")
    limit: int = Field(default=10, ge=1, le=100, description="Maximum number of products returned")

    @field_validator('query')
    @classmethod
    def strip_query(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("query must not be blank")
        return v


class ProductSchema(BaseModel):
    """One product in a search response."""
    name: str | None = None
    prices: list[str] = Field(default_factory=list)
    quantities: list[str] = Field(default_factory=list)
    score: float | None = None


class SearchResponse(BaseModel):
    """Search response; ``total`` may exceed ``count``."""
    status: str = "success"
    query: str
    products: list[ProductSchema] = Field(default_factory=list)
    count: int = 0
    total: int = 0
    took_ms: int = 0


class LoadResponse(BaseModel):
    """Result of a load request."""
    status: str = "success"
    outcome: str
    extracted: int = 0
    loaded: int = 0
    failed: int = 0


class LoadRequest(BaseModel):
    """Optional JSON body of a load request."""
    url: str | None = Field(default=None, description="Catalog page to load instead of CATALOG_URL")

    @field_validator('url')
    @classmethod
    def strip_url(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None
