"""Assistant request/response schemas."""

from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field

from storefront.interfaces.api.schemas.product import ProductResponse


class ChatTurn(BaseModel):
    """One previous chat message."""
    speaker: Literal["user", "assistant"]
    text: str


class ChatRequest(BaseModel):
    """Chat request schema."""
    message: str = Field(..., min_length=1, max_length=2000)
    history: List[ChatTurn] = Field(default_factory=list)


class ChatResponse(BaseModel):
    """Chat response schema."""
    response: str


class CacheRefreshResponse(BaseModel):
    """Result of priming or refreshing the catalog snapshot."""
    success: bool
    message: str
    total_products: int = 0


class PriceRange(BaseModel):
    min: float = 0
    max: float = 0


class ProductStatsResponse(BaseModel):
    """Catalog statistics schema."""
    total_products: int
    categories: int
    price_range: PriceRange
    average_price: float
    products_per_category: Dict[str, int] = Field(default_factory=dict)
    currency: Optional[str] = None


class CatalogProductsResponse(BaseModel):
    """Products from the assistant's catalog snapshot."""
    products: List[ProductResponse] = Field(default_factory=list)
    total: int = 0
