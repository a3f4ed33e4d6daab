"""Search request/response schemas."""

from typing import Optional, List
from pydantic import BaseModel, Field

from storefront.interfaces.api.schemas.product import ProductResponse, SuggestionResponse


class SuggestionListResponse(BaseModel):
    """Suggestions for partially typed input."""
    query: str
    suggestions: List[SuggestionResponse] = Field(default_factory=list)
    seq: Optional[int] = Field(default=None, description="Echo of the client's request sequence number")
    success: bool = True
    error_message: Optional[str] = None


class SearchResponse(BaseModel):
    """Search response schema."""
    query: str
    products: List[ProductResponse] = Field(default_factory=list)
    total: int = 0
    success: bool = True
    error_message: Optional[str] = None
