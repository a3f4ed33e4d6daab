"""Product schemas."""

from typing import Optional
from pydantic import BaseModel


class ProductResponse(BaseModel):
    """Full product record returned by search."""
    id: str
    name: str
    description: str = ""
    category: str = ""
    price: float
    formatted_price: str
    category_name: Optional[str] = None
    image_url: Optional[str] = None
    stock: Optional[int] = None
    size: Optional[str] = None

    class Config:
        from_attributes = True


class SuggestionResponse(BaseModel):
    """Search suggestion schema."""
    id: str
    name: str
    category: str = ""

    class Config:
        from_attributes = True
