"""Domain models shared by the search and assistant services."""

from datetime import datetime
from typing import Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Category(BaseModel):
    """Product category."""
    id: str
    name: str
    description: Optional[str] = None


class Product(BaseModel):
    """Catalog product as stored in the catalog database."""
    id: str
    name: str
    description: str = ""
    category: str = ""
    price: float = Field(default=0, ge=0)
    image_url: Optional[str] = None
    stock: Optional[int] = None
    size: Optional[str] = None

    model_config = {"frozen": True}


class Suggestion(BaseModel):
    """Lightweight search suggestion."""
    id: str
    name: str
    category: str = ""

    model_config = {"frozen": True}


class ConversationTurn(BaseModel):
    """One message of a chat transcript."""
    speaker: Literal["user", "assistant"]
    text: str


class CatalogSnapshot(BaseModel):
    """Products and categories fetched together at one instant."""
    products: List[Product] = Field(default_factory=list)
    categories: List[Category] = Field(default_factory=list)
    fetched_at: datetime

    model_config = {"frozen": True}

    def category_names(self) -> dict[str, str]:
        """Map category id to category name."""
        return {category.id: category.name for category in self.categories}


class SearchResult(BaseModel, Generic[T]):
    """
    Outcome of a search call.

    A failed call carries no items and an error reason, so callers can tell
    "nothing matched" apart from "the catalog could not be read".
    """
    items: List[T] = Field(default_factory=list)
    ok: bool = True
    error: Optional[str] = None

    @classmethod
    def success(cls, items: List[T]) -> "SearchResult[T]":
        return cls(items=list(items))

    @classmethod
    def failure(cls, reason: str) -> "SearchResult[T]":
        return cls(items=[], ok=False, error=reason)
