"""Category schemas."""

from typing import Optional
from pydantic import BaseModel


class CategoryResponse(BaseModel):
    """Category response schema."""
    id: str
    name: str
    description: Optional[str] = None

    class Config:
        from_attributes = True
