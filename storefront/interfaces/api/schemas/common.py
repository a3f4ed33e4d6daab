"""Common schemas used across the API."""

from typing import Optional
from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response schema."""
    status: str
    search_service: bool
    ai_service: bool
    message: Optional[str] = None
