"""Health check router."""

from fastapi import APIRouter, Request

from storefront.interfaces.api.schemas.common import HealthResponse
from storefront.interfaces.api.dependencies import (
    get_search_service,
    get_ai_service
)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """
    Health check endpoint.

    Returns:
        Health status of the application and services
    """
    try:
        search_service = get_search_service(request)
        ai_service = get_ai_service(request)

        return HealthResponse(
            status="healthy",
            search_service=search_service is not None,
            ai_service=ai_service is not None,
            message="All services operational"
        )
    except Exception as e:
        return HealthResponse(
            status="unhealthy",
            search_service=False,
            ai_service=False,
            message=str(e)
        )
