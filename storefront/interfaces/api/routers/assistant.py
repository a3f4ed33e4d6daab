"""Router for the shopping assistant chat."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from storefront.application.models import ConversationTurn, Product
from storefront.application.services.ai_service import AIService
from storefront.config.settings import settings
from storefront.interfaces.api.dependencies import get_ai_service
from storefront.interfaces.api.schemas.assistant import (
    CacheRefreshResponse,
    CatalogProductsResponse,
    ChatRequest,
    ChatResponse,
    ProductStatsResponse,
)
from storefront.interfaces.api.schemas.product import ProductResponse
from storefront.utils.formatters import format_price

router = APIRouter(prefix="/assistant", tags=["assistant"])


@router.post("/chat", response_model=ChatResponse)
def chat(
    request: ChatRequest,
    ai_service: AIService = Depends(get_ai_service),
) -> ChatResponse:
    """Answer a shopper message using the catalog as context."""
    history = [ConversationTurn(speaker=turn.speaker, text=turn.text) for turn in request.history]
    return ChatResponse(response=ai_service.generate_response(request.message, history))


@router.post("/cache/prime", response_model=CacheRefreshResponse)
def prime_cache(ai_service: AIService = Depends(get_ai_service)) -> CacheRefreshResponse:
    """Load the catalog snapshot if it is missing or expired, e.g. when the chat panel opens."""
    snapshot = ai_service.update_product_cache()
    if snapshot is None:
        return CacheRefreshResponse(success=False, message="Product information is currently unavailable")
    return CacheRefreshResponse(
        success=True,
        message="Product cache ready",
        total_products=len(snapshot.products),
    )


@router.post("/cache/refresh", response_model=CacheRefreshResponse)
def refresh_cache(ai_service: AIService = Depends(get_ai_service)) -> CacheRefreshResponse:
    """Force a fresh catalog snapshot regardless of its age."""
    if not ai_service.refresh_cache():
        return CacheRefreshResponse(success=False, message="Could not refresh product information")
    stats = ai_service.get_product_stats()
    return CacheRefreshResponse(
        success=True,
        message="Product information updated",
        total_products=stats["total_products"],
    )


@router.get("/stats", response_model=ProductStatsResponse)
def product_stats(ai_service: AIService = Depends(get_ai_service)) -> ProductStatsResponse:
    """Catalog statistics from the assistant's snapshot."""
    stats = ai_service.get_product_stats()
    return ProductStatsResponse(
        **stats,
        products_per_category=ai_service.get_category_summary(),
        currency=settings.currency,
    )


def _to_response(product: Product, ai_service: AIService) -> ProductResponse:
    return ProductResponse(
        **product.model_dump(),
        formatted_price=format_price(product.price),
        category_name=ai_service.get_category_name(product.category),
    )


@router.get("/products", response_model=CatalogProductsResponse)
def catalog_products(
    q: Optional[str] = Query(None, max_length=200),
    category: Optional[str] = Query(None, description="Category name, case-insensitive"),
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    ai_service: AIService = Depends(get_ai_service),
) -> CatalogProductsResponse:
    """
    Browse the assistant's catalog snapshot.

    q is a plain substring match on name, description and category name.
    Every given option narrows the result; price bounds are inclusive.
    """
    if q and q.strip():
        products = ai_service.search_cached_products(q)
    else:
        products = ai_service.list_cached_products()

    if category:
        in_category = {p.id for p in ai_service.get_products_by_category(category)}
        products = [p for p in products if p.id in in_category]

    if min_price is not None or max_price is not None:
        in_range = {
            p.id for p in ai_service.get_products_by_price_range(
                0 if min_price is None else min_price,
                float("inf") if max_price is None else max_price,
            )
        }
        products = [p for p in products if p.id in in_range]

    items = [_to_response(p, ai_service) for p in products]
    return CatalogProductsResponse(products=items, total=len(items))
