"""Search router for suggestions and product search."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from storefront.application.models import Product
from storefront.application.services.search_service import MAX_SUGGESTIONS, SearchService
from storefront.config.logging_config import get_logger
from storefront.interfaces.api.dependencies import get_search_service
from storefront.interfaces.api.schemas.product import ProductResponse, SuggestionResponse
from storefront.interfaces.api.schemas.search import SearchResponse, SuggestionListResponse
from storefront.utils.formatters import format_price

logger = get_logger(__name__)

router = APIRouter(prefix="/search", tags=["search"])

UNAVAILABLE_MESSAGE = "Search is temporarily unavailable. Please try again shortly."


def _to_response(product: Product) -> ProductResponse:
    return ProductResponse(
        **product.model_dump(),
        formatted_price=format_price(product.price),
    )


@router.get("/suggestions", response_model=SuggestionListResponse)
def suggestions(
    q: str = Query("", max_length=200),
    limit: Optional[int] = Query(None, ge=1, le=MAX_SUGGESTIONS),
    seq: Optional[int] = Query(None, description="Client sequence number, echoed back"),
    search_service: SearchService = Depends(get_search_service),
) -> SuggestionListResponse:
    """
    Prefix suggestions for the search box.

    Clients that fire a request per keystroke can send an increasing seq and
    drop any response older than the latest one they issued.
    """
    result = search_service.get_search_suggestions(q, limit)
    return SuggestionListResponse(
        query=q,
        suggestions=[SuggestionResponse.model_validate(s.model_dump()) for s in result.items],
        seq=seq,
        success=result.ok,
        error_message=None if result.ok else UNAVAILABLE_MESSAGE,
    )


@router.get("", response_model=SearchResponse)
def search(
    q: str = Query(..., max_length=500),
    category: Optional[str] = None,
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    sort: str = "relevance",
    search_service: SearchService = Depends(get_search_service),
) -> SearchResponse:
    """
    Fuzzy product search with optional price/category refinement.

    Args:
        q: Search text
        category: Category id to keep
        min_price: Inclusive lower price bound
        max_price: Inclusive upper price bound
        sort: relevance, price-asc, price-desc or name

    Returns:
        Matching products
    """
    try:
        result = search_service.search_products(
            q,
            min_price=min_price,
            max_price=max_price,
            category=category,
            sort=sort,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if not result.ok:
        logger.warning(f"Search for '{q}' failed: {result.error}")
        return SearchResponse(query=q, success=False, error_message=UNAVAILABLE_MESSAGE)

    products = [_to_response(p) for p in result.items]
    return SearchResponse(query=q, products=products, total=len(products))
