from fastapi import APIRouter, Depends, HTTPException

from storefront.application.exceptions import CatalogError
from storefront.infrastructure.database.catalog_repository import CatalogRepository
from storefront.interfaces.api.dependencies import get_catalog_repository
from storefront.interfaces.api.schemas.category import CategoryResponse

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
def list_categories(repository: CatalogRepository = Depends(get_catalog_repository)):
    try:
        return repository.list_categories()
    except CatalogError:
        raise HTTPException(status_code=503, detail="Categories are temporarily unavailable")
