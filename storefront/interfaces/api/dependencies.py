"""FastAPI dependencies for dependency injection."""

from typing import Optional

from fastapi import FastAPI, Request

from storefront.application.services.ai_service import AIService
from storefront.application.services.search_service import SearchService
from storefront.infrastructure.database.catalog_repository import CatalogRepository
from storefront.infrastructure.database.connection import create_db_engine, create_session_factory
from storefront.infrastructure.llm.groq_client import get_groq_client


def init_services(app: FastAPI, database_url: Optional[str] = None) -> None:
    """
    Build the service objects once and attach them to the application.

    Args:
        app: FastAPI application instance
        database_url: Override for settings.database_url
    """
    engine = create_db_engine(database_url)
    repository = CatalogRepository(create_session_factory(engine))

    app.state.catalog_repository = repository
    app.state.search_service = SearchService(repository)
    app.state.ai_service = AIService(repository, get_groq_client())


def _get_state(request: Request, name: str):
    service = getattr(request.app.state, name, None)
    if service is None:
        raise RuntimeError("Services not initialized. Call init_services() first.")
    return service


def get_catalog_repository(request: Request) -> CatalogRepository:
    """
    Get catalog repository instance.

    Returns:
        CatalogRepository instance
    """
    return _get_state(request, "catalog_repository")


def get_search_service(request: Request) -> SearchService:
    """
    Get search service instance.

    Returns:
        SearchService instance
    """
    return _get_state(request, "search_service")


def get_ai_service(request: Request) -> AIService:
    """
    Get assistant service instance.

    Returns:
        AIService instance
    """
    return _get_state(request, "ai_service")
