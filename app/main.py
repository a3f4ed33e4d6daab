"""
FastAPI application entrypoint.
Thin layer that wires up routers, middleware and service lifetimes.
"""
import asyncio
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI

from storefront.config.settings import settings
from storefront.config.logging_config import setup_logging, get_logger
from storefront.interfaces.api.middleware import setup_middleware
from storefront.interfaces.api.dependencies import init_services
from storefront.interfaces.api.routers import assistant, categories, health, search

# Setup logging
setup_logging()
logger = get_logger(__name__)


async def sweep_search_cache(app: FastAPI, interval: float) -> None:
    """Periodically drop expired search cache entries."""
    while True:
        await asyncio.sleep(interval)
        removed = app.state.search_service.cleanup_search_cache()
        if removed:
            logger.info(f"Search cache sweep removed {removed} entries")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Initializing services...")
    try:
        init_services(app)
        logger.info("Services initialized successfully")
    except Exception as e:
        logger.error(f"Service initialization failed: {e}")
        raise

    sweeper = asyncio.create_task(sweep_search_cache(app, settings.cache_ttl_seconds))
    yield
    logger.info("Shutting down services...")
    sweeper.cancel()
    with suppress(asyncio.CancelledError):
        await sweeper


# Create FastAPI app
app = FastAPI(
    title=settings.api_title,
    description="Product search, suggestions and a catalog-aware shopping assistant",
    version=settings.api_version,
    lifespan=lifespan,
)

# Setup middleware
setup_middleware(app)
# Register routers
app.include_router(health.router)
app.include_router(search.router, prefix="/api/v1")
app.include_router(assistant.router, prefix="/api/v1")
app.include_router(categories.router, prefix="/api/v1")
logger.info("Application startup complete")
