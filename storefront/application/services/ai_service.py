"""Retrieval-augmented shopping assistant."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol, Sequence

from storefront.application.exceptions import CatalogError
from storefront.application.models import CatalogSnapshot, ConversationTurn, Product
from storefront.application.services.conversation import ConversationAssembler
from storefront.application.services.product_context import ProductContextBuilder, group_by_category
from storefront.config.logging_config import get_logger
from storefront.config.settings import settings
from storefront.infrastructure.cache.ttl_cache import TTLCache
from storefront.infrastructure.database.catalog_repository import CatalogRepository
from storefront.infrastructure.llm.prompts import FALLBACK_RESPONSE

logger = get_logger(__name__)

SNAPSHOT_KEY = "catalog_snapshot"


class CompletionClient(Protocol):
    def generate(self, prompt: str) -> str: ...


class AIService:
    """
    Answers shopper questions grounded in the live catalog.

    The catalog snapshot is cached as a single entry with the configured
    TTL. A chat turn holds on to the snapshot it started with, so a refresh
    running at the same time never mixes old and new catalog data.
    """

    def __init__(
        self,
        repository: CatalogRepository,
        llm_client: CompletionClient,
        cache: Optional[TTLCache] = None,
        context_builder: Optional[ProductContextBuilder] = None,
        assembler: Optional[ConversationAssembler] = None,
    ):
        """
        Initialize the assistant.

        Args:
            repository: Catalog repository used to build snapshots
            llm_client: Anything with a generate(prompt) -> str method
            cache: Snapshot cache; defaults to a one-entry TTLCache
            context_builder: Product block renderer
            assembler: Prompt assembler
        """
        if llm_client is None:
            raise ValueError("A completion client is required for AIService")

        self.repository = repository
        self.llm_client = llm_client
        if cache is None:
            cache = TTLCache(ttl=settings.cache_ttl_seconds, maxsize=1)
        self.cache = cache
        self.context_builder = context_builder or ProductContextBuilder()
        self.assembler = assembler or ConversationAssembler()
        # Last good snapshot, served when a refresh fails
        self._last_snapshot: Optional[CatalogSnapshot] = None

    def _fetch_snapshot(self) -> CatalogSnapshot:
        products = self.repository.list_products()
        categories = self.repository.list_categories()
        return CatalogSnapshot(
            products=products,
            categories=categories,
            fetched_at=datetime.now(timezone.utc),
        )

    def update_product_cache(self) -> Optional[CatalogSnapshot]:
        """
        Make sure a fresh-enough catalog snapshot is cached.

        Re-fetches products and categories when the cached snapshot is
        missing or expired. When the fetch fails the previous snapshot (if
        any) keeps being served.

        Returns:
            The snapshot to use, or None if none was ever fetched
        """
        snapshot = self.cache.get(SNAPSHOT_KEY)
        if snapshot is not None:
            return snapshot

        logger.info("Updating product cache...")
        try:
            snapshot = self._fetch_snapshot()
        except CatalogError as e:
            logger.error(f"Error updating product cache: {e}")
            return self._last_snapshot

        self.cache.set(SNAPSHOT_KEY, snapshot)
        self._last_snapshot = snapshot
        logger.info(
            f"Cache updated with {len(snapshot.products)} products "
            f"and {len(snapshot.categories)} categories"
        )
        return snapshot

    def refresh_cache(self) -> bool:
        """
        Drop the cached snapshot regardless of its age and fetch a new one.

        Returns:
            True if a new snapshot was fetched
        """
        self.cache.delete(SNAPSHOT_KEY)
        previous = self._last_snapshot
        snapshot = self.update_product_cache()
        return snapshot is not None and snapshot is not previous

    def build_context(self) -> str:
        """Product block for the current snapshot."""
        return self.context_builder.build_context(self.update_product_cache())

    def generate_response(
        self,
        user_message: str,
        chat_history: Sequence[ConversationTurn] = (),
    ) -> str:
        """
        Generate an assistant reply.

        Any failure while preparing the prompt or calling the model is logged
        and answered with FALLBACK_RESPONSE; the error is not raised and not
        retried.

        Args:
            user_message: The shopper's new message
            chat_history: Previous turns, oldest first

        Returns:
            Completion text or the fallback apology
        """
        try:
            snapshot = self.update_product_cache()
            product_context = self.context_builder.build_context(snapshot)
            prompt = self.assembler.assemble(user_message, product_context, chat_history)
            return self.llm_client.generate(prompt)
        except Exception as e:
            logger.error(f"Error generating AI response: {e}", exc_info=True)
            return FALLBACK_RESPONSE

    # Catalog helpers over the cached snapshot

    def list_cached_products(self) -> List[Product]:
        """Every product of the current snapshot."""
        snapshot = self.update_product_cache()
        return list(snapshot.products) if snapshot else []

    def get_category_name(self, category_id: str) -> str:
        snapshot = self.update_product_cache()
        if snapshot is None:
            return "Unknown Category"
        return snapshot.category_names().get(category_id, "Unknown Category")

    def search_cached_products(self, query: str) -> List[Product]:
        """Substring match on name, description and category name."""
        snapshot = self.update_product_cache()
        if snapshot is None:
            return []
        term = query.lower().strip()
        if not term:
            return []
        names = snapshot.category_names()
        return [
            product for product in snapshot.products
            if term in product.name.lower()
            or term in product.description.lower()
            or term in names.get(product.category, "Unknown Category").lower()
        ]

    def get_products_by_category(self, category_name: str) -> List[Product]:
        """Products of the category with this name (case-insensitive)."""
        snapshot = self.update_product_cache()
        if snapshot is None:
            return []
        wanted = category_name.lower()
        category = next((c for c in snapshot.categories if c.name.lower() == wanted), None)
        if category is None:
            return []
        return [p for p in snapshot.products if p.category == category.id]

    def get_products_by_price_range(self, min_price: float, max_price: float) -> List[Product]:
        """Products priced within [min_price, max_price]."""
        return [p for p in self.list_cached_products() if min_price <= p.price <= max_price]

    def get_product_stats(self) -> Dict[str, Any]:
        """
        Summary figures for the catalog.

        Returns:
            Dictionary with total_products, categories, price_range and
            average_price (rounded to a whole amount)
        """
        snapshot = self.update_product_cache()
        if snapshot is None or not snapshot.products:
            return {
                "total_products": 0,
                "categories": len(snapshot.categories) if snapshot else 0,
                "price_range": {"min": 0, "max": 0},
                "average_price": 0,
            }

        prices = [p.price for p in snapshot.products]
        return {
            "total_products": len(snapshot.products),
            "categories": len(snapshot.categories),
            "price_range": {"min": min(prices), "max": max(prices)},
            "average_price": round(sum(prices) / len(prices)),
        }

    def get_category_summary(self) -> Dict[str, int]:
        """Product count per resolved category name."""
        snapshot = self.update_product_cache()
        if snapshot is None:
            return {}
        return {name: len(products) for name, products in group_by_category(snapshot).items()}
