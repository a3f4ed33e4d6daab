"""Search suggestions and product search with a shared result cache."""

from typing import List, Optional

from storefront.application.exceptions import CatalogError
from storefront.application.models import Product, SearchResult, Suggestion
from storefront.application.services.fuzzy_search import FuzzySearchEngine, FuzzyOptions
from storefront.config.logging_config import get_logger
from storefront.config.settings import settings
from storefront.infrastructure.cache.ttl_cache import TTLCache
from storefront.infrastructure.database.catalog_repository import CatalogRepository
from storefront.utils.filters import apply_filters
from storefront.utils.text import normalize_search_text

logger = get_logger(__name__)

SUGGESTION_KEY_PREFIX = "suggestions_"

# Upper bound appended to a prefix to turn it into a range scan
HIGH_SENTINEL = "\uf8ff"

# Rows fetched per prefix; requests for fewer are sliced from the cached list
MAX_SUGGESTIONS = 20


class SuggestionIndex:
    """
    Prefix suggestions on product names.

    The prefix becomes the half-open range [prefix, prefix + HIGH_SENTINEL)
    on the lower-cased name column, so the store must support ordered range
    scans on that column. The query always asks for MAX_SUGGESTIONS rows so
    the cached list can serve any smaller request.
    """

    def __init__(self, repository: CatalogRepository, cache: TTLCache, min_length: int = 2):
        self.repository = repository
        self.cache = cache
        self.min_length = min_length

    def suggest(self, text: str, max_results: int = 5) -> SearchResult[Suggestion]:
        """
        Suggest products whose name starts with the query.

        Args:
            text: Raw user input
            max_results: Maximum number of suggestions

        Returns:
            SearchResult with suggestions ordered by name
        """
        normalized = normalize_search_text(text)
        if len(normalized) < self.min_length or max_results <= 0:
            return SearchResult[Suggestion].success([])
        max_results = min(max_results, MAX_SUGGESTIONS)

        cache_key = f"{SUGGESTION_KEY_PREFIX}{normalized}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return SearchResult[Suggestion].success(cached[:max_results])

        try:
            products = self.repository.products_by_name_range(
                normalized, normalized + HIGH_SENTINEL, MAX_SUGGESTIONS
            )
        except CatalogError as e:
            logger.error(f"Error fetching search suggestions for '{normalized}': {e}")
            return SearchResult[Suggestion].failure(str(e))

        suggestions = [
            Suggestion(id=p.id, name=p.name, category=p.category)
            for p in products
        ]
        self.cache.set(cache_key, suggestions)
        return SearchResult[Suggestion].success(suggestions[:max_results])


class SearchService:
    """Entry point for the search box: suggestions, full search, cache upkeep."""

    def __init__(
        self,
        repository: CatalogRepository,
        cache: Optional[TTLCache] = None,
        fuzzy_options: Optional[FuzzyOptions] = None,
    ):
        self.repository = repository
        if cache is None:
            cache = TTLCache(ttl=settings.cache_ttl_seconds, maxsize=settings.cache_max_entries)
        self.cache = cache
        self.suggestion_index = SuggestionIndex(
            repository, self.cache, min_length=settings.suggestion_min_length
        )
        self.fuzzy_engine = FuzzySearchEngine(repository, self.cache, fuzzy_options)
        logger.info(f"SearchService initialized (cache ttl={self.cache.ttl}s)")

    def get_search_suggestions(
        self,
        text: str,
        max_suggestions: Optional[int] = None,
    ) -> SearchResult[Suggestion]:
        """Prefix suggestions for partially typed input."""
        limit = settings.suggestion_limit if max_suggestions is None else max_suggestions
        return self.suggestion_index.suggest(text, limit)

    def search_products(
        self,
        text: str,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        category: Optional[str] = None,
        sort: str = "relevance",
    ) -> SearchResult[Product]:
        """
        Fuzzy search, then narrow and order the ranked results.

        Filters run on the cached ranking, so changing them never triggers
        a new catalog read.

        Raises:
            ValueError: If sort is not a known option
        """
        result = self.fuzzy_engine.search(text)
        if not result.ok:
            return result
        refined: List[Product] = apply_filters(
            result.items,
            min_price=min_price,
            max_price=max_price,
            category=category,
            sort=sort,
        )
        return SearchResult[Product].success(refined)

    def cleanup_search_cache(self) -> int:
        """Drop expired cache entries; returns how many were removed."""
        return self.cache.sweep()
