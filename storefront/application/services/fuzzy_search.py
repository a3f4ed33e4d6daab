"""Fuzzy product search over the full catalog."""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from rapidfuzz import fuzz

from storefront.application.exceptions import CatalogError
from storefront.application.models import Product, SearchResult
from storefront.config.logging_config import get_logger
from storefront.config.settings import settings
from storefront.infrastructure.cache.ttl_cache import TTLCache
from storefront.infrastructure.database.catalog_repository import CatalogRepository
from storefront.utils.text import normalize_search_text, tokenize

logger = get_logger(__name__)

SEARCH_KEY_PREFIX = "search_"


@dataclass(frozen=True)
class FuzzyOptions:
    """Matching parameters.

    threshold: best accepted score, 0 = exact match, 1 = anything goes
    distance: characters into a field after which a match costs a full point
    min_match_char_length: query tokens shorter than this are ignored
    field_weights: searchable product fields and their relevance weight
    """
    threshold: float = 0.3
    distance: int = 100
    min_match_char_length: int = 2
    field_weights: Tuple[Tuple[str, float], ...] = (
        ("name", 1.0),
        ("description", 0.8),
        ("category", 0.8),
    )

    @classmethod
    def from_settings(cls) -> "FuzzyOptions":
        return cls(
            threshold=settings.fuzzy_threshold,
            distance=settings.fuzzy_distance,
            min_match_char_length=settings.fuzzy_min_match_length,
        )


class FuzzySearchEngine:
    """
    Approximate matching of a query against name, description and category.

    Each search that misses the cache reads the whole product collection and
    scores every product in memory. That is fine for catalogs in the low
    thousands of products; past that, the catalog needs server-side
    filtering or a real inverted index.
    """

    def __init__(
        self,
        repository: CatalogRepository,
        cache: TTLCache,
        options: FuzzyOptions | None = None,
    ):
        self.repository = repository
        self.cache = cache
        self.options = options or FuzzyOptions.from_settings()

    def _field_score(self, query: str, text: str) -> float:
        """Score one field: 0 is a perfect match at the start of the field."""
        if not text:
            return 1.0

        alignment = fuzz.partial_ratio_alignment(query, text)
        similarity = alignment.score / 100.0
        if len(text) < len(query):
            # a short field can only cover part of the query
            similarity *= len(text) / len(query)

        position = alignment.dest_start if len(query) <= len(text) else 0
        if self.options.distance > 0:
            proximity = position / self.options.distance
        else:
            proximity = 0.0 if position == 0 else 1.0

        return min(1.0, (1.0 - similarity) + proximity)

    def score(self, query: str, product: Product) -> float:
        """Best weighted field score for a product (lower is better)."""
        best = 1.0
        for field, weight in self.options.field_weights:
            text = normalize_search_text(str(getattr(product, field, "") or ""))
            field_score = self._field_score(query, text)
            best = min(best, min(1.0, field_score / weight))
        return best

    def rank(self, query: str, products: Sequence[Product]) -> List[Product]:
        """
        Rank products against a query.

        Args:
            query: Search text (normalized or not)
            products: Candidate products

        Returns:
            Products scoring within the threshold, best first; equal scores
            keep catalog order
        """
        pattern = " ".join(tokenize(query, self.options.min_match_char_length))
        if not pattern:
            return []

        scored = []
        for index, product in enumerate(products):
            product_score = self.score(pattern, product)
            if product_score <= self.options.threshold:
                scored.append((product_score, index, product))

        scored.sort(key=lambda item: (item[0], item[1]))
        return [product for _, _, product in scored]

    def search(self, text: str) -> SearchResult[Product]:
        """
        Search the whole catalog.

        Results are cached under ``search_<normalized query>``; failures are
        logged, reported as a failed SearchResult and not cached.

        Args:
            text: Raw user query

        Returns:
            SearchResult with matching products, best first
        """
        normalized = normalize_search_text(text)
        if not normalized:
            return SearchResult[Product].success([])

        cache_key = f"{SEARCH_KEY_PREFIX}{normalized}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Search cache hit for '{normalized}'")
            return SearchResult[Product].success(cached)

        try:
            products = self.repository.list_products()
        except CatalogError as e:
            logger.error(f"Error performing search for '{normalized}': {e}")
            return SearchResult[Product].failure(str(e))

        results = self.rank(normalized, products)
        self.cache.set(cache_key, results)
        logger.info(f"Search '{normalized}' matched {len(results)} of {len(products)} products")
        return SearchResult[Product].success(results)
