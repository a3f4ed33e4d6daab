"""Post-search refinement: price/category predicates and result ordering."""

from typing import Iterable, List, Optional

from storefront.application.models import Product

SORT_OPTIONS = ("relevance", "price-asc", "price-desc", "name")


def apply_filters(
    products: Iterable[Product],
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    category: Optional[str] = None,
    sort: str = "relevance",
) -> List[Product]:
    """
    Filter and order search results.

    Runs after the fuzzy search has ranked the products; "relevance" keeps
    that ranking untouched.

    Args:
        products: Ranked search results
        min_price: Inclusive lower price bound
        max_price: Inclusive upper price bound
        category: Category id the product must belong to
        sort: One of SORT_OPTIONS

    Returns:
        Filtered, ordered list of products

    Raises:
        ValueError: If sort is not a known option
    """
    if sort not in SORT_OPTIONS:
        raise ValueError(f"Unknown sort option '{sort}', expected one of {', '.join(SORT_OPTIONS)}")

    filtered = [
        product for product in products
        if (min_price is None or product.price >= min_price)
        and (max_price is None or product.price <= max_price)
        and (not category or product.category == category)
    ]

    if sort == "price-asc":
        filtered.sort(key=lambda p: p.price)
    elif sort == "price-desc":
        filtered.sort(key=lambda p: p.price, reverse=True)
    elif sort == "name":
        filtered.sort(key=lambda p: p.name.lower())

    return filtered
