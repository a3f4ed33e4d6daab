"""Flatten a catalog snapshot into a prompt block for the assistant."""

from typing import Dict, List, Optional

from storefront.application.models import CatalogSnapshot, Product
from storefront.config.settings import settings
from storefront.infrastructure.llm.prompts import NO_PRODUCT_CONTEXT
from storefront.utils.formatters import format_amount

UNCATEGORIZED = "Uncategorized"


def group_by_category(snapshot: CatalogSnapshot) -> Dict[str, List[Product]]:
    """
    Group products under their resolved category name.

    Category ids are resolved only against the categories of the same
    snapshot. Groups keep the order in which categories first appear.
    """
    names = snapshot.category_names()
    grouped: Dict[str, List[Product]] = {}
    for product in snapshot.products:
        category_name = names.get(product.category, UNCATEGORIZED)
        grouped.setdefault(category_name, []).append(product)
    return grouped


class ProductContextBuilder:
    """Renders the product knowledge section of the assistant prompt."""

    def __init__(self, store_name: Optional[str] = None, currency: Optional[str] = None):
        self.store_name = store_name or settings.store_name
        self.currency = currency or settings.currency

    def format_product(self, product: Product) -> str:
        return f"- {product.name}: {self.currency} {format_amount(product.price)} - {product.description}"

    def build_context(self, snapshot: Optional[CatalogSnapshot]) -> str:
        """
        Build the product block.

        Args:
            snapshot: Catalog snapshot, or None when none could be fetched

        Returns:
            Products listed under upper-cased category headers followed by
            totals, or NO_PRODUCT_CONTEXT when there is nothing to describe
        """
        if snapshot is None or not snapshot.products:
            return NO_PRODUCT_CONTEXT

        grouped = group_by_category(snapshot)

        lines = [f"AVAILABLE PRODUCTS AT {self.store_name.upper()}:", ""]
        for category_name, products in grouped.items():
            lines.append(f"{category_name.upper()}:")
            lines.extend(self.format_product(product) for product in products)
            lines.append("")

        lines.append(f"TOTAL PRODUCTS: {len(snapshot.products)}")
        lines.append(f"CATEGORIES: {', '.join(grouped.keys())}")
        return "\n".join(lines)
