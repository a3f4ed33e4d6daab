"""Shared helpers for building in-memory catalogs."""

from typing import Iterable, Optional

from storefront.infrastructure.database.catalog_repository import CatalogRepository
from storefront.infrastructure.database.connection import (
    create_db_engine,
    create_session_factory,
    init_db,
)
from storefront.infrastructure.database.models import CategoryModel, ProductModel


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_repository(
    products: Iterable[dict] = (),
    categories: Iterable[dict] = (),
    create_tables: bool = True,
) -> CatalogRepository:
    """
    Build a repository over a fresh in-memory SQLite catalog.

    Product dicts need at least ``name``; ``id`` defaults to p<n> and
    ``price`` to 0.
    """
    engine = create_db_engine("sqlite://")
    session_factory = create_session_factory(engine)
    if create_tables:
        init_db(engine)
        db = session_factory()
        try:
            for category in categories:
                db.add(CategoryModel(**category))
            for index, product in enumerate(products, start=1):
                data = {"id": f"p{index}", "price": 0, "description": ""}
                data.update(product)
                db.add(ProductModel(**data))
            db.commit()
        finally:
            db.close()
    return CatalogRepository(session_factory)


def add_product(repository: CatalogRepository, **fields) -> None:
    """Insert one more product into an existing catalog."""
    data = {"price": 0, "description": ""}
    data.update(fields)
    db = repository.session_factory()
    try:
        db.add(ProductModel(**data))
        db.commit()
    finally:
        db.close()


SHOP_CATEGORIES = [
    {"id": "c-foot", "name": "Footwear"},
    {"id": "c-out", "name": "Outerwear"},
    {"id": "c-acc", "name": "Accessories"},
]

SHOP_PRODUCTS = [
    {"id": "shoe-1", "name": "Blue Running Shoes", "description": "Lightweight trainers for road running",
     "category": "c-foot", "price": 85000},
    {"id": "jacket-1", "name": "Red Jacket", "description": "Waterproof shell for cold days",
     "category": "c-out", "price": 120000},
    {"id": "hat-1", "name": "Straw Hat", "description": "Wide brim summer hat",
     "category": "c-acc", "price": 15000},
    {"id": "belt-1", "name": "Leather Belt", "description": "Brown belt with brass buckle",
     "category": "c-acc", "price": 30000},
]


def make_shop_repository(extra_products: Optional[Iterable[dict]] = None) -> CatalogRepository:
    return make_repository(list(SHOP_PRODUCTS) + list(extra_products or []), SHOP_CATEGORIES)
