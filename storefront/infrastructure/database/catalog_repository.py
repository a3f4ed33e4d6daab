"""Read-only access to the product and category collections."""

from contextlib import contextmanager
from typing import Iterator, List, Optional

from pydantic import ValidationError
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from storefront.application.exceptions import CatalogError
from storefront.application.models import Category, Product
from storefront.config.logging_config import get_logger
from storefront.infrastructure.database.models import CategoryModel, ProductModel

logger = get_logger(__name__)


def _to_product(row: ProductModel) -> Optional[Product]:
    try:
        return Product(
            id=row.id,
            name=row.name,
            description=row.description or "",
            category=row.category or "",
            price=row.price,
            image_url=row.image_url,
            stock=row.stock,
            size=row.size,
        )
    except ValidationError as e:
        logger.warning(f"Skipping malformed product {row.id}: {e}")
        return None


class CatalogRepository:
    """
    Catalog queries used by search and the assistant.

    Every method raises CatalogError when the database cannot be read;
    individual malformed rows are skipped with a warning.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        db = self.session_factory()
        try:
            yield db
        except SQLAlchemyError as e:
            logger.error(f"Catalog query '{operation}' failed: {e}")
            raise CatalogError(f"{operation} failed: {e}") from e
        finally:
            db.close()

    def list_products(self) -> List[Product]:
        """Return every product in the catalog."""
        with self._session("list_products") as db:
            rows = db.execute(select(ProductModel)).scalars().all()
            products = [_to_product(row) for row in rows]
        return [p for p in products if p is not None]

    def list_categories(self) -> List[Category]:
        """Return every category ordered by name."""
        with self._session("list_categories") as db:
            rows = db.execute(select(CategoryModel).order_by(CategoryModel.name)).scalars().all()
            return [
                Category(id=row.id, name=row.name, description=row.description)
                for row in rows
            ]

    def products_by_name_range(self, start: str, end: str, limit: int) -> List[Product]:
        """
        Range scan on the lower-cased product name.

        Returns products whose lower-cased name falls in [start, end),
        ordered by name and capped at limit rows in the query itself.

        Args:
            start: Inclusive lower bound (already lower-cased)
            end: Exclusive upper bound
            limit: Maximum number of rows

        Returns:
            Ordered list of products
        """
        name_key = func.lower(ProductModel.name)
        stmt = (
            select(ProductModel)
            .where(name_key >= start, name_key < end)
            .order_by(name_key, ProductModel.name)
            .limit(limit)
        )
        with self._session("products_by_name_range") as db:
            rows = db.execute(stmt).scalars().all()
            products = [_to_product(row) for row in rows]
        return [p for p in products if p is not None]
