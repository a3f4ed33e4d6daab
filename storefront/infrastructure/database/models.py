"""SQLAlchemy models for the catalog tables."""

from sqlalchemy import Column, Float, Integer, String, Text

from storefront.infrastructure.database.connection import Base


class CategoryModel(Base):
    __tablename__ = "categories"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(String(64), primary_key=True)
    name = Column(String(500), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    # Plain string, not a foreign key: products may point at a deleted category
    category = Column(String(64), nullable=True, index=True)
    price = Column(Float, nullable=False, default=0)
    image_url = Column(String(1000), nullable=True)
    stock = Column(Integer, nullable=True)
    size = Column(String(100), nullable=True)
