"""Product SQLAlchemy model"""

import uuid

from sqlalchemy import Column, Text, Numeric, Index, Uuid, DateTime, func

from .base import Base


class Product(Base):
    """Catalog product (SKU) used for quotations and request matching.

    ``search_text`` holds the concatenated, searchable representation of the
    product (type, code, diameter, description and tagged attributes) and is
    the column every matcher searches against.
    """
    __tablename__ = "products"
    __table_args__ = (
        Index("ix_products_product_code", "product_code", unique=True),
        Index("ix_products_product_type", "product_type"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    product_type = Column(Text, nullable=False)
    diameter = Column(Text, nullable=True)
    product_code = Column(Text, nullable=False)
    description = Column(Text, nullable=True)

    # Structured tags (brand, subtype, size, material, pressure class, features)
    brand = Column(Text, nullable=True)
    product_subtype = Column(Text, nullable=True)
    size_measurement = Column(Text, nullable=True)
    material = Column(Text, nullable=True)
    pressure_class = Column(Text, nullable=True)
    product_features = Column(Text, nullable=True)

    search_text = Column(Text, nullable=False, server_default="")
    base_price = Column(Numeric(precision=12, scale=2), nullable=False)
    currency = Column(Text, nullable=False, server_default="TRY")
    unit = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
