"""Search text composition for catalog products.

Every matcher searches the ``search_text`` column. It is rebuilt from the
product's own fields whenever the product changes.
"""

import logging
import re
from typing import Optional

from sqlalchemy.orm import Session

from models.product import Product

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")

SEARCH_TEXT_FIELDS = (
    "product_type",
    "product_code",
    "diameter",
    "description",
    "brand",
    "product_subtype",
    "size_measurement",
    "material",
    "pressure_class",
    "product_features",
)


def build_search_text(*parts: Optional[str]) -> str:
    """Join non-empty parts with single spaces.

    Example:
        >>> build_search_text("EF Servis Te", "NTG EF 63-50", None, " SDR11 ")
        'EF Servis Te NTG EF 63-50 SDR11'
    """
    cleaned = [_WHITESPACE.sub(" ", part).strip() for part in parts if part]
    return " ".join(part for part in cleaned if part)


def search_text_for(product: Product) -> str:
    """Compose the search text of a product from its fields."""
    return build_search_text(*(getattr(product, field) for field in SEARCH_TEXT_FIELDS))


def refresh_search_text(session: Session) -> int:
    """Recompute ``search_text`` for every product whose value is stale.

    Args:
        session: Database session (caller commits)

    Returns:
        Number of products updated
    """
    updated = 0
    for product in session.query(Product).order_by(Product.product_code).all():
        expected = search_text_for(product)
        if product.search_text != expected:
            product.search_text = expected
            updated += 1

    session.flush()
    logger.info(f"Search text refreshed for {updated} products")
    return updated
