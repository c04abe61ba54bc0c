"""SQLAlchemy Models for the quotation catalog"""

from .base import Base
from .product import Product
from .match_analytics import MatchAnalytics

__all__ = [
    "Base",
    "Product",
    "MatchAnalytics",
]
