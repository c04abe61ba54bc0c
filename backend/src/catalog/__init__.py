"""Catalog module: read-only product lookups for the matching pipeline"""

from .ports import CatalogReadPort, CatalogProduct, CatalogError, CatalogUnavailableError
from .repository import SqlCatalogRepository
from .search_text import build_search_text, refresh_search_text

__all__ = [
    "CatalogReadPort",
    "CatalogProduct",
    "CatalogError",
    "CatalogUnavailableError",
    "SqlCatalogRepository",
    "build_search_text",
    "refresh_search_text",
]
