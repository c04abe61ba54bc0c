"""Catalog read ports and interfaces for hexagonal architecture.

The matching pipeline only ever reads the catalog. It receives immutable
``CatalogProduct`` snapshots so a request never observes a half-updated row.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, List, Sequence
from uuid import UUID


@dataclass(frozen=True)
class CatalogProduct:
    """Read-only snapshot of a catalog product (SKU).

    Attributes:
        id: Product UUID
        product_type: Product type (e.g. "EF Servis Te")
        product_code: Unique product code (e.g. "NTG EF 63-50")
        search_text: Concatenated searchable text of the product
        diameter: Optional diameter/size string
        description: Optional free-text description
        brand: Optional manufacturer brand
        material: Optional raw material
        base_price: List price
        currency: Price currency code
        unit: Sales unit (adet, metre, ...)
    """
    id: UUID
    product_type: str
    product_code: str
    search_text: str
    diameter: Optional[str] = None
    description: Optional[str] = None
    brand: Optional[str] = None
    material: Optional[str] = None
    base_price: Optional[Decimal] = None
    currency: str = "TRY"
    unit: Optional[str] = None


class CatalogReadPort(ABC):
    """Port interface for catalog lookups used by the matchers.

    Implementations:
    - SqlCatalogRepository: SQLAlchemy (PostgreSQL full-text, ILIKE substring)

    All methods return results in a deterministic order so that matching the
    same request twice against an unchanged catalog yields the same ranking.
    """

    @abstractmethod
    def search_by_code(self, code: str, limit: int = 1) -> List[CatalogProduct]:
        """Find products whose code or search text contains ``code``.

        Matching is a case-insensitive substring match.

        Raises:
            CatalogUnavailableError: If the catalog cannot be queried
        """
        pass

    @abstractmethod
    def search_by_pattern(self, pattern: str, limit: int = 10) -> List[CatalogProduct]:
        """Find products whose search text contains ``pattern``.

        Raises:
            CatalogUnavailableError: If the catalog cannot be queried
        """
        pass

    @abstractmethod
    def search_full_text(
        self,
        keywords: Sequence[str],
        language: str = "turkish",
        limit: int = 10
    ) -> List[CatalogProduct]:
        """Conjunctive full-text search: every keyword must match.

        Args:
            keywords: Normalized keywords
            language: Text search configuration (stemming locale)
            limit: Maximum number of rows

        Raises:
            CatalogUnavailableError: If the catalog cannot be queried
        """
        pass

    @abstractmethod
    def sample(self, limit: int = 100) -> List[CatalogProduct]:
        """Return an unranked, bounded slice of the catalog.

        Raises:
            CatalogUnavailableError: If the catalog cannot be queried
        """
        pass


class CatalogError(Exception):
    """Base exception for catalog errors."""
    pass


class CatalogUnavailableError(CatalogError):
    """Catalog query failed, including the single retry on transient errors."""
    pass
