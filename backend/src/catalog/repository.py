"""SQLAlchemy implementation of the catalog read port.

Substring lookups use ILIKE. Full-text lookups use PostgreSQL text search
(``to_tsvector``/``plainto_tsquery`` with the configured language) and fall
back to a conjunction of ILIKE filters on other dialects (SQLite in tests).
"""

import logging
from typing import Callable, List, Sequence

from sqlalchemy import and_, or_, func, literal
from sqlalchemy.dialects.postgresql import REGCONFIG
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.orm import Session, sessionmaker

from models.product import Product
from .ports import CatalogReadPort, CatalogProduct, CatalogUnavailableError

logger = logging.getLogger(__name__)

_LIKE_ESCAPE = "\\"


def _contains(value: str) -> str:
    """Build an ILIKE substring pattern with LIKE wildcards escaped."""
    escaped = (
        value.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _is_transient(error: DBAPIError) -> bool:
    """Connection-level failures are worth exactly one retry."""
    return isinstance(error, OperationalError) or error.connection_invalidated


def _to_snapshot(product: Product) -> CatalogProduct:
    return CatalogProduct(
        id=product.id,
        product_type=product.product_type,
        product_code=product.product_code,
        search_text=product.search_text or "",
        diameter=product.diameter,
        description=product.description,
        brand=product.brand,
        material=product.material,
        base_price=product.base_price,
        currency=product.currency,
        unit=product.unit,
    )


class SqlCatalogRepository(CatalogReadPort):
    """Catalog reads over a shared session factory.

    Each lookup opens its own short-lived session, so one repository instance
    can be shared by concurrent requests.
    """

    def __init__(self, session_factory: sessionmaker, text_search_config: str = "turkish"):
        """Initialize repository.

        Args:
            session_factory: SQLAlchemy sessionmaker bound to the catalog engine
            text_search_config: Default PostgreSQL text search configuration
        """
        self.session_factory = session_factory
        self.text_search_config = text_search_config

    def search_by_code(self, code: str, limit: int = 1) -> List[CatalogProduct]:
        pattern = _contains(code)

        def query(session: Session) -> List[Product]:
            return (
                session.query(Product)
                .filter(or_(
                    Product.product_code.ilike(pattern, escape=_LIKE_ESCAPE),
                    Product.search_text.ilike(pattern, escape=_LIKE_ESCAPE),
                ))
                .order_by(Product.product_code, Product.id)
                .limit(limit)
                .all()
            )

        return self._run("search_by_code", query)

    def search_by_pattern(self, pattern: str, limit: int = 10) -> List[CatalogProduct]:
        like = _contains(pattern)

        def query(session: Session) -> List[Product]:
            return (
                session.query(Product)
                .filter(Product.search_text.ilike(like, escape=_LIKE_ESCAPE))
                .order_by(Product.product_code, Product.id)
                .limit(limit)
                .all()
            )

        return self._run("search_by_pattern", query)

    def search_full_text(
        self,
        keywords: Sequence[str],
        language: str = "turkish",
        limit: int = 10
    ) -> List[CatalogProduct]:
        if not keywords:
            return []

        def query(session: Session) -> List[Product]:
            if session.get_bind().dialect.name == "postgresql":
                config = literal(language or self.text_search_config, type_=REGCONFIG)
                condition = func.to_tsvector(config, Product.search_text).bool_op("@@")(
                    func.plainto_tsquery(config, " ".join(keywords))
                )
            else:
                condition = and_(*[
                    Product.search_text.ilike(_contains(keyword), escape=_LIKE_ESCAPE)
                    for keyword in keywords
                ])

            return (
                session.query(Product)
                .filter(condition)
                .order_by(Product.product_code, Product.id)
                .limit(limit)
                .all()
            )

        return self._run("search_full_text", query)

    def sample(self, limit: int = 100) -> List[CatalogProduct]:
        def query(session: Session) -> List[Product]:
            return (
                session.query(Product)
                .order_by(Product.product_code, Product.id)
                .limit(limit)
                .all()
            )

        return self._run("sample", query)

    def _run(self, operation: str, query: Callable[[Session], List[Product]]) -> List[CatalogProduct]:
        """Execute a read query, retrying once on transient connection errors.

        Raises:
            CatalogUnavailableError: If the query (and its retry) fails
        """
        attempts = 2
        for attempt in range(1, attempts + 1):
            try:
                with self.session_factory() as session:
                    return [_to_snapshot(product) for product in query(session)]
            except DBAPIError as e:
                if attempt < attempts and _is_transient(e):
                    logger.warning(
                        f"Catalog query {operation} failed on transient error, retrying",
                        extra={"error_type": type(e).__name__},
                    )
                    continue
                logger.error(f"Catalog query {operation} failed: {e}")
                raise CatalogUnavailableError(f"Catalog query {operation} failed: {str(e)}") from e
