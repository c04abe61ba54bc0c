"""Integration tests for the SQL catalog repository

Runs against in-memory SQLite, which exercises the ILIKE paths of every
lookup (PostgreSQL text search is only used on the postgresql dialect).

Tests cover:
- Code, pattern and keyword lookups
- Deterministic ordering and limits
- LIKE wildcard escaping
- Single retry on transient connection errors
- Search text refresh
"""

from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError, ProgrammingError

from catalog.ports import CatalogProduct, CatalogUnavailableError
from catalog.repository import SqlCatalogRepository
from catalog.search_text import build_search_text, refresh_search_text
from models.product import Product


def add_product(session, product_code, product_type="EF Servis Te", diameter=None, description=None):
    product = Product(
        product_type=product_type,
        product_code=product_code,
        diameter=diameter,
        description=description,
        search_text=build_search_text(product_type, product_code, diameter, description),
        base_price=Decimal("125.50"),
        unit="adet",
    )
    session.add(product)
    return product


@pytest.fixture
def seeded(session_factory):
    with session_factory() as session:
        add_product(session, "NTG EFR 63-50", "EF Redüksiyon", "63-50", "Elektrofüzyon redüksiyon")
        add_product(session, "NTG EF 63-50", "EF Servis Te", "63-50", "Elektrofuzyon servis te")
        add_product(session, "NTG EFM 75-40", "EF Manşon", "75-40", "Elektrofuzyon manson 100%")
        session.commit()
    return session_factory


@pytest.fixture
def repository(seeded):
    return SqlCatalogRepository(seeded)


class FlakySessionFactory:
    """Raise the given error for the first ``failures`` sessions."""

    def __init__(self, factory, error, failures=1):
        self.factory = factory
        self.error = error
        self.failures = failures
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.failures > 0:
            self.failures -= 1
            raise self.error
        return self.factory()


class TestLookups:
    """Test each read operation"""

    def test_search_by_code(self, repository):
        results = repository.search_by_code("ntg ef 63-50", limit=1)

        assert len(results) == 1
        assert isinstance(results[0], CatalogProduct)
        assert results[0].product_code == "NTG EF 63-50"
        assert results[0].base_price == Decimal("125.50")

    def test_search_by_pattern_ordered_by_code(self, repository):
        results = repository.search_by_pattern("63-50")
        assert [p.product_code for p in results] == ["NTG EF 63-50", "NTG EFR 63-50"]

    def test_search_by_pattern_limit(self, repository):
        assert len(repository.search_by_pattern("NTG", limit=2)) == 2

    def test_full_text_is_conjunctive(self, repository):
        results = repository.search_full_text(["servis", "te"])
        assert [p.product_code for p in results] == ["NTG EF 63-50"]

        assert repository.search_full_text(["servis", "manson"]) == []

    def test_full_text_without_keywords(self, repository):
        assert repository.search_full_text([]) == []

    def test_sample(self, repository):
        assert [p.product_code for p in repository.sample(limit=2)] == ["NTG EF 63-50", "NTG EFM 75-40"]

    def test_wildcards_are_literal(self, repository):
        assert repository.search_by_pattern("_0%") == []
        assert [p.product_code for p in repository.search_by_pattern("100%")] == ["NTG EFM 75-40"]

    def test_snapshots_are_read_only(self, repository):
        product = repository.search_by_code("NTG EFM 75-40")[0]
        with pytest.raises(FrozenInstanceError):
            product.product_code = "changed"


class TestRetry:
    """Test transient error handling"""

    def test_transient_error_retried_once(self, seeded):
        error = OperationalError("SELECT", {}, Exception("server closed the connection unexpectedly"))
        factory = FlakySessionFactory(seeded, error, failures=1)

        results = SqlCatalogRepository(factory).search_by_pattern("75-40")

        assert [p.product_code for p in results] == ["NTG EFM 75-40"]
        assert factory.calls == 2

    def test_persistent_error_raises(self, seeded):
        error = OperationalError("SELECT", {}, Exception("could not connect to server"))
        factory = FlakySessionFactory(seeded, error, failures=5)

        with pytest.raises(CatalogUnavailableError):
            SqlCatalogRepository(factory).search_by_pattern("75-40")
        assert factory.calls == 2

    def test_non_transient_error_not_retried(self, seeded):
        error = ProgrammingError("SELECT", {}, Exception("relation products does not exist"))
        factory = FlakySessionFactory(seeded, error, failures=1)

        with pytest.raises(CatalogUnavailableError):
            SqlCatalogRepository(factory).sample()
        assert factory.calls == 1


class TestRefreshSearchText:
    """Test search text rebuild"""

    def test_only_stale_rows_updated(self, seeded):
        with seeded() as session:
            stale = session.query(Product).filter_by(product_code="NTG EF 63-50").one()
            stale.brand = "Netgaz"
            session.commit()

        with seeded() as session:
            updated = refresh_search_text(session)
            session.commit()

        assert updated == 1
        with seeded() as session:
            product = session.query(Product).filter_by(product_code="NTG EF 63-50").one()
            assert product.search_text.endswith("Netgaz")
