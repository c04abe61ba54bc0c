"""Unit tests for the exact matcher

Tests cover:
- Product code hits (confidence 1.0)
- Measurement pattern singleton hits (confidence 0.95)
- Ambiguous or missing signals (no result)
- Catalog failures propagating
"""

import pytest

from catalog.ports import CatalogUnavailableError
from matching.exact_matcher import ExactMatcher, CODE_MATCH_CONFIDENCE, PATTERN_MATCH_CONFIDENCE
from matching.normalizer import normalize
from matching.ports import MatchStrategy
from fixtures.matching_fakes import FakeCatalog


class TestCodeMatch:
    """Test lookups by extracted product code"""

    def test_known_code_is_certain(self, catalog, config):
        result = ExactMatcher(catalog, config).try_exact(normalize("NTG EF 63-50"))

        assert result is not None
        assert result.product.product_code == "NTG EF 63-50"
        assert result.confidence == CODE_MATCH_CONFIDENCE == 1.0
        assert result.strategy == MatchStrategy.EXACT
        assert result.reasoning == "Ürün kodu tam eşleşme: NTG EF 63-50"

    def test_code_lookup_is_case_insensitive(self, catalog, config):
        result = ExactMatcher(catalog, config).try_exact(normalize("ntg efm 75-40 lazım"))
        assert result.product.product_code == "NTG EFM 75-40"

    def test_unknown_code_falls_through_to_pattern(self, catalog, config):
        """Test a code miss still tries the measurement pattern"""
        result = ExactMatcher(catalog, config).try_exact(normalize("XYZ 75-40"))

        assert result is not None
        assert result.product.product_code == "NTG EFM 75-40"
        assert result.confidence == PATTERN_MATCH_CONFIDENCE
        assert catalog.called("search_by_code")
        assert catalog.called("search_by_pattern")


class TestPatternMatch:
    """Test the measurement pattern singleton path"""

    def test_unique_pattern_hit(self, catalog, config):
        result = ExactMatcher(catalog, config).try_exact(normalize("75-40"))

        assert result.product.product_code == "NTG EFM 75-40"
        assert result.confidence == 0.95
        assert result.reasoning == "Ölçü pattern eşleşme: 75-40"

    def test_ambiguous_pattern_is_left_to_lexical(self, catalog, config):
        """Test two rows containing 63-50 give no exact result"""
        assert ExactMatcher(catalog, config).try_exact(normalize("63-50")) is None

    def test_pattern_without_hits(self, catalog, config):
        assert ExactMatcher(catalog, config).try_exact(normalize("90-20")) is None


class TestNoSignal:
    """Test requests without code or pattern"""

    def test_keywords_only_skips_catalog(self, catalog, config):
        assert ExactMatcher(catalog, config).try_exact(normalize("servis te")) is None
        assert catalog.calls == []

    def test_catalog_failure_propagates(self, pipe_products, config):
        catalog = FakeCatalog(pipe_products, fail=True)

        with pytest.raises(CatalogUnavailableError):
            ExactMatcher(catalog, config).try_exact(normalize("NTG EF 63-50"))
