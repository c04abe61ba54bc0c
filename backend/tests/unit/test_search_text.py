"""Unit tests for catalog search text composition"""

from models.product import Product
from catalog.search_text import build_search_text, search_text_for


class TestBuildSearchText:
    """Test whitespace-joined concatenation"""

    def test_joins_parts(self):
        assert build_search_text("EF Servis Te", "NTG EF 63-50", "63-50") == "EF Servis Te NTG EF 63-50 63-50"

    def test_skips_empty_parts(self):
        assert build_search_text("EF Manşon", None, "", "   ", "PE100") == "EF Manşon PE100"

    def test_collapses_inner_whitespace(self):
        assert build_search_text("EF  Servis\tTe", " SDR11 ") == "EF Servis Te SDR11"


class TestSearchTextFor:
    """Test composition from a product row"""

    def test_field_order(self):
        product = Product(
            product_type="EF Servis Te",
            product_code="NTG EF 110-63",
            diameter="110-63",
            description="Elektrofüzyon servis te",
            brand="Netgaz",
            material="PE100",
            pressure_class="SDR11",
        )

        assert search_text_for(product) == (
            "EF Servis Te NTG EF 110-63 110-63 Elektrofüzyon servis te Netgaz PE100 SDR11"
        )
