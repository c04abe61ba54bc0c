"""Unit tests for the request normalizer

Tests cover:
- Product code detection on code-like requests
- Number and measurement pattern extraction
- Keyword extraction (stop words, digits, Turkish case folding)
- Purity (same input, same output; empty input never raises)
"""

from matching.normalizer import (
    normalize,
    fold_case,
    extract_numbers,
    extract_product_code,
    extract_keywords,
    STOP_WORDS,
)


class TestProductCode:
    """Test code-like substring detection"""

    def test_code_with_hyphenated_measurement(self):
        assert extract_product_code("NTG EF 63-50") == "NTG EF 63-50"

    def test_code_is_uppercased(self):
        assert extract_product_code("ntg ef 63-50 lazım") == "NTG EF 63-50"

    def test_code_inside_longer_request(self):
        """Test the code is found after leading words"""
        assert extract_product_code("NTG EF 110-63 EF SERVİS TE SDR11") == "NTG EF 110-63"

    def test_whitespace_inside_code_collapsed(self):
        assert extract_product_code("NTG   EF  63 50") == "NTG EF 63 50"

    def test_no_letters_before_digits(self):
        assert extract_product_code("63-50 servis te") is None

    def test_single_letter_prefix_is_not_a_code(self):
        assert extract_product_code("A 63-50") is None


class TestNumbersAndPattern:
    """Test number extraction and the derived measurement pattern"""

    def test_numbers_in_order(self):
        assert extract_numbers("110-63 SDR11") == ("110", "63", "11")

    def test_duplicates_kept(self):
        assert extract_numbers("63 63") == ("63", "63")

    def test_pattern_from_first_two_numbers(self):
        parsed = normalize("63-50 servis te")
        assert parsed.numbers == ("63", "50")
        assert parsed.measurement_pattern == "63-50"

    def test_pattern_ignores_original_separator(self):
        assert normalize("63 x 50 te").measurement_pattern == "63-50"

    def test_single_number_has_no_pattern(self):
        assert normalize("boru 50").measurement_pattern is None

    def test_fraction_yields_pattern(self):
        """Test "1/2 inç" style sizes produce a pattern like any number pair"""
        assert normalize("1/2 inç plastik boru").measurement_pattern == "1-2"


class TestKeywords:
    """Test keyword extraction"""

    def test_stop_words_removed(self):
        assert extract_keywords("bir adet servis te ve manşon") == ("servis", "te", "manşon")

    def test_numeric_and_short_tokens_removed(self):
        assert extract_keywords("63-50 a servis") == ("servis",)

    def test_unique_in_first_appearance_order(self):
        assert extract_keywords("te servis TE Servis") == ("te", "servis")

    def test_turkish_characters_survive(self):
        assert extract_keywords("Büyük boy redüksiyon lazım") == ("büyük", "boy", "redüksiyon", "lazım")

    def test_dotted_capital_i_folds_to_plain_i(self):
        assert extract_keywords("SERVİS TE") == ("servis", "te")
        assert fold_case("İSTANBUL") == "istanbul"

    def test_stop_word_set(self):
        assert {"bir", "ve", "ile", "için", "adet", "metre", "kg"} == set(STOP_WORDS)


class TestNormalize:
    """Test the combined parse"""

    def test_full_parse(self):
        parsed = normalize("NTG EF 110-63 EF SERVİS TE SDR11")

        assert parsed.raw_text == "NTG EF 110-63 EF SERVİS TE SDR11"
        assert parsed.extracted_code == "NTG EF 110-63"
        assert parsed.numbers == ("110", "63", "11")
        assert parsed.measurement_pattern == "110-63"
        assert parsed.keywords == ("ntg", "ef", "servis", "te", "sdr11")

    def test_empty_input_never_raises(self):
        parsed = normalize("")
        assert parsed.extracted_code is None
        assert parsed.numbers == ()
        assert parsed.keywords == ()
        assert parsed.measurement_pattern is None

    def test_none_input_treated_as_empty(self):
        assert normalize(None).raw_text == ""

    def test_pure(self):
        assert normalize("63-50 servis te") == normalize("63-50 servis te")
