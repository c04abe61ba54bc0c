"""Lexical match confidence scoring.

Three formulas, one per lexical search tier:

- Pattern only:        S = 0.9
- Pattern + keywords:  S = 0.7 + 0.2 * [pattern in text] + 0.1 * K
- Keyword full text:   S = 0.5 + 0.15 * N + 0.3 * [pattern in text] + 0.2 * K

where K = matched_keywords / total_keywords and N = number of request
numbers (duplicates counted) found among the product's numbers. Every score
is clamped to [0, 1].
"""

import re
from typing import Any, Dict

from catalog.ports import CatalogProduct
from .normalizer import fold_case
from .ports import ParsedRequest

_NUMBER = re.compile(r"\d+")

PATTERN_ONLY_SCORE = 0.9

PATTERN_BASE_SCORE = 0.7
PATTERN_SUBSTRING_BONUS = 0.2
PATTERN_KEYWORD_WEIGHT = 0.1

FULLTEXT_BASE_SCORE = 0.5
FULLTEXT_NUMBER_BONUS = 0.15
FULLTEXT_PATTERN_BONUS = 0.3
FULLTEXT_KEYWORD_WEIGHT = 0.2


def clamp_confidence(score: float) -> float:
    """Clamp to [0, 1], rounded to 4 places to keep float noise out of ties."""
    return round(max(0.0, min(1.0, score)), 4)


class MatchScorer:
    """Score catalog products against a parsed request."""

    def __init__(self, parsed: ParsedRequest):
        self.parsed = parsed
        self.pattern = parsed.measurement_pattern
        self._keywords = [fold_case(keyword) for keyword in parsed.keywords]

    def matched_keywords(self, product: CatalogProduct) -> int:
        """Number of request keywords contained in the product's search text."""
        text = fold_case(product.search_text or "")
        return sum(1 for keyword in self._keywords if keyword in text)

    def score_pattern_only(self, product: CatalogProduct) -> Dict[str, Any]:
        """Pattern hit with no disambiguating text: flat confidence."""
        return {
            "confidence": PATTERN_ONLY_SCORE,
            "features": {"pattern": self.pattern},
        }

    def score_pattern_keywords(self, product: CatalogProduct) -> Dict[str, Any]:
        """Pattern hit ranked by keyword overlap."""
        pattern_hit = bool(self.pattern) and self.pattern in (product.search_text or "")
        matched = self.matched_keywords(product)
        ratio = matched / len(self._keywords) if self._keywords else 0.0

        score = PATTERN_BASE_SCORE
        if pattern_hit:
            score += PATTERN_SUBSTRING_BONUS
        score += PATTERN_KEYWORD_WEIGHT * ratio

        return {
            "confidence": clamp_confidence(score),
            "features": {
                "pattern": self.pattern,
                "pattern_hit": pattern_hit,
                "matched_keywords": matched,
                "total_keywords": len(self._keywords),
            },
        }

    def score_full_text(self, product: CatalogProduct) -> Dict[str, Any]:
        """Full-text hit ranked by number, pattern and keyword overlap."""
        text = product.search_text or ""
        score = FULLTEXT_BASE_SCORE

        matched_numbers = 0
        pattern_hit = False
        if self.parsed.numbers:
            product_numbers = set(_NUMBER.findall(text))
            matched_numbers = sum(1 for number in self.parsed.numbers if number in product_numbers)
            score += FULLTEXT_NUMBER_BONUS * matched_numbers

            if self.pattern and self.pattern in text:
                pattern_hit = True
                score += FULLTEXT_PATTERN_BONUS

        matched = self.matched_keywords(product)
        ratio = matched / len(self._keywords) if self._keywords else 0.0
        score += FULLTEXT_KEYWORD_WEIGHT * ratio

        return {
            "confidence": clamp_confidence(score),
            "features": {
                "pattern": self.pattern,
                "pattern_hit": pattern_hit,
                "matched_numbers": matched_numbers,
                "total_numbers": len(self.parsed.numbers),
                "matched_keywords": matched,
                "total_keywords": len(self._keywords),
            },
        }
