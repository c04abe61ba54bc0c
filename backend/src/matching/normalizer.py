"""Request normalizer: extracts matching signals from free-text requests.

These are regex heuristics tuned on pipe-fitting requests such as
"NTG EF 63-50", "63-50 servis te" or "1/2 inç plastik boru 50 metre".
They are approximate by nature; behaviour outside the cases covered by the
tests is not a requirement.
"""

import re

from .ports import ParsedRequest

_NUMBER = re.compile(r"\d+")

# Letter groups (first one >= 2 letters) followed by digit groups joined by a
# hyphen or space. Applied to the uppercased request.
_PRODUCT_CODE = re.compile(r"[A-Z]{2,}\s*[A-Z]*\s*\d+[-\s]\d+")

_WHITESPACE = re.compile(r"\s+")

# Everything that is not a letter or digit separates tokens. Turkish letters
# (ç, ğ, ı, ö, ş, ü) are word characters and survive.
_TOKEN_SEPARATOR = re.compile(r"[\W_]+")

# "bir" (a), "ve" (and), "ile" (with), "için" (for), "adet" (piece),
# "metre" (meter), "kg"
STOP_WORDS = frozenset({"bir", "ve", "ile", "için", "adet", "metre", "kg"})


def fold_case(text: str) -> str:
    """Lowercase text, keeping Turkish diacritics.

    ``str.lower`` turns "İ" into "i" plus a combining dot, which would never
    match catalog text, so the dotted capital is mapped first.
    """
    return text.replace("İ", "i").lower()


def extract_numbers(text: str) -> tuple[str, ...]:
    """All maximal digit runs, in order of appearance."""
    return tuple(_NUMBER.findall(text))


def extract_product_code(text: str) -> str | None:
    """Detect a code-like substring such as "NTG EF 63-50".

    Returns:
        The uppercased match with whitespace collapsed, or None
    """
    match = _PRODUCT_CODE.search(text.upper().strip())
    if not match:
        return None
    return _WHITESPACE.sub(" ", match.group(0)).strip()


def extract_keywords(text: str) -> tuple[str, ...]:
    """Unique keywords in order of first appearance.

    Drops tokens of one character, stop words and purely numeric tokens.
    """
    keywords: list[str] = []
    for token in _TOKEN_SEPARATOR.split(fold_case(text.strip())):
        if len(token) <= 1 or token in STOP_WORDS or token.isdigit():
            continue
        if token not in keywords:
            keywords.append(token)
    return tuple(keywords)


def normalize(raw: str) -> ParsedRequest:
    """Parse a raw customer request. Pure, never raises.

    Example:
        >>> parsed = normalize("63-50 servis te")
        >>> parsed.numbers, parsed.measurement_pattern, parsed.keywords
        (('63', '50'), '63-50', ('servis', 'te'))
    """
    raw = raw or ""
    return ParsedRequest(
        raw_text=raw,
        extracted_code=extract_product_code(raw),
        numbers=extract_numbers(raw),
        keywords=extract_keywords(raw),
    )
