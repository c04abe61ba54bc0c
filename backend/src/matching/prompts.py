"""LLM prompt templates for the generative fallback matcher."""

from typing import Sequence

from catalog.ports import CatalogProduct

PRODUCT_MATCH_V1_SYSTEM = "Sen bir ürün eşleştirme asistanısın. Sadece JSON formatında yanıt ver."

PRODUCT_MATCH_V1_USER = """Müşteri Talebi: "{{customer_request}}"

Aday Ürünler ({{candidate_count}} adet):
{{candidate_lines}}

En uygun ürünü seç ve güven skoru ver (0-1).
ÖNEMLİ: product_id olarak yukarıdaki UUID'yi kullan.

Sadece JSON formatında cevap ver:
{
  "product_id": "uuid-buraya",
  "confidence": 0.95,
  "reasoning": "Kısa açıklama"
}"""


def format_candidate_line(index: int, product: CatalogProduct) -> str:
    """One numbered candidate row: ID, code, type, size."""
    return (
        f"{index}. ID: {product.id} | Kod: {product.product_code} | "
        f"Tip: {product.product_type} | Çap: {product.diameter or '-'}"
    )


def build_product_match_prompt(
    customer_request: str,
    candidates: Sequence[CatalogProduct]
) -> tuple[str, str]:
    """Build product selection prompt from template.

    Args:
        customer_request: Raw customer request text
        candidates: Candidate products offered to the oracle

    Returns:
        Tuple of (system_prompt, user_prompt)
    """
    candidate_lines = "\n".join(
        format_candidate_line(index, product)
        for index, product in enumerate(candidates, start=1)
    )

    user_prompt = PRODUCT_MATCH_V1_USER.replace("{{customer_request}}", customer_request)
    user_prompt = user_prompt.replace("{{candidate_count}}", str(len(candidates)))
    user_prompt = user_prompt.replace("{{candidate_lines}}", candidate_lines)

    return PRODUCT_MATCH_V1_SYSTEM, user_prompt
