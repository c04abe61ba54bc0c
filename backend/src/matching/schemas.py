"""Pydantic schemas for matching endpoints and the oracle response."""

from decimal import Decimal
from typing import Optional, List, Dict, Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .ports import MatchCandidate, MatchDecision


class OracleSelection(BaseModel):
    """Strict shape of the oracle's answer.

    Anything that does not validate is treated as a malformed response.
    """
    model_config = ConfigDict(extra="ignore")

    product_id: UUID
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: str = ""


class MatchRequestSchema(BaseModel):
    """Input schema for a single match request."""
    customer_request: str = Field(min_length=1)
    company_id: Optional[UUID] = None


class MatchBatchRequestSchema(BaseModel):
    """Input schema for matching several request lines at once."""
    requests: List[str] = Field(min_length=1, max_length=100)
    company_id: Optional[UUID] = None


class ProductSummarySchema(BaseModel):
    """Catalog product fields shown next to a candidate."""
    id: UUID
    product_code: str
    product_type: str
    diameter: Optional[str]
    description: Optional[str]
    base_price: Optional[Decimal]
    currency: str
    unit: Optional[str]


class MatchCandidateSchema(BaseModel):
    """Match candidate with confidence and justification."""
    product_id: UUID
    product: ProductSummarySchema
    confidence: float = Field(ge=0.0, le=1.0)
    strategy: str
    reasoning: str
    execution_time_ms: int
    tokens_used: Optional[int] = None
    features: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_candidate(cls, candidate: MatchCandidate) -> "MatchCandidateSchema":
        product = candidate.product
        return cls(
            product_id=product.id,
            product=ProductSummarySchema(
                id=product.id,
                product_code=product.product_code,
                product_type=product.product_type,
                diameter=product.diameter,
                description=product.description,
                base_price=product.base_price,
                currency=product.currency,
                unit=product.unit,
            ),
            confidence=candidate.confidence,
            strategy=candidate.strategy.value,
            reasoning=candidate.reasoning,
            execution_time_ms=candidate.elapsed_ms,
            tokens_used=candidate.tokens_used,
            features=candidate.features,
        )


class ParsedRequestSchema(BaseModel):
    """Signals extracted from the request (debug aid for the UI)."""
    original_request: str
    product_code: Optional[str]
    numbers: List[str]
    keywords: List[str]
    measurement_pattern: Optional[str]


class MatchDecisionSchema(BaseModel):
    """Result of matching one request line."""
    matched: List[MatchCandidateSchema]
    is_multi_match: bool
    multi_match_message: Optional[str] = None
    message: Optional[str] = None
    strategy: str
    method: str
    total_time_ms: int
    parsed: ParsedRequestSchema
    diagnostics: List[str] = Field(default_factory=list)

    @classmethod
    def from_decision(cls, decision: MatchDecision) -> "MatchDecisionSchema":
        parsed = decision.parsed
        return cls(
            matched=[MatchCandidateSchema.from_candidate(c) for c in decision.candidates],
            is_multi_match=decision.multi_match,
            multi_match_message=decision.multi_match_message,
            message=decision.message,
            strategy=decision.strategy.value,
            method=decision.method.value,
            total_time_ms=decision.elapsed_ms,
            parsed=ParsedRequestSchema(
                original_request=parsed.raw_text,
                product_code=parsed.extracted_code,
                numbers=list(parsed.numbers),
                keywords=list(parsed.keywords),
                measurement_pattern=parsed.measurement_pattern,
            ),
            diagnostics=decision.diagnostics,
        )


class MatchBatchResponseSchema(BaseModel):
    """Decisions for a batch, in request order."""
    results: List[MatchDecisionSchema]
    total: int
