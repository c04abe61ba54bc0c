"""Matching API endpoints.

One request per customer line item; the batch endpoint serves bulk import
and OCR pipelines that submit whole quotations at once.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from catalog.ports import CatalogUnavailableError
from dependencies import get_orchestrator
from .ports import MatcherPort, InvalidMatchRequestError
from .schemas import (
    MatchRequestSchema,
    MatchBatchRequestSchema,
    MatchDecisionSchema,
    MatchBatchResponseSchema,
)


router = APIRouter(prefix="/api/v1/matching", tags=["matching"])


def _context(company_id) -> dict:
    return {"company_id": str(company_id)} if company_id else {}


@router.post("/match", response_model=MatchDecisionSchema)
def match_product(
    request: MatchRequestSchema,
    matcher: MatcherPort = Depends(get_orchestrator)
):
    """Match a free-text customer request to catalog products.

    Uses the tiered pipeline (exact -> lexical -> generative fallback).

    Args:
        request: Customer request line and optional company
        matcher: Shared match orchestrator

    Returns:
        MatchDecision with ranked candidates

    Raises:
        HTTPException 400: Empty request text
        HTTPException 503: Catalog unavailable
    """
    try:
        decision = matcher.match(request.customer_request, _context(request.company_id))
    except InvalidMatchRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except CatalogUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Ürün bulunamadı: katalog şu anda erişilemiyor ({str(e)})"
        )

    return MatchDecisionSchema.from_decision(decision)


@router.post("/match-batch", response_model=MatchBatchResponseSchema)
def match_products_batch(
    request: MatchBatchRequestSchema,
    matcher: MatcherPort = Depends(get_orchestrator)
):
    """Match several request lines; results keep the input order.

    Raises:
        HTTPException 400: Any empty request line
        HTTPException 503: Catalog unavailable
    """
    try:
        decisions = matcher.match_batch(request.requests, _context(request.company_id))
    except InvalidMatchRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except CatalogUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Ürün bulunamadı: katalog şu anda erişilemiyor ({str(e)})"
        )

    return MatchBatchResponseSchema(
        results=[MatchDecisionSchema.from_decision(d) for d in decisions],
        total=len(decisions)
    )
