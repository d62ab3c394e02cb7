"""A/B summary pair endpoints."""

from fastapi import APIRouter, Depends, status

from .....core.services import ABSummaryService, IndexingService, default_style_guide
from ..deps import get_ab_summary_service, get_indexing_service
from ..models import (
    ABPairCreate,
    ABPairResponse,
    ABStatsResponse,
    ErrorResponse,
    FeedbackRequest,
)

router = APIRouter(prefix="/ab-pairs", tags=["ab-testing"])

_not_found = {404: {"model": ErrorResponse, "description": "Not found"}}


@router.post(
    "",
    response_model=ABPairResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_not_found, 500: {"model": ErrorResponse, "description": "Generation failed"}},
)
def create_pair(
    request: ABPairCreate,
    service: ABSummaryService = Depends(get_ab_summary_service),
    indexing: IndexingService = Depends(get_indexing_service),
) -> ABPairResponse:
    """Generate both summaries for a document. Blocks until both passes finish."""
    document = indexing.get_document(request.document_id)
    base = request.style_guide.to_domain() if request.style_guide else default_style_guide()
    pair = service.generate_pair(document, base)
    return ABPairResponse.from_domain(pair)


@router.get("", response_model=list[ABPairResponse])
def list_pairs(service: ABSummaryService = Depends(get_ab_summary_service)) -> list[ABPairResponse]:
    return [ABPairResponse.from_domain(pair) for pair in service.list_pairs()]


# Declared before "/{pair_id}" routes so "stats" is not read as an id
@router.get("/stats", response_model=ABStatsResponse)
def get_stats(service: ABSummaryService = Depends(get_ab_summary_service)) -> ABStatsResponse:
    stats = service.get_ab_testing_stats()
    return ABStatsResponse(
        total_tests=stats.total_tests,
        completed_tests=stats.completed_tests,
        variant_a_wins=stats.variant_a_wins,
        variant_b_wins=stats.variant_b_wins,
        completion_rate=stats.completion_rate,
    )


@router.get("/{pair_id}", response_model=ABPairResponse, responses=_not_found)
def get_pair(
    pair_id: str, service: ABSummaryService = Depends(get_ab_summary_service)
) -> ABPairResponse:
    return ABPairResponse.from_domain(service.get_pair(pair_id))


@router.post("/{pair_id}/feedback", response_model=ABPairResponse, responses=_not_found)
def record_feedback(
    pair_id: str,
    request: FeedbackRequest,
    service: ABSummaryService = Depends(get_ab_summary_service),
) -> ABPairResponse:
    """Record the preferred summary. Voting again replaces the earlier vote."""
    service.record_feedback(pair_id, request.winner, request.reason)
    return ABPairResponse.from_domain(service.get_pair(pair_id))
