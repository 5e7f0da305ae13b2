from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.dependencies import consume_path_feature, require_quota
from app.models.plan import MeteredFeature
from app.services.quota import QuotaDecision
from app.utils import responses

router = APIRouter(
    tags=["Metered"],
    responses={401: responses._401, 402: responses._402, 403: responses._403},
)


class MeteredResponse(BaseModel):
    feature: MeteredFeature
    used: int
    quota: int
    remaining: Optional[int] = None


class SearchResponse(BaseModel):
    results: List[dict]
    query: Optional[str] = None
    used: int


def _metered_response(decision: QuotaDecision) -> MeteredResponse:
    return MeteredResponse(
        feature=decision.feature,
        used=decision.used,
        quota=decision.quota,
        remaining=decision.remaining,
    )


@router.get("/metered/{feature}", response_model=MeteredResponse)
def use_metered_feature(decision: QuotaDecision = Depends(consume_path_feature)):
    """Consume one unit of a metered feature."""
    return _metered_response(decision)


@router.get("/ia/search", response_model=SearchResponse)
def ia_search(
    q: Optional[str] = None,
    decision: QuotaDecision = Depends(require_quota(MeteredFeature.ia_search)),
):
    """AI accommodation search. Results come from external providers and are empty here."""
    return SearchResponse(results=[], query=q, used=decision.used)


@router.get("/ia/suggestions", response_model=SearchResponse)
def ia_suggestions(
    decision: QuotaDecision = Depends(require_quota(MeteredFeature.suggestion)),
):
    return SearchResponse(results=[], used=decision.used)
