from fastapi import APIRouter, Depends, HTTPException

from cardwise.agents.orchestrator import CashbackOrchestrator
from cardwise.api.deps import get_orchestrator
from cardwise.schemas.requests import RecommendRequest
from cardwise.schemas.responses import RecommendResponse

router = APIRouter(tags=["recommend"])


@router.post("/recommend", response_model=RecommendResponse)
async def recommend(
    request: RecommendRequest,
    orchestrator: CashbackOrchestrator = Depends(get_orchestrator),
) -> RecommendResponse:
    try:
        return await orchestrator.recommend_with_advice(request)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
