from fastapi import APIRouter, Depends, HTTPException

from cardwise.agents.orchestrator import CashbackOrchestrator
from cardwise.api.deps import get_orchestrator
from cardwise.domain.models import CashFlowSummary, FinancialEvent, ShoppingPlan
from cardwise.engine.usage import cash_flow
from cardwise.schemas.requests import PlanRequest

router = APIRouter(tags=["plan"])


@router.post("/plan", response_model=ShoppingPlan)
def plan(
    request: PlanRequest,
    orchestrator: CashbackOrchestrator = Depends(get_orchestrator),
) -> ShoppingPlan:
    try:
        return orchestrator.plan(request)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/cash-flow", response_model=CashFlowSummary)
def cash_flow_summary(events: list[FinancialEvent]) -> CashFlowSummary:
    return cash_flow(events)
