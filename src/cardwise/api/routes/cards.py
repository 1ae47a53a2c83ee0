import datetime as dt

from fastapi import APIRouter, Depends

from cardwise.agents.orchestrator import CashbackOrchestrator
from cardwise.api.deps import get_orchestrator
from cardwise.domain.models import Card
from cardwise.engine.usage import priority_card
from cardwise.schemas.responses import UsageResponse

router = APIRouter(tags=["cards"])


@router.get("/cards", response_model=list[Card])
def list_cards(orchestrator: CashbackOrchestrator = Depends(get_orchestrator)) -> list[Card]:
    return orchestrator.cards


@router.get("/usage", response_model=UsageResponse)
def usage(
    as_of: dt.date | None = None,
    orchestrator: CashbackOrchestrator = Depends(get_orchestrator),
) -> UsageResponse:
    statuses = orchestrator.usage(as_of)
    return UsageResponse(cards=statuses, priority_card=priority_card(statuses))
