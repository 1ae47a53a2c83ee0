import datetime as dt

from fastapi import APIRouter, Depends, HTTPException, Response

from cardwise.agents.orchestrator import CashbackOrchestrator
from cardwise.api.deps import get_orchestrator
from cardwise.domain.models import SpendingSummary, Transaction, TransactionDraft
from cardwise.engine.usage import calendar_month, summarize_spending

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("", response_model=list[Transaction])
def list_transactions(
    orchestrator: CashbackOrchestrator = Depends(get_orchestrator),
) -> list[Transaction]:
    return orchestrator.transaction_store.load_all()


@router.get("/summary", response_model=SpendingSummary)
def spending_summary(
    as_of: dt.date | None = None,
    orchestrator: CashbackOrchestrator = Depends(get_orchestrator),
) -> SpendingSummary:
    as_of = as_of or dt.date.today()
    in_month = calendar_month(as_of.year, as_of.month)
    return summarize_spending(
        txn for txn in orchestrator.transaction_store.load_all() if in_month(txn)
    )


@router.post("/analysis")
async def analyze(
    as_of: dt.date | None = None,
    orchestrator: CashbackOrchestrator = Depends(get_orchestrator),
) -> dict[str, str | None]:
    return {"analysis": await orchestrator.analyze_history(as_of)}


@router.post("", response_model=Transaction, status_code=201)
def create_transaction(
    draft: TransactionDraft,
    orchestrator: CashbackOrchestrator = Depends(get_orchestrator),
) -> Transaction:
    try:
        return orchestrator.save_transaction(draft)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.put("/{transaction_id}", response_model=Transaction)
def update_transaction(
    transaction_id: str,
    draft: TransactionDraft,
    orchestrator: CashbackOrchestrator = Depends(get_orchestrator),
) -> Transaction:
    try:
        return orchestrator.save_transaction(draft, transaction_id=transaction_id)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.delete("/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: str,
    orchestrator: CashbackOrchestrator = Depends(get_orchestrator),
) -> Response:
    try:
        orchestrator.remove_transaction(transaction_id)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return Response(status_code=204)
