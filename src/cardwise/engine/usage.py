import datetime as dt
import logging
import math
from collections import defaultdict
from typing import Callable, Iterable

from cardwise.domain.models import (
    Card,
    CardUsageStatus,
    CashFlowSummary,
    EventType,
    FinancialEvent,
    SpendingSummary,
    Transaction,
)
from cardwise.engine.evaluator import remaining_cap

logger = logging.getLogger(__name__)

PeriodFilter = Callable[[Transaction], bool]


def calendar_month(year: int, month: int) -> PeriodFilter:
    def _in_month(txn: Transaction) -> bool:
        return txn.date.year == year and txn.date.month == month

    return _in_month


def current_month(today: dt.date | None = None) -> PeriodFilter:
    today = today or dt.date.today()
    return calendar_month(today.year, today.month)


def derive_usage(
    transactions: Iterable[Transaction],
    cards: list[Card],
    in_period: PeriodFilter,
) -> list[CardUsageStatus]:
    """Project the transaction snapshot onto one usage status per catalog card."""
    known_ids = {card.card_id for card in cards}
    amounts: dict[str, list[float]] = defaultdict(list)
    cashbacks: dict[str, list[float]] = defaultdict(list)

    for txn in transactions:
        if not in_period(txn):
            continue
        if txn.card_id not in known_ids:
            logger.warning("Skipping transaction %s for unknown card %s", txn.transaction_id, txn.card_id)
            continue
        amounts[txn.card_id].append(txn.amount)
        cashbacks[txn.card_id].append(txn.cashback_earned)

    statuses: list[CardUsageStatus] = []
    for card in cards:
        # fsum is exactly rounded, so totals do not depend on input order.
        total_spent = math.fsum(amounts[card.card_id])
        total_cashback = math.fsum(cashbacks[card.card_id])
        statuses.append(
            CardUsageStatus(
                card_id=card.card_id,
                card_name=card.card_name,
                total_spent=total_spent,
                total_cashback=total_cashback,
                min_spend=card.min_spend,
                met_min_spend=total_spent >= card.min_spend,
                remaining_min_spend=max(0.0, card.min_spend - total_spent),
                remaining_cap=remaining_cap(card, total_cashback),
                transaction_count=len(amounts[card.card_id]),
            )
        )
    return statuses


def accumulated_cashback(usage: Iterable[CardUsageStatus], card_id: str) -> float:
    return next((status.total_cashback for status in usage if status.card_id == card_id), 0.0)


def priority_card(usage: Iterable[CardUsageStatus]) -> CardUsageStatus | None:
    """Card still short of its minimum spend with the smallest gap left."""
    pending = [status for status in usage if status.min_spend > 0 and not status.met_min_spend]
    if not pending:
        return None
    return min(pending, key=lambda status: status.remaining_min_spend)


def summarize_spending(transactions: Iterable[Transaction]) -> SpendingSummary:
    total_spent = 0.0
    total_cashback = 0.0
    by_category: dict[str, dict[str, float]] = {}
    by_day: dict[dt.date, float] = defaultdict(float)

    for txn in transactions:
        total_spent += txn.amount
        total_cashback += txn.cashback_earned
        bucket = by_category.setdefault(txn.category.value, {"spent": 0.0, "cashback": 0.0})
        bucket["spent"] += txn.amount
        bucket["cashback"] += txn.cashback_earned
        by_day[txn.date] += txn.amount

    effective_rate = total_cashback / total_spent if total_spent > 0 else 0.0
    return SpendingSummary(
        total_spent=total_spent,
        total_cashback=total_cashback,
        effective_rate=effective_rate,
        by_category=by_category,
        by_day=dict(by_day),
    )


def cash_flow(events: Iterable[FinancialEvent]) -> CashFlowSummary:
    events = list(events)
    pending = [event for event in events if not event.is_completed]
    return CashFlowSummary(
        pending_income=sum(e.amount for e in pending if e.event_type == EventType.INCOME),
        pending_expense=sum(e.amount for e in pending if e.event_type == EventType.EXPENSE),
        events=sorted(events, key=lambda event: event.date),
    )
