"""Card assignment for a batch of planned purchases and pending bills.

Each candidate is assigned independently to the highest-rate card in a fixed
comparison set. Caps are not tracked across items, so the projected total can
overstate what capped cards will actually pay once they are used for several
items in the same month.
"""

import datetime as dt
import unicodedata
from dataclasses import dataclass
from typing import Iterable

from cardwise.domain.models import (
    Card,
    CardVariant,
    Category,
    EventType,
    FinancialEvent,
    PlanEntry,
    ShoppingItem,
    ShoppingPlan,
)
from cardwise.engine.evaluator import format_vnd
from cardwise.engine.policies import policy_for

POOLED_SPEND_THRESHOLD = 5_000_000.0

# Checked in order; the first keyword found wins.
_BILL_KEYWORDS: list[tuple[Category, tuple[str, ...]]] = [
    (Category.ELECTRICITY, ("dien", "electric")),
    (Category.WATER, ("nuoc", "water")),
    (Category.INTERNET, ("net", "wifi")),
]


@dataclass(frozen=True, slots=True)
class Candidate:
    item_id: str
    name: str
    amount: float
    category: Category
    date: dt.date
    source: str


def _fold(text: str) -> str:
    text = text.replace("đ", "d").replace("Đ", "D")
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).lower()


def classify_bill_category(title: str) -> Category:
    """Best-effort guess of a bill's category from its title.

    This is a keyword heuristic, not a classification: anything it does not
    recognise is treated as an online payment.
    """
    folded = _fold(title or "")
    for category, keywords in _BILL_KEYWORDS:
        if any(keyword in folded for keyword in keywords):
            return category
    return Category.ONLINE


def collect_candidates(
    items: Iterable[ShoppingItem], bills: Iterable[FinancialEvent]
) -> list[Candidate]:
    candidates = [
        Candidate(
            item_id=item.item_id,
            name=item.name,
            amount=item.estimated_price,
            category=item.category,
            date=item.planned_date,
            source="shopping",
        )
        for item in items
        if not item.is_purchased
    ]
    candidates.extend(
        Candidate(
            item_id=bill.event_id,
            name=bill.title,
            amount=bill.amount,
            category=classify_bill_category(bill.title),
            date=bill.date,
            source="bill",
        )
        for bill in bills
        if bill.event_type == EventType.EXPENSE and not bill.is_completed
    )
    return candidates


def comparison_set(cards: list[Card], threshold_reached: bool) -> list[Card]:
    """First card of each rewarding variant, in catalog order.

    The pooled card only competes when the batch reaches the threshold.
    """
    seen: set[CardVariant] = set()
    selected: list[Card] = []
    for card in cards:
        if card.variant == CardVariant.CASH or card.variant in seen:
            continue
        if policy_for(card).pooled and not threshold_reached:
            continue
        seen.add(card.variant)
        selected.append(card)
    return selected


def _plan_entry(candidate: Candidate, contenders: list[Card], threshold: float) -> PlanEntry:
    best_card: Card | None = None
    best_rate = -1.0
    for card in contenders:
        rate = policy_for(card).rule_for(candidate.category).rate
        if rate > best_rate:
            best_card, best_rate = card, rate

    if best_card is None:
        return PlanEntry(
            item_id=candidate.item_id,
            item_name=candidate.name,
            source=candidate.source,
            amount=candidate.amount,
            category=candidate.category,
            card_id=None,
            card_name=None,
            rate=0.0,
            cashback=0.0,
            reason="No rewarding card available",
        )

    pooled = policy_for(best_card).pooled
    if pooled:
        reason = f"Pooled spend reaches {format_vnd(threshold)}, unlocking {best_rate:.0%}"
    else:
        reason = f"Best rate for {candidate.category.value}: {best_rate:.1%}"

    return PlanEntry(
        item_id=candidate.item_id,
        item_name=candidate.name,
        source=candidate.source,
        amount=candidate.amount,
        category=candidate.category,
        card_id=best_card.card_id,
        card_name=best_card.card_name,
        rate=best_rate,
        cashback=candidate.amount * best_rate,
        reason=reason,
        pooled=pooled,
    )


def build_plan(
    items: Iterable[ShoppingItem],
    bills: Iterable[FinancialEvent],
    cards: list[Card],
    threshold: float = POOLED_SPEND_THRESHOLD,
) -> ShoppingPlan:
    candidates = collect_candidates(items, bills)
    total_spend = sum(candidate.amount for candidate in candidates)
    threshold_reached = total_spend >= threshold
    contenders = comparison_set(cards, threshold_reached)

    entries = [_plan_entry(candidate, contenders, threshold) for candidate in candidates]
    total_cashback = sum(entry.cashback for entry in entries)

    if threshold_reached:
        summary = (
            f"Batch total {format_vnd(total_spend)} reaches the {format_vnd(threshold)} "
            "minimum, so the pooled card's top rate applies."
        )
    else:
        summary = (
            f"Batch total {format_vnd(total_spend)} is below the {format_vnd(threshold)} "
            "minimum; each item uses its best per-category card."
        )

    return ShoppingPlan(
        entries=entries,
        total_spend=total_spend,
        total_projected_cashback=total_cashback,
        threshold=threshold,
        threshold_reached=threshold_reached,
        summary=summary,
    )
