from typing import Iterable

from cardwise.domain.models import Card, CardUsageStatus, Category, OptimizationResult
from cardwise.engine.evaluator import compute_rebate
from cardwise.engine.usage import accumulated_cashback


def evaluate_card(
    card: Card, amount: float, category: Category, usage: Iterable[CardUsageStatus]
) -> OptimizationResult:
    rebate = compute_rebate(card, amount, category, accumulated_cashback(usage, card.card_id))
    return OptimizationResult(
        card_id=card.card_id,
        card_name=card.card_name,
        cashback_amount=rebate.cashback,
        rate=rebate.rate,
        final_price=amount - rebate.cashback,
        reason=rebate.reason,
        is_maxed_out=rebate.cashback == 0 and amount > 0 and card.max_cashback > 0,
    )


def rank_cards(
    cards: list[Card],
    amount: float,
    category: Category,
    usage: list[CardUsageStatus] | None = None,
) -> list[OptimizationResult]:
    usage = usage or []
    evaluations = [evaluate_card(card, amount, category, usage) for card in cards]
    # list.sort is stable even with reverse=True: equal rebates keep catalog order.
    evaluations.sort(key=lambda item: item.cashback_amount, reverse=True)
    return evaluations
