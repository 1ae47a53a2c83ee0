from typing import Iterable

from cardwise.domain.models import Card, CardUsageStatus, Category, OptimizationResult, Transaction
from cardwise.engine.evaluator import format_vnd


def describe_card_status(cards: list[Card], usage: Iterable[CardUsageStatus]) -> str:
    by_id = {status.card_id: status for status in usage}
    parts: list[str] = []
    for card in cards:
        status = by_id.get(card.card_id)
        if card.max_cashback <= 0:
            parts.append(f"{card.card_name}: no monthly cap")
            continue
        left = status.remaining_cap if status and status.remaining_cap is not None else card.max_cashback
        parts.append(f"{card.card_name}: {format_vnd(left)} cap left")
    return ". ".join(parts)


def describe_ranking(amount: float, category: Category, ranking: list[OptimizationResult]) -> str:
    lines = [f"Purchase: {format_vnd(amount)} ({Category(category).value})"]
    for position, result in enumerate(ranking, start=1):
        line = f"{position}. {result.card_name}: +{format_vnd(result.cashback_amount)} ({result.reason})"
        if result.is_maxed_out:
            line += " [cap reached]"
        lines.append(line)
    return "\n".join(lines)


def describe_history(transactions: Iterable[Transaction]) -> str:
    return "\n".join(
        f"- {txn.date.isoformat()}: {txn.title} ({format_vnd(txn.amount)}) - "
        f"category {txn.category.value} - cashback {format_vnd(txn.cashback_earned)}"
        for txn in transactions
    )


def describe_usage(usage: Iterable[CardUsageStatus]) -> str:
    lines = []
    for status in usage:
        cap = "uncapped" if status.remaining_cap is None else f"{format_vnd(status.remaining_cap)} cap left"
        lines.append(f"- {status.card_id}: earned {format_vnd(status.total_cashback)}, {cap}")
    return "\n".join(lines)
