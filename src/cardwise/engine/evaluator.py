import math

from cardwise.domain.errors import InvalidInputError
from cardwise.domain.models import CapNote, Card, Category, RebateResult
from cardwise.engine.policies import resolve_rate


def format_vnd(value: float) -> str:
    return f"{value:,.0f}đ"


def _check_money(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value) or value < 0:
        raise InvalidInputError(f"{name} must be a non-negative number, got {value!r}")


def parse_category(value: Category | str) -> Category:
    try:
        return Category(value)
    except ValueError as exc:
        allowed = ", ".join(item.value for item in Category)
        raise InvalidInputError(f"Unknown category {value!r}; expected one of: {allowed}") from exc


def remaining_cap(card: Card, accumulated_cashback: float) -> float | None:
    """Cashback still payable this period, or None when the card is uncapped."""
    if card.max_cashback <= 0:
        return None
    return max(0.0, card.max_cashback - accumulated_cashback)


def compute_rebate(
    card: Card,
    amount: float,
    category: Category,
    accumulated_cashback: float = 0.0,
    *,
    pooled_unlocked: bool = True,
) -> RebateResult:
    _check_money("amount", amount)
    _check_money("accumulated_cashback", accumulated_cashback)
    category = parse_category(category)

    rule = resolve_rate(card, category, pooled_unlocked)
    if amount == 0:
        return RebateResult(cashback=0.0, rate=rule.rate, reason=rule.label)

    potential = amount * rule.rate
    cap_left = remaining_cap(card, accumulated_cashback)
    if cap_left is None:
        return RebateResult(cashback=potential, rate=rule.rate, reason=rule.label)

    if cap_left == 0:
        return RebateResult(
            cashback=0.0,
            rate=rule.rate,
            reason=f"{rule.label} (monthly cap exhausted, no cashback left this period)",
            cap_note=CapNote.EXHAUSTED,
        )

    if potential <= cap_left:
        return RebateResult(cashback=potential, rate=rule.rate, reason=rule.label)

    return RebateResult(
        cashback=cap_left,
        rate=rule.rate,
        reason=f"{rule.label} (partially capped: monthly cap reached, only {format_vnd(cap_left)} more)",
        cap_note=CapNote.PARTIAL,
    )
