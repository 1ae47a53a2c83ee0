import pytest

from cardwise.domain.errors import InvalidInputError
from cardwise.domain.models import CapNote, Card, CardVariant, Category
from cardwise.engine.evaluator import compute_rebate, remaining_cap
from cardwise.engine.policies import resolve_rate


def _card(variant: CardVariant, max_cashback: float = 0, card_id: str = "test-card") -> Card:
    return Card(card_id=card_id, card_name=card_id, bank="Test", variant=variant, max_cashback=max_cashback)


def test_shopee_platinum_partial_cap_scenario(card_by_id) -> None:
    card = card_by_id["vp-shopee-plat-h"]

    result = compute_rebate(card, 1_000_000, Category.SHOPEE, 550_000)

    assert result.rate == pytest.approx(0.10)
    assert result.cashback == pytest.approx(50_000)
    assert result.cap_note == CapNote.PARTIAL
    assert "partially capped" in result.reason


def test_cap_exhausted_pays_nothing_and_says_so(card_by_id) -> None:
    card = card_by_id["msb-online-h"]

    result = compute_rebate(card, 2_000_000, Category.ONLINE, 300_000)

    assert result.cashback == 0
    assert result.cap_note == CapNote.EXHAUSTED
    assert "cap exhausted" in result.reason


@pytest.mark.parametrize("accumulated", [0, 300_000, 10_000_000])
def test_accumulated_beyond_cap_always_yields_zero(card_by_id, accumulated) -> None:
    card = card_by_id["tcb-everyday"]
    result = compute_rebate(card, 5_000_000, Category.SUPERMARKET, 200_000 + accumulated)
    assert result.cashback == 0


@pytest.mark.parametrize("accumulated", [0, 1_000_000, 99_000_000])
def test_uncapped_card_pays_full_rate(card_by_id, accumulated) -> None:
    card = card_by_id["vp-s-rewards-h"]

    result = compute_rebate(card, 3_000_000, Category.MARKET, accumulated)

    assert result.cashback == pytest.approx(3_000_000 * 0.12)
    assert result.cap_note == CapNote.NONE


def test_cash_card_never_pays(card_by_id) -> None:
    cash = card_by_id["cash-debit"]
    for category in Category:
        result = compute_rebate(cash, 1_234_567, category, 0)
        assert result.cashback == 0
        assert result.rate == 0


def test_zero_amount_is_valid_and_has_no_cap_note(card_by_id) -> None:
    card = card_by_id["vp-shopee-plat-h"]

    result = compute_rebate(card, 0, Category.SHOPEE, 600_000)

    assert result.cashback == 0
    assert result.rate == pytest.approx(0.10)
    assert result.cap_note == CapNote.NONE
    assert "cap" not in result.reason


def test_rebate_bounded_by_rate_and_remaining_cap(cards) -> None:
    amounts = [0, 1, 150_000, 2_500_000, 9_000_000]
    accumulations = [0, 100_000, 250_000, 599_999, 800_000]
    for card in cards:
        for category in Category:
            for amount in amounts:
                for accumulated in accumulations:
                    result = compute_rebate(card, amount, category, accumulated)
                    assert 0 <= result.cashback <= amount * result.rate
                    cap_left = remaining_cap(card, accumulated)
                    if cap_left is not None:
                        assert result.cashback <= cap_left


def test_same_inputs_give_same_result(card_by_id) -> None:
    card = card_by_id["msb-online-l"]
    first = compute_rebate(card, 750_000, Category.ONLINE, 120_000)
    second = compute_rebate(card, 750_000, Category.ONLINE, 120_000)
    assert first == second


def test_policy_table_rates() -> None:
    shopee = _card(CardVariant.SHOPEE_PLATINUM)
    msb = _card(CardVariant.MSB_ONLINE)
    tcb = _card(CardVariant.TCB_EVERYDAY)

    assert resolve_rate(shopee, Category.ELECTRICITY).rate == pytest.approx(0.10)
    assert resolve_rate(shopee, Category.SUPERMARKET).rate == pytest.approx(0.001)
    assert resolve_rate(msb, Category.SHOPEE).rate == pytest.approx(0.10)
    assert resolve_rate(msb, Category.WATER).rate == pytest.approx(0.001)
    assert resolve_rate(tcb, Category.SUPERMARKET).rate == pytest.approx(0.05)
    assert resolve_rate(tcb, Category.MARKET).rate == pytest.approx(0.005)
    assert resolve_rate(_card(CardVariant.GENERIC), Category.SHOPEE).rate == pytest.approx(0.005)


def test_pooled_card_rate_depends_on_unlock() -> None:
    pooled = _card(CardVariant.S_REWARDS)

    assert compute_rebate(pooled, 1_000_000, Category.ONLINE).rate == pytest.approx(0.12)
    locked = compute_rebate(pooled, 1_000_000, Category.ONLINE, pooled_unlocked=False)
    assert locked.rate == pytest.approx(0.001)
    assert locked.cashback == pytest.approx(1_000)


@pytest.mark.parametrize("amount", [-1, float("nan"), float("inf"), "100"])
def test_invalid_amount_is_rejected(card_by_id, amount) -> None:
    with pytest.raises(InvalidInputError):
        compute_rebate(card_by_id["tcb-everyday"], amount, Category.SHOPEE, 0)


def test_negative_accumulated_is_rejected(card_by_id) -> None:
    with pytest.raises(InvalidInputError):
        compute_rebate(card_by_id["tcb-everyday"], 100, Category.SHOPEE, -5)


def test_unknown_category_is_rejected(card_by_id) -> None:
    with pytest.raises(InvalidInputError):
        compute_rebate(card_by_id["tcb-everyday"], 100, "Casino", 0)


def test_category_accepts_plain_string(card_by_id) -> None:
    result = compute_rebate(card_by_id["tcb-everyday"], 1_000_000, "Supermarket", 0)
    assert result.cashback == pytest.approx(50_000)
