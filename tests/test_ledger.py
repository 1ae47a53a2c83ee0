import datetime as dt

import pytest

from conftest import CATALOG_PATH, make_txn
from cardwise.agents.orchestrator import CashbackOrchestrator
from cardwise.domain.errors import InvalidInputError
from cardwise.domain.models import Category, TransactionDraft
from cardwise.engine.ledger import record_transaction
from cardwise.engine.usage import calendar_month, derive_usage
from cardwise.repository.catalog_store import CatalogStore
from cardwise.repository.transaction_store import TransactionStore

OCTOBER = calendar_month(2026, 10)


def test_cashback_is_stamped_against_current_usage(cards) -> None:
    usage = derive_usage([make_txn("1", "vp-shopee-plat-h", 5_500_000, 550_000)], cards, OCTOBER)
    draft = TransactionDraft(
        title="Headphones",
        amount=1_000_000,
        category=Category.SHOPEE,
        card_id="vp-shopee-plat-h",
        date=dt.date(2026, 10, 19),
    )

    txn = record_transaction(draft, cards, usage, transaction_id="t-1")

    assert txn.transaction_id == "t-1"
    assert txn.cashback_earned == pytest.approx(50_000)
    assert txn.date == dt.date(2026, 10, 19)


def test_editing_does_not_count_its_own_cashback(cards) -> None:
    original = make_txn("1", "msb-online-h", 2_000_000, 200_000, Category.ONLINE)
    usage = derive_usage([original], cards, OCTOBER)
    draft = TransactionDraft(title="Bigger order", amount=2_500_000, category=Category.ONLINE, card_id="msb-online-h")

    txn = record_transaction(draft, cards, usage, transaction_id="1", replaced=original)

    assert txn.cashback_earned == pytest.approx(250_000)
    assert txn.date == original.date


def test_new_transaction_gets_an_id_and_today(cards) -> None:
    draft = TransactionDraft(title="Groceries", amount=300_000, category=Category.MARKET, card_id="cash-debit")

    txn = record_transaction(draft, cards, [])

    assert txn.transaction_id
    assert txn.date == dt.date.today()
    assert txn.cashback_earned == 0


def test_unknown_card_is_rejected(cards) -> None:
    draft = TransactionDraft(title="x", amount=1, category=Category.SHOPEE, card_id="nope")
    with pytest.raises(InvalidInputError):
        record_transaction(draft, cards, [])


def test_moving_an_edit_into_another_month_respects_that_months_cap(cards) -> None:
    september = make_txn("sep", "vp-shopee-plat-h", 5_000_000, 500_000, date=dt.date(2026, 9, 15))
    october = make_txn("oct", "vp-shopee-plat-h", 6_000_000, 600_000)
    usage = derive_usage([september, october], cards, OCTOBER)
    draft = TransactionDraft(
        title="Moved order",
        amount=1_000_000,
        category=Category.SHOPEE,
        card_id="vp-shopee-plat-h",
        date=dt.date(2026, 10, 10),
    )

    txn = record_transaction(draft, cards, usage, transaction_id="sep", replaced=september)

    assert txn.cashback_earned == 0
    after = derive_usage([txn, october], cards, OCTOBER)
    shopee = next(status for status in after if status.card_id == "vp-shopee-plat-h")
    assert shopee.total_cashback <= 600_000


def test_switching_card_does_not_free_the_new_cards_cap(cards) -> None:
    original = make_txn("1", "msb-online-h", 2_000_000, 200_000, Category.ONLINE)
    capped = make_txn("2", "vp-shopee-plat-h", 6_000_000, 600_000)
    usage = derive_usage([original, capped], cards, OCTOBER)
    draft = TransactionDraft(title="Moved card", amount=1_000_000, category=Category.SHOPEE, card_id="vp-shopee-plat-h")

    txn = record_transaction(draft, cards, usage, transaction_id="1", replaced=original)

    assert txn.cashback_earned == 0
    after = derive_usage([txn, capped], cards, OCTOBER)
    shopee = next(status for status in after if status.card_id == "vp-shopee-plat-h")
    assert shopee.total_cashback == pytest.approx(600_000)


def test_orchestrator_edit_across_months_keeps_cap(tmp_path) -> None:
    orchestrator = CashbackOrchestrator(
        CatalogStore(str(CATALOG_PATH)), TransactionStore(str(tmp_path / "transactions.json"))
    )

    def draft(amount: float, day: dt.date) -> TransactionDraft:
        return TransactionDraft(
            title="Shopee order", amount=amount, category=Category.SHOPEE, card_id="vp-shopee-plat-h", date=day
        )

    september = orchestrator.save_transaction(draft(5_000_000, dt.date(2026, 9, 20)))
    orchestrator.save_transaction(draft(6_000_000, dt.date(2026, 10, 2)))
    edited = orchestrator.save_transaction(
        draft(1_000_000, dt.date(2026, 10, 10)), transaction_id=september.transaction_id
    )

    assert edited.cashback_earned == 0
    usage = {status.card_id: status for status in orchestrator.usage(dt.date(2026, 10, 31))}
    assert usage["vp-shopee-plat-h"].total_cashback <= 600_000
    assert orchestrator.usage(dt.date(2026, 9, 1))[0].total_cashback == 0
