import datetime as dt
from pathlib import Path

import pytest

from cardwise.domain.models import Card, Category, Transaction
from cardwise.repository.catalog_store import CatalogStore

PROJECT_ROOT = Path(__file__).resolve().parents[1]
CATALOG_PATH = PROJECT_ROOT / "data" / "cards" / "my_cards.json"


@pytest.fixture
def cards() -> list[Card]:
    return CatalogStore(str(CATALOG_PATH)).load_cards()


@pytest.fixture
def card_by_id(cards):
    return {card.card_id: card for card in cards}


def make_txn(
    txn_id: str,
    card_id: str,
    amount: float,
    cashback: float = 0.0,
    category: Category = Category.SHOPEE,
    date: dt.date = dt.date(2026, 10, 5),
) -> Transaction:
    return Transaction(
        transaction_id=txn_id,
        date=date,
        title=f"purchase {txn_id}",
        amount=amount,
        category=category,
        card_id=card_id,
        cashback_earned=cashback,
    )
