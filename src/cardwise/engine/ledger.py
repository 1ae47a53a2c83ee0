"""Cashback stamping for transactions at save time."""

import datetime as dt
import uuid

from cardwise.domain.errors import InvalidInputError
from cardwise.domain.models import Card, CardUsageStatus, Transaction, TransactionDraft
from cardwise.engine.evaluator import compute_rebate
from cardwise.engine.usage import accumulated_cashback


def find_card(cards: list[Card], card_id: str) -> Card:
    for card in cards:
        if card.card_id == card_id:
            return card
    raise InvalidInputError(f"Unknown card id: {card_id}")


def record_transaction(
    draft: TransactionDraft,
    cards: list[Card],
    usage: list[CardUsageStatus],
    transaction_id: str | None = None,
    replaced: Transaction | None = None,
) -> Transaction:
    """Build a transaction with ``cashback_earned`` fixed at this moment.

    ``usage`` is the status of the month the transaction falls in. When
    editing, pass the stored record as ``replaced``: its own cashback is taken
    out of the total only if it was counted in that same month on that card.
    """
    card = find_card(cards, draft.card_id)
    txn_date = draft.date or (replaced.date if replaced else dt.date.today())
    accumulated = accumulated_cashback(usage, card.card_id)
    if (
        replaced is not None
        and replaced.card_id == card.card_id
        and (replaced.date.year, replaced.date.month) == (txn_date.year, txn_date.month)
    ):
        accumulated = max(0.0, accumulated - replaced.cashback_earned)

    rebate = compute_rebate(card, draft.amount, draft.category, accumulated)
    return Transaction(
        transaction_id=transaction_id or uuid.uuid4().hex,
        date=txn_date,
        title=draft.title,
        amount=draft.amount,
        category=draft.category,
        card_id=card.card_id,
        cashback_earned=rebate.cashback,
    )
