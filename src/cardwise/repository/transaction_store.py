import json
import logging
from pathlib import Path

from pydantic import TypeAdapter

from cardwise.domain.errors import InvalidInputError
from cardwise.domain.models import Transaction

logger = logging.getLogger(__name__)

_TRANSACTIONS = TypeAdapter(list[Transaction])


class TransactionStore:
    """JSON file holding the transaction history, newest last."""

    def __init__(self, transaction_file: str):
        self.transaction_file = Path(transaction_file)

    def load_all(self) -> list[Transaction]:
        if not self.transaction_file.exists():
            return []
        return _TRANSACTIONS.validate_json(self.transaction_file.read_bytes())

    def get(self, transaction_id: str) -> Transaction:
        for txn in self.load_all():
            if txn.transaction_id == transaction_id:
                return txn
        raise InvalidInputError(f"Unknown transaction id: {transaction_id}")

    def add(self, transaction: Transaction) -> Transaction:
        rows = self.load_all()
        rows.append(transaction)
        self._write(rows)
        return transaction

    def replace(self, transaction: Transaction) -> Transaction:
        rows = self.load_all()
        for index, txn in enumerate(rows):
            if txn.transaction_id == transaction.transaction_id:
                rows[index] = transaction
                self._write(rows)
                return transaction
        raise InvalidInputError(f"Unknown transaction id: {transaction.transaction_id}")

    def remove(self, transaction_id: str) -> None:
        rows = self.load_all()
        kept = [txn for txn in rows if txn.transaction_id != transaction_id]
        if len(kept) == len(rows):
            raise InvalidInputError(f"Unknown transaction id: {transaction_id}")
        self._write(kept)

    def clear(self) -> None:
        self._write([])

    def _write(self, rows: list[Transaction]) -> None:
        self.transaction_file.parent.mkdir(parents=True, exist_ok=True)
        payload = [row.model_dump(mode="json") for row in rows]
        with self.transaction_file.open("w", encoding="utf-8") as fh:
            json.dump(payload, fh, ensure_ascii=False, indent=2)
        logger.debug("Wrote %d transaction(s) to %s", len(rows), self.transaction_file)
