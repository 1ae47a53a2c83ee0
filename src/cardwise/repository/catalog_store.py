import json
from collections import Counter
from pathlib import Path

from cardwise.domain.errors import InvalidInputError
from cardwise.domain.models import Card


class CatalogStore:
    def __init__(self, catalog_file: str):
        self.catalog_file = Path(catalog_file)

    def load_cards(self) -> list[Card]:
        if not self.catalog_file.exists():
            raise FileNotFoundError(f"Card catalog not found: {self.catalog_file}")

        with self.catalog_file.open("r", encoding="utf-8") as fh:
            data = json.load(fh)

        if not isinstance(data, list) or not data:
            raise InvalidInputError(f"Card catalog must be a non-empty list: {self.catalog_file}")

        cards = [Card.model_validate(item) for item in data]
        # Usage and rankings are keyed by card_id, so ids must be unique.
        duplicates = sorted(card_id for card_id, n in Counter(c.card_id for c in cards).items() if n > 1)
        if duplicates:
            raise InvalidInputError(f"Duplicate card ids in {self.catalog_file}: {', '.join(duplicates)}")
        return cards
