import datetime as dt
import logging

from cardwise.advisory.service import AdvisoryService
from cardwise.advisory.summaries import describe_card_status, describe_history, describe_usage
from cardwise.config import Settings
from cardwise.domain.models import (
    Card,
    CardUsageStatus,
    ShoppingPlan,
    Transaction,
    TransactionDraft,
)
from cardwise.engine.ledger import record_transaction
from cardwise.engine.selectors import rank_cards
from cardwise.engine.strategist import POOLED_SPEND_THRESHOLD, build_plan
from cardwise.engine.usage import calendar_month, derive_usage
from cardwise.repository.catalog_store import CatalogStore
from cardwise.repository.transaction_store import TransactionStore
from cardwise.schemas.requests import PlanRequest, RecommendRequest
from cardwise.schemas.responses import RecommendResponse

logger = logging.getLogger(__name__)


class CashbackOrchestrator:
    def __init__(
        self,
        catalog_store: CatalogStore,
        transaction_store: TransactionStore,
        advisor: AdvisoryService | None = None,
        pooled_threshold: float = POOLED_SPEND_THRESHOLD,
    ):
        self.catalog_store = catalog_store
        self.transaction_store = transaction_store
        self.advisor = advisor
        self.pooled_threshold = pooled_threshold
        self._cards: list[Card] | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "CashbackOrchestrator":
        advisor = AdvisoryService(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            timeout_s=settings.advisory_timeout_s,
        )
        return cls(
            CatalogStore(settings.card_catalog_file),
            TransactionStore(settings.transaction_file),
            advisor=advisor,
            pooled_threshold=settings.pooled_spend_threshold,
        )

    @property
    def cards(self) -> list[Card]:
        if self._cards is None:
            self._cards = self.catalog_store.load_cards()
            logger.info("Loaded %d card(s) from %s", len(self._cards), self.catalog_store.catalog_file)
        return self._cards

    def usage(self, as_of: dt.date | None = None) -> list[CardUsageStatus]:
        as_of = as_of or dt.date.today()
        return derive_usage(
            self.transaction_store.load_all(),
            self.cards,
            calendar_month(as_of.year, as_of.month),
        )

    def recommend(self, request: RecommendRequest) -> RecommendResponse:
        usage = self.usage(request.as_of)
        ranked = rank_cards(self.cards, request.amount, request.category, usage)
        if not ranked:
            raise ValueError("No cards available.")

        return RecommendResponse(
            best_card=ranked[0],
            ranked_cards=ranked,
            card_status=describe_card_status(self.cards, usage),
        )

    async def recommend_with_advice(self, request: RecommendRequest) -> RecommendResponse:
        response = self.recommend(request)
        if request.include_advice and self.advisor is not None:
            advice = await self.advisor.advise_card_usage(
                request.amount, request.category.value, response.card_status
            )
            response = response.model_copy(update={"advice": advice})
        return response

    def plan(self, request: PlanRequest) -> ShoppingPlan:
        return build_plan(request.items, request.bills, self.cards, self.pooled_threshold)

    def save_transaction(
        self, draft: TransactionDraft, transaction_id: str | None = None
    ) -> Transaction:
        replaced = self.transaction_store.get(transaction_id) if transaction_id else None
        txn_date = draft.date or (replaced.date if replaced else dt.date.today())
        transaction = record_transaction(
            draft,
            self.cards,
            self.usage(txn_date),
            transaction_id=transaction_id,
            replaced=replaced,
        )
        if replaced is None:
            self.transaction_store.add(transaction)
        else:
            self.transaction_store.replace(transaction)
        logger.info(
            "Saved transaction %s on %s: cashback %.0f",
            transaction.transaction_id,
            transaction.card_id,
            transaction.cashback_earned,
        )
        return transaction

    def remove_transaction(self, transaction_id: str) -> None:
        self.transaction_store.remove(transaction_id)

    async def analyze_history(self, as_of: dt.date | None = None) -> str | None:
        if self.advisor is None:
            return None
        as_of = as_of or dt.date.today()
        in_month = calendar_month(as_of.year, as_of.month)
        history = [txn for txn in self.transaction_store.load_all() if in_month(txn)]
        return await self.advisor.analyze_history(
            describe_history(history), describe_usage(self.usage(as_of))
        )
