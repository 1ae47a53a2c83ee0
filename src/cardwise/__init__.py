from cardwise.agents.orchestrator import CashbackOrchestrator
from cardwise.domain.errors import InvalidInputError
from cardwise.domain.models import (
    Card,
    CardUsageStatus,
    CardVariant,
    Category,
    FinancialEvent,
    OptimizationResult,
    PlanEntry,
    RebateResult,
    ShoppingItem,
    ShoppingPlan,
    Transaction,
    TransactionDraft,
)
from cardwise.engine.evaluator import compute_rebate
from cardwise.engine.ledger import record_transaction
from cardwise.engine.selectors import rank_cards
from cardwise.engine.strategist import build_plan, classify_bill_category
from cardwise.engine.usage import calendar_month, current_month, derive_usage
from cardwise.repository.catalog_store import CatalogStore
from cardwise.repository.transaction_store import TransactionStore

__all__ = [
    "Card",
    "CardUsageStatus",
    "CardVariant",
    "CashbackOrchestrator",
    "CatalogStore",
    "Category",
    "FinancialEvent",
    "InvalidInputError",
    "OptimizationResult",
    "PlanEntry",
    "RebateResult",
    "ShoppingItem",
    "ShoppingPlan",
    "Transaction",
    "TransactionDraft",
    "TransactionStore",
    "build_plan",
    "calendar_month",
    "classify_bill_category",
    "compute_rebate",
    "current_month",
    "derive_usage",
    "rank_cards",
    "record_transaction",
]
