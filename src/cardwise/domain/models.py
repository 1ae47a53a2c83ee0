import datetime as dt
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(str, Enum):
    SHOPEE = "Shopee"
    ONLINE = "Online"
    VPBANK_NEO = "VPBankNEO"
    SUPERMARKET = "Supermarket"
    MARKET = "Market"
    ELECTRICITY = "Electricity"
    WATER = "Water"
    INTERNET = "Internet"
    PHONE = "Phone"
    CASH = "Cash"
    OTHER = "Other"


class CardVariant(str, Enum):
    SHOPEE_PLATINUM = "shopee_platinum"
    MSB_ONLINE = "msb_online"
    TCB_EVERYDAY = "tcb_everyday"
    S_REWARDS = "s_rewards"
    CASH = "cash"
    GENERIC = "generic"


class CapNote(str, Enum):
    NONE = "none"
    PARTIAL = "partial"
    EXHAUSTED = "exhausted"


class Card(BaseModel):
    model_config = ConfigDict(frozen=True)

    card_id: str
    card_name: str
    bank: str
    card_type: str = ""
    variant: CardVariant = CardVariant.GENERIC
    cashback_rate: float = Field(default=0, ge=0)
    max_cashback: float = Field(default=0, ge=0)
    min_spend: float = Field(default=0, ge=0)
    category: str = ""
    notes: str | None = None
    count: int = 1
    due_day: int = 0


class Transaction(BaseModel):
    transaction_id: str
    date: dt.date
    title: str
    amount: float = Field(gt=0)
    category: Category
    card_id: str
    cashback_earned: float = Field(default=0, ge=0)


class TransactionDraft(BaseModel):
    title: str = Field(min_length=1)
    amount: float = Field(gt=0)
    category: Category
    card_id: str
    date: dt.date | None = None


class CardUsageStatus(BaseModel):
    card_id: str
    card_name: str
    total_spent: float = 0
    total_cashback: float = 0
    min_spend: float = 0
    met_min_spend: bool = True
    remaining_min_spend: float = 0
    # None means the card has no monthly cap.
    remaining_cap: float | None = None
    transaction_count: int = 0


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class ShoppingItem(BaseModel):
    item_id: str
    name: str = Field(min_length=1)
    estimated_price: float = Field(gt=0)
    category: Category
    planned_date: dt.date
    priority: Priority = Priority.MEDIUM
    is_purchased: bool = False


class EventType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class FinancialEvent(BaseModel):
    event_id: str
    title: str = Field(min_length=1)
    amount: float = Field(gt=0)
    date: dt.date
    event_type: EventType = EventType.EXPENSE
    is_completed: bool = False
    recurring: bool = False

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be blank")
        return value


class RebateResult(BaseModel):
    cashback: float
    rate: float
    reason: str
    cap_note: CapNote = CapNote.NONE


class OptimizationResult(BaseModel):
    card_id: str
    card_name: str
    cashback_amount: float
    rate: float
    final_price: float
    reason: str
    is_maxed_out: bool


class PlanEntry(BaseModel):
    item_id: str
    item_name: str
    source: str
    amount: float
    category: Category
    card_id: str | None
    card_name: str | None
    rate: float
    cashback: float
    reason: str
    pooled: bool = False


class ShoppingPlan(BaseModel):
    entries: list[PlanEntry] = Field(default_factory=list)
    total_spend: float = 0
    total_projected_cashback: float = 0
    threshold: float = 0
    threshold_reached: bool = False
    summary: str = ""

    def entry_for(self, item_id: str) -> PlanEntry | None:
        return next((entry for entry in self.entries if entry.item_id == item_id), None)


class SpendingSummary(BaseModel):
    total_spent: float = 0
    total_cashback: float = 0
    effective_rate: float = 0
    by_category: dict[str, dict[str, float]] = Field(default_factory=dict)
    by_day: dict[dt.date, float] = Field(default_factory=dict)


class CashFlowSummary(BaseModel):
    pending_income: float = 0
    pending_expense: float = 0
    events: list[FinancialEvent] = Field(default_factory=list)
